"""
Control panel layout constants for the Lorenz 3D visualizer.

This module centralizes which parameters are exposed on the panel,
their slider bounds, and the actions bound to panel buttons.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from lorenz3d.params import DEFAULT_BETA, DEFAULT_RHO, DEFAULT_SIGMA


# =============================================================================
# Default Coefficients - Restored by "reset params"
# =============================================================================

DEFAULT_COEFFICIENTS = {
    "sigma": DEFAULT_SIGMA,
    "beta": DEFAULT_BETA,
    "rho": DEFAULT_RHO,
}


# =============================================================================
# Sliders
# =============================================================================

@dataclass(frozen=True, slots=True)
class SliderSpec:
    """
    Description of one panel slider.

    Attributes:
        key: LorenzParams attribute bound to the slider
        label: Text drawn next to the track
        minimum: Lower bound of the track
        maximum: Upper bound of the track
        kind: "float" or "int"
    """
    key: str
    label: str
    minimum: float
    maximum: float
    kind: str = "float"


SLIDERS = (
    SliderSpec("sigma", "sigma", -20.0, 20.0),
    SliderSpec("beta", "beta", -20.0, 20.0),
    SliderSpec("rho", "rho", -20.0, 40.0),
    SliderSpec("tail_length", "tail length", 2, 20000, kind="int"),
    SliderSpec("steps_per_frame", "steps/frame", 1, 100, kind="int"),
)


# =============================================================================
# Buttons - label -> action name dispatched by the app
# =============================================================================

BUTTONS = (
    ("reset params", "reset_params"),
    ("reset position", "reset_position"),
)


# =============================================================================
# Hints
# =============================================================================

PARAM_HINTS = {
    "sigma": "Prandtl number: coupling between x and y",
    "beta": "Geometric factor damping z",
    "rho": "Rayleigh number: chaotic above ~24.74",
    "tail_length": "Maximum number of trail points kept",
    "steps_per_frame": "Euler steps computed every frame",
}


def slider_for_key(key: str, sliders: Sequence[SliderSpec] = SLIDERS) -> SliderSpec | None:
    """Return the slider bound to a params attribute, if any."""
    for spec in sliders:
        if spec.key == key:
            return spec
    return None
