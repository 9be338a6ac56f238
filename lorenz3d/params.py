from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_SIGMA = 10.0
DEFAULT_BETA = 8.0 / 3.0
DEFAULT_RHO = 28.0


@dataclass(slots=True)
class LorenzParams:
    width: int = 1100
    height: int = 720
    background: tuple[int, int, int] = (199, 199, 199)

    sigma: float = DEFAULT_SIGMA
    beta: float = DEFAULT_BETA
    rho: float = DEFAULT_RHO
    dt: float = 0.005
    tail_length: int = 5000
    steps_per_frame: int = 10
    start_point: tuple[float, float, float] = (0.0, 1.0, 1.05)

    camera_distance: float = 100.0
    camera_yaw: float = 0.0
    camera_pitch: float = 0.0
    camera_min_distance: float = 1.0
    camera_max_distance: float = 200.0
    orbit_sensitivity: float = 0.005
    pan_sensitivity: float = 0.001
    zoom_gain: float = 5.0
    pitch_margin: float = 0.1  # keeps pitch strictly inside +-pi/2

    grid_slices: int = 12
    grid_spacing: float = 10.0
    line_width: float = 1.0
    mac_compat: bool = True  # pyglet options for macOS (no MSAA, shadow window off)
    target_fps: int = 60

    def clamp(self) -> "LorenzParams":
        self.width = max(320, int(self.width))
        self.height = max(240, int(self.height))
        self.background = tuple(max(0, min(255, int(c))) for c in self.background)[:3]  # type: ignore[assignment]

        # Coefficients are free; the panel sliders bound them during interaction.
        self.sigma = float(self.sigma)
        self.beta = float(self.beta)
        self.rho = float(self.rho)
        self.dt = min(0.1, max(1e-6, float(self.dt)))
        self.tail_length = max(1, min(20000, int(self.tail_length)))
        self.steps_per_frame = max(1, min(100, int(self.steps_per_frame)))
        x, y, z = self.start_point
        self.start_point = (float(x), float(y), float(z))

        self.camera_min_distance = max(0.01, float(self.camera_min_distance))
        self.camera_max_distance = max(self.camera_min_distance, float(self.camera_max_distance))
        self.camera_distance = min(
            self.camera_max_distance, max(self.camera_min_distance, float(self.camera_distance))
        )
        self.pitch_margin = min(math.pi / 2.0 - 1e-3, max(1e-3, float(self.pitch_margin)))
        max_pitch = math.pi / 2.0 - self.pitch_margin
        self.camera_pitch = max(-max_pitch, min(max_pitch, float(self.camera_pitch)))
        self.camera_yaw = float(self.camera_yaw)
        self.orbit_sensitivity = max(0.0, float(self.orbit_sensitivity))
        self.pan_sensitivity = max(0.0, float(self.pan_sensitivity))
        self.zoom_gain = max(0.0, float(self.zoom_gain))

        self.grid_slices = max(2, min(200, int(self.grid_slices)))
        self.grid_spacing = max(0.1, float(self.grid_spacing))
        self.line_width = min(6.0, max(1.0, float(self.line_width)))
        self.mac_compat = bool(self.mac_compat)
        self.target_fps = max(10, int(self.target_fps))
        return self

    def validate(self) -> list[str]:
        from lorenz3d.utils.config_groups import SLIDERS

        warnings: list[str] = []

        for spec in SLIDERS:
            value = float(getattr(self, spec.key))
            if not (spec.minimum <= value <= spec.maximum):
                warnings.append(
                    f"{spec.key}={value:g} is outside the slider range "
                    f"[{spec.minimum:g}, {spec.maximum:g}]; the panel will clamp it when dragged."
                )

        if self.dt > 0.02:
            warnings.append(f"dt={self.dt:g} is large for explicit Euler; the trajectory may diverge.")
        if self.tail_length < 2:
            warnings.append("tail_length < 2 leaves no segment to draw.")
        if self.tail_length < self.steps_per_frame:
            warnings.append("tail_length < steps_per_frame: most points are evicted in the frame they are computed.")

        return warnings

    def reset_coefficients(self) -> None:
        from lorenz3d.utils.config_groups import DEFAULT_COEFFICIENTS

        for key, value in DEFAULT_COEFFICIENTS.items():
            setattr(self, key, value)

    @classmethod
    def load(cls, path: str | Path) -> "LorenzParams":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("The params file must contain a JSON object.")
        # JSON has no tuples; lists are accepted for the vector fields.
        for key in ("background", "start_point"):
            if key in data and isinstance(data[key], list):
                data[key] = tuple(data[key])
        filtered: dict[str, Any] = {k: v for k, v in data.items() if k in cls.__annotations__}
        return cls(**filtered).clamp()
