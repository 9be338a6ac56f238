"""
Color mapping for trail segments.

Segments fade with age and shift hue with local trajectory speed. Scalar
helpers describe one segment; the batch helpers produce the same values
for a whole trail at once.
"""

from __future__ import annotations

import colorsys
import math

import numpy as np


# =============================================================================
# Defaults
# =============================================================================

SPEED_CLAMP = 2.0   # segment length mapped to the far end of the hue range
SATURATION = 1.0
VALUE = 1.0


# =============================================================================
# Scalar Helpers
# =============================================================================

def segment_opacity(index: int, point_count: int) -> float:
    """
    Age-based opacity of a trail segment.

    Args:
        index: Segment index counted from the oldest segment
        point_count: Number of points in the trail

    Returns:
        index / point_count (0.0 for an empty trail)
    """
    if point_count <= 0:
        return 0.0
    return float(index) / float(point_count)


def speed_fraction(
    a: tuple[float, float, float],
    b: tuple[float, float, float],
) -> float:
    """Segment length clamped to [0, SPEED_CLAMP] and scaled to [0, 1]."""
    d = math.dist(a, b)
    return max(0.0, min(SPEED_CLAMP, d)) / SPEED_CLAMP


def speed_hue(
    a: tuple[float, float, float],
    b: tuple[float, float, float],
) -> float:
    return 1.0 - speed_fraction(a, b)


def hsv_color(hue: float, saturation: float = SATURATION, value: float = VALUE) -> tuple[float, float, float]:
    """HSV to (r, g, b) floats in [0, 1]."""
    return colorsys.hsv_to_rgb(hue, saturation, value)


def segment_color(
    a: tuple[float, float, float],
    b: tuple[float, float, float],
) -> tuple[float, float, float]:
    return hsv_color(speed_hue(a, b))


# =============================================================================
# Batch Helpers
# =============================================================================

def hsv_to_rgb_batch(h: np.ndarray, s: float = SATURATION, v: float = VALUE) -> np.ndarray:
    """Vectorized HSV to RGB for a 1D hue array. Returns (N, 3) float32."""
    h6 = (np.asarray(h, dtype=np.float64) * 6.0) % 6.0
    idx = h6.astype(np.int32)
    f = h6 - idx
    p = np.full_like(f, v * (1.0 - s))
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))
    vv = np.full_like(f, v)

    rgb = np.zeros((len(h6), 3), dtype=np.float32)
    for mask_val, r_src, g_src, b_src in (
        (0, vv, t, p),
        (1, q, vv, p),
        (2, p, vv, t),
        (3, p, q, vv),
        (4, t, p, vv),
        (5, vv, p, q),
    ):
        m = idx == mask_val
        if np.any(m):
            rgb[m, 0] = r_src[m]
            rgb[m, 1] = g_src[m]
            rgb[m, 2] = b_src[m]
    return rgb


def speed_hues_batch(points: np.ndarray) -> np.ndarray:
    """Hue per segment of an (N, 3) point array, shape (N - 1,)."""
    if len(points) < 2:
        return np.zeros(0, dtype=np.float64)
    with np.errstate(invalid="ignore", over="ignore"):
        lengths = np.linalg.norm(np.diff(points, axis=0), axis=1)
    # Diverged segments count as fastest, same as the scalar path.
    lengths = np.where(np.isnan(lengths), SPEED_CLAMP, lengths)
    return 1.0 - np.clip(lengths, 0.0, SPEED_CLAMP) / SPEED_CLAMP


def opacities_batch(point_count: int) -> np.ndarray:
    """Opacity per segment for a trail of point_count points."""
    if point_count < 2:
        return np.zeros(0, dtype=np.float64)
    return np.arange(point_count - 1, dtype=np.float64) / float(point_count)
