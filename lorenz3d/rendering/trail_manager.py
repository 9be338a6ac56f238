"""
Trail projection for 3D line rendering.

This module turns the simulator's point history into line segments with
age-based opacity and speed-based color, either as records or as flat
vertex buffers for a GL_LINES vertex list.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import pairwise
from typing import Iterable, Sequence

import numpy as np

from .color_mapper import (
    hsv_to_rgb_batch,
    opacities_batch,
    segment_color,
    segment_opacity,
    speed_hues_batch,
)

Point3 = tuple[float, float, float]


# =============================================================================
# Segment Records
# =============================================================================

@dataclass(frozen=True, slots=True)
class TrailSegment:
    """
    One drawable piece of the trail.

    Attributes:
        start: Older endpoint
        end: Newer endpoint
        color: (r, g, b) floats in [0, 1]
        opacity: Alpha in [0, 1)
    """
    start: Point3
    end: Point3
    color: tuple[float, float, float]
    opacity: float


def build_trail_segments(points: Sequence[Point3]) -> list[TrailSegment]:
    """
    Project a trail into segments, oldest first.

    Args:
        points: Trail points in chronological order

    Returns:
        len(points) - 1 segments (none for fewer than two points)
    """
    n = len(points)
    return [
        TrailSegment(a, b, segment_color(a, b), segment_opacity(i, n))
        for i, (a, b) in enumerate(pairwise(points))
    ]


# =============================================================================
# Trail Manager
# =============================================================================

class TrailManager:
    """
    Builds vertex data for the trail every frame.

    Both opacity and hue depend on the trail length and content, so the
    buffers are rebuilt from scratch on each call.
    """

    def __init__(self, alpha: float = 1.0):
        """
        Initialize the trail manager.

        Args:
            alpha: Global opacity multiplier (0-1)
        """
        self.alpha = max(0.0, min(1.0, float(alpha)))
        self.segment_count = 0

    def get_trail_data(self, points: Iterable[Point3]) -> tuple[np.ndarray, np.ndarray]:
        """
        Get trail vertex data for rendering.

        Args:
            points: Trail points in chronological order

        Returns:
            (xyz, rgba): float32 positions (6 per segment) and uint8 colors
            (8 per segment), both flat
        """
        pts = np.asarray(list(points), dtype=np.float64).reshape(-1, 3)
        n = len(pts)
        if n < 2:
            self.segment_count = 0
            return np.zeros(0, dtype=np.float32), np.zeros(0, dtype=np.uint8)

        seg = n - 1
        xyz = np.empty((seg, 2, 3), dtype=np.float32)
        with np.errstate(over="ignore", invalid="ignore"):
            xyz[:, 0, :] = pts[:-1]
            xyz[:, 1, :] = pts[1:]

        rgb = hsv_to_rgb_batch(speed_hues_batch(pts))
        alpha = opacities_batch(n) * self.alpha

        rgba = np.empty((seg, 2, 4), dtype=np.float64)
        rgba[:, :, :3] = rgb[:, None, :]
        rgba[:, :, 3] = alpha[:, None]
        rgba8 = np.clip(np.rint(rgba * 255.0), 0, 255).astype(np.uint8)

        self.segment_count = seg
        return xyz.ravel(), rgba8.ravel()
