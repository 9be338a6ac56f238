"""
Camera geometry for the orbital 3D view.

This module provides the small vector helpers and the spherical-coordinate
math used by the orbit camera: eye position, view basis and clamping.
"""

from __future__ import annotations

import math

Vec3 = tuple[float, float, float]

WORLD_UP: Vec3 = (0.0, 1.0, 0.0)


# =============================================================================
# Vector Helpers
# =============================================================================

def vec_add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vec_sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vec_scale(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(a: Vec3) -> float:
    return math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def normalize(a: Vec3) -> Vec3:
    """
    Scale a vector to unit length.

    Near-zero vectors are divided by 1e-6 instead of their length, the same
    guard the basis computation relies on.
    """
    n = max(1e-6, length(a))
    return (a[0] / n, a[1] / n, a[2] / n)


# =============================================================================
# Orbital Camera Math
# =============================================================================

def compute_camera_position(
    yaw: float,
    pitch: float,
    distance: float,
    target: Vec3,
) -> Vec3:
    """
    Compute the eye position from orbital parameters.

    Args:
        yaw: Horizontal angle in radians (0 looks down -Z from +Z)
        pitch: Vertical angle in radians
        distance: Distance from target
        target: Point the camera looks at

    Returns:
        (x, y, z) eye position
    """
    cp = math.cos(pitch)
    offset = (
        distance * cp * math.sin(yaw),
        distance * math.sin(pitch),
        distance * cp * math.cos(yaw),
    )
    return vec_add(target, offset)


def compute_camera_basis(
    eye: Vec3,
    target: Vec3,
    world_up: Vec3 = WORLD_UP,
) -> tuple[Vec3, Vec3, Vec3]:
    """
    Compute an orthonormal view basis.

    Args:
        eye: Camera position
        target: Look-at point
        world_up: Fixed world up vector

    Returns:
        (forward, right, up) unit vectors
    """
    forward = normalize(vec_sub(target, eye))
    right = normalize(cross(forward, world_up))
    up = normalize(cross(right, forward))
    return forward, right, up


def clamp_distance(
    distance: float,
    min_distance: float,
    max_distance: float,
) -> float:
    """Clamp camera distance to [min_distance, max_distance]."""
    return max(float(min_distance), min(float(max_distance), float(distance)))


def clamp_pitch(pitch: float, margin: float = 0.1) -> float:
    """
    Clamp pitch away from the poles.

    Args:
        pitch: Pitch angle in radians
        margin: Distance kept from +-pi/2

    Returns:
        Pitch in [-(pi/2 - margin), pi/2 - margin]
    """
    max_pitch = math.pi / 2.0 - margin
    return max(-max_pitch, min(max_pitch, float(pitch)))
