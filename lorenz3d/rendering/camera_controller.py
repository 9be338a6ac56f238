"""
Orbit camera controller for the Lorenz 3D view.

This module turns raw pointer samples into orbit, pan and zoom motions
around a movable target point.
"""

from __future__ import annotations

from dataclasses import dataclass

from .camera import (
    WORLD_UP,
    Vec3,
    clamp_distance,
    clamp_pitch,
    compute_camera_basis,
    compute_camera_position,
    vec_add,
    vec_scale,
)

Point2 = tuple[float, float]


@dataclass
class PointerState:
    """
    Pointer sample for one frame.

    Coordinates are window pixels with the origin at the top-left and y
    growing downward.

    Attributes:
        x: Pointer x position
        y: Pointer y position
        left: Primary button held
        right: Secondary button held
        scroll_y: Wheel delta accumulated since the previous frame
    """
    x: float = 0.0
    y: float = 0.0
    left: bool = False
    right: bool = False
    scroll_y: float = 0.0

    @property
    def position(self) -> Point2:
        return (self.x, self.y)

    def end_frame(self) -> None:
        """Drop the wheel delta once the frame has consumed it."""
        self.scroll_y = 0.0


class GestureTracker:
    """
    Drag tracker for one pointer button.

    Idle while `last` is None. The first sample after a press only records a
    baseline, so re-pressing elsewhere never produces a jump.
    """

    def __init__(self) -> None:
        self.last: Point2 | None = None

    @property
    def dragging(self) -> bool:
        return self.last is not None

    def sample(self, held: bool, position: Point2) -> Point2 | None:
        """
        Feed the button state for this frame.

        Returns:
            (dx, dy) since the previous sample while dragging, else None
        """
        if not held:
            self.last = None
            return None
        last = self.last
        self.last = position
        if last is None:
            return None
        return (position[0] - last[0], position[1] - last[1])

    def reset(self) -> None:
        self.last = None


class OrbitCamera:
    """
    Spherical camera orbiting a target.

    Left drag orbits, right drag pans the target in the view plane, the
    wheel zooms. The eye position is always derived from (distance, yaw,
    pitch, target) and never stored.
    """

    def __init__(
        self,
        *,
        distance: float = 100.0,
        yaw: float = 0.0,
        pitch: float = 0.0,
        target: Vec3 = (0.0, 0.0, 0.0),
        sensitivity: float = 0.005,
        pan_sensitivity: float = 0.001,
        zoom_gain: float = 5.0,
        min_distance: float = 1.0,
        max_distance: float = 200.0,
        pitch_margin: float = 0.1,
    ):
        self.sensitivity = sensitivity
        self.pan_sensitivity = pan_sensitivity
        self.zoom_gain = zoom_gain
        self.min_distance = min_distance
        self.max_distance = max_distance
        self.pitch_margin = pitch_margin
        self._defaults = (distance, yaw, pitch, tuple(target))

        self.orbit_gesture = GestureTracker()
        self.pan_gesture = GestureTracker()
        self.reset()

    @classmethod
    def from_params(cls, params) -> "OrbitCamera":
        """Build a camera from the camera_* fields of LorenzParams."""
        return cls(
            distance=params.camera_distance,
            yaw=params.camera_yaw,
            pitch=params.camera_pitch,
            sensitivity=params.orbit_sensitivity,
            pan_sensitivity=params.pan_sensitivity,
            zoom_gain=params.zoom_gain,
            min_distance=params.camera_min_distance,
            max_distance=params.camera_max_distance,
            pitch_margin=params.pitch_margin,
        )

    def reset(self) -> None:
        """Restore the initial view and drop any drag in progress."""
        distance, yaw, pitch, target = self._defaults
        self.distance = clamp_distance(distance, self.min_distance, self.max_distance)
        self.yaw = float(yaw)
        self.pitch = clamp_pitch(pitch, self.pitch_margin)
        self.target: Vec3 = target  # type: ignore[assignment]
        self.cancel_gestures()

    def cancel_gestures(self) -> None:
        """Forget drag baselines so the next held sample starts a fresh gesture."""
        self.orbit_gesture.reset()
        self.pan_gesture.reset()

    def update(self, pointer: PointerState) -> None:
        """
        Apply one frame of pointer input.

        Args:
            pointer: Current pointer sample (skip the call while the pointer is over UI)
        """
        delta = self.orbit_gesture.sample(pointer.left, pointer.position)
        if delta is not None:
            self.orbit(*delta)

        delta = self.pan_gesture.sample(pointer.right, pointer.position)
        if delta is not None:
            self.pan(*delta)

        self.zoom(pointer.scroll_y)

    def orbit(self, dx: float, dy: float) -> None:
        self.yaw -= dx * self.sensitivity
        self.pitch = clamp_pitch(self.pitch + dy * self.sensitivity, self.pitch_margin)

    def pan(self, dx: float, dy: float) -> None:
        """Shift the target in the view plane, scaled by distance."""
        _forward, right, up = compute_camera_basis(self.eye_position(), self.target)
        scale = self.pan_sensitivity * self.distance
        shift = vec_add(vec_scale(right, -dx * scale), vec_scale(up, dy * scale))
        self.target = vec_add(self.target, shift)

    def zoom(self, scroll_y: float) -> None:
        self.distance = clamp_distance(
            self.distance - scroll_y * self.zoom_gain,
            self.min_distance,
            self.max_distance,
        )

    def eye_position(self) -> Vec3:
        return compute_camera_position(self.yaw, self.pitch, self.distance, self.target)

    def view_transform(self) -> tuple[Vec3, Vec3, Vec3]:
        """
        Get the view for the renderer.

        Returns:
            (eye, target, up) tuple
        """
        return self.eye_position(), self.target, WORLD_UP
