"""
Control panel overlay for the Lorenz 3D visualizer.

The panel is immediate-mode: every frame it reads the pointer sample,
writes slider values straight into the params record and reports which
buttons were clicked. Layout and hit-testing are plain arithmetic so they
can run without a window; only PanelView touches pyglet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from lorenz3d.rendering.camera_controller import PointerState
from lorenz3d.utils.config_groups import BUTTONS, PARAM_HINTS, SLIDERS, SliderSpec, slider_for_key

Rect = tuple[float, float, float, float]  # x, y (top-left origin), width, height


# =============================================================================
# Layout
# =============================================================================

@dataclass
class PanelLayout:
    """
    Panel geometry in window pixels (top-left origin).

    Attributes:
        x: Left edge of the panel
        y: Top edge of the panel
        width: Panel width
        pad: Inner padding
        row_h: Height of one slider or button row
        row_gap: Vertical gap between rows
        track_w: Width of a slider track
    """
    x: float = 10.0
    y: float = 10.0
    width: float = 250.0
    pad: float = 8.0
    row_h: float = 18.0
    row_gap: float = 4.0
    track_w: float = 140.0


def _contains(rect: Rect, x: float, y: float) -> bool:
    rx, ry, rw, rh = rect
    return rx <= x <= rx + rw and ry <= y <= ry + rh


def format_value(spec: SliderSpec, value: float) -> str:
    if spec.kind == "int":
        return f"{int(value)}"
    return f"{float(value):.3f}"


# =============================================================================
# Control Panel
# =============================================================================

class ControlPanel:
    """
    Sliders and buttons bound to a LorenzParams record.

    A slider grabs the pointer on press and keeps following it until the
    button is released, even outside the panel. A button fires on release
    when the press started on it and the pointer is still over it.
    """

    def __init__(
        self,
        sliders: Sequence[SliderSpec] = SLIDERS,
        buttons: Sequence[tuple[str, str]] = BUTTONS,
        layout: PanelLayout | None = None,
    ):
        self.sliders = tuple(sliders)
        self.buttons = tuple(buttons)
        self.layout = layout or PanelLayout()
        self.active_slider: str | None = None
        self.pressed_button: str | None = None
        self._prev_left = False
        self.pointer_pos: tuple[float, float] = (-1.0, -1.0)

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def _row_y(self, row: int) -> float:
        lay = self.layout
        return lay.y + lay.pad + row * (lay.row_h + lay.row_gap)

    def panel_rect(self) -> Rect:
        lay = self.layout
        rows = len(self.sliders) + len(self.buttons)
        height = 2 * lay.pad + rows * lay.row_h + max(0, rows - 1) * lay.row_gap
        return lay.x, lay.y, lay.width, height

    def slider_rect(self, index: int) -> Rect:
        lay = self.layout
        return lay.x + lay.pad, self._row_y(index), lay.track_w, lay.row_h

    def button_rect(self, index: int) -> Rect:
        lay = self.layout
        row = len(self.sliders) + index
        return lay.x + lay.pad, self._row_y(row), lay.width - 2 * lay.pad, lay.row_h

    def is_mouse_over(self, x: float, y: float) -> bool:
        return _contains(self.panel_rect(), x, y)

    def wants_pointer(self, x: float, y: float) -> bool:
        """True while the pointer is over the panel or a panel drag is active."""
        return self.is_mouse_over(x, y) or self.active_slider is not None or self.pressed_button is not None

    def hit_test(self, x: float, y: float) -> tuple[str, str] | None:
        """
        Find the widget under a point.

        Returns:
            ("slider", key), ("button", action) or None
        """
        for i, spec in enumerate(self.sliders):
            if _contains(self.slider_rect(i), x, y):
                return "slider", spec.key
        for i, (_label, action) in enumerate(self.buttons):
            if _contains(self.button_rect(i), x, y):
                return "button", action
        return None

    # -------------------------------------------------------------------------
    # Slider mapping
    # -------------------------------------------------------------------------

    def _slider(self, key: str) -> tuple[int, SliderSpec]:
        spec = slider_for_key(key, self.sliders)
        if spec is None:
            raise KeyError(key)
        return self.sliders.index(spec), spec

    def hint_for(self, x: float, y: float) -> str | None:
        """Hint of the slider being dragged, else of the slider under the pointer."""
        key = self.active_slider
        if key is None:
            hit = self.hit_test(x, y)
            if hit is not None and hit[0] == "slider":
                key = hit[1]
        if key is None:
            return None
        return PARAM_HINTS.get(key)

    def value_from_x(self, key: str, x: float) -> float:
        i, spec = self._slider(key)
        tx, _ty, tw, _th = self.slider_rect(i)
        t = max(0.0, min(1.0, (x - tx) / tw))
        value = spec.minimum + t * (spec.maximum - spec.minimum)
        if spec.kind == "int":
            return int(round(value))
        return value

    def x_from_value(self, key: str, value: float) -> float:
        i, spec = self._slider(key)
        tx, _ty, tw, _th = self.slider_rect(i)
        span = spec.maximum - spec.minimum
        t = 0.0 if span == 0 else (float(value) - spec.minimum) / span
        return tx + max(0.0, min(1.0, t)) * tw

    # -------------------------------------------------------------------------
    # Frame processing
    # -------------------------------------------------------------------------

    def process(self, params: Any, pointer: PointerState) -> list[str]:
        """
        Run the panel for one frame.

        Args:
            params: Record whose attributes the sliders write
            pointer: Current pointer sample

        Returns:
            Actions of the buttons clicked this frame
        """
        x, y = pointer.x, pointer.y
        self.pointer_pos = (x, y)
        pressed = pointer.left and not self._prev_left
        released = self._prev_left and not pointer.left
        self._prev_left = pointer.left
        actions: list[str] = []

        if pressed:
            hit = self.hit_test(x, y)
            if hit is not None:
                kind, name = hit
                if kind == "slider":
                    self.active_slider = name
                else:
                    self.pressed_button = name

        if self.active_slider is not None and pointer.left:
            setattr(params, self.active_slider, self.value_from_x(self.active_slider, x))

        if released:
            if self.pressed_button is not None and self.hit_test(x, y) == ("button", self.pressed_button):
                actions.append(self.pressed_button)
            self.active_slider = None
            self.pressed_button = None

        return actions


# =============================================================================
# Pyglet View
# =============================================================================

PANEL_COLOR = (40, 40, 48, 200)
PANEL_BORDER = (170, 190, 210)
TRACK_COLOR = (90, 90, 100)
HANDLE_COLOR = (235, 240, 255)
BUTTON_COLOR = (70, 70, 82)
BUTTON_ACTIVE_COLOR = (110, 110, 130)
TEXT_COLOR = (235, 240, 255, 245)


class PanelView:
    """
    Draws a ControlPanel with pyglet shapes and labels.

    Shapes are created on first draw and repositioned every frame, since
    window height changes flip the top-left layout into GL coordinates.
    """

    def __init__(self, panel: ControlPanel):
        self.panel = panel
        self._shapes: dict[str, Any] | None = None

    def _create(self) -> dict[str, Any]:
        try:
            import pyglet  # type: ignore
        except ImportError:
            raise RuntimeError("Missing dependency: install pyglet (pip install pyglet).")

        shapes: dict[str, Any] = {
            "panel": pyglet.shapes.BorderedRectangle(
                0, 0, 10, 10, border=1, color=PANEL_COLOR, border_color=PANEL_BORDER
            ),
            "tracks": [],
            "handles": [],
            "slider_labels": [],
            "buttons": [],
            "button_labels": [],
            "hint": pyglet.text.Label("", anchor_x="left", anchor_y="top", font_size=9, color=TEXT_COLOR),
        }
        for _spec in self.panel.sliders:
            shapes["tracks"].append(pyglet.shapes.Rectangle(0, 0, 1, 4, color=TRACK_COLOR))
            shapes["handles"].append(pyglet.shapes.Rectangle(0, 0, 6, 14, color=HANDLE_COLOR))
            shapes["slider_labels"].append(
                pyglet.text.Label("", anchor_x="left", anchor_y="center", font_size=10, color=TEXT_COLOR)
            )
        for label, _action in self.panel.buttons:
            shapes["buttons"].append(pyglet.shapes.Rectangle(0, 0, 1, 1, color=BUTTON_COLOR))
            shapes["button_labels"].append(
                pyglet.text.Label(label, anchor_x="center", anchor_y="center", font_size=10, color=TEXT_COLOR)
            )
        return shapes

    def draw(self, params: Any, window_height: int) -> None:
        if self._shapes is None:
            self._shapes = self._create()
        s = self._shapes
        panel = self.panel

        def flip(rect: Rect) -> Rect:
            x, y, w, h = rect
            return x, window_height - y - h, w, h

        px, py, pw, ph = flip(panel.panel_rect())
        s["panel"].x, s["panel"].y, s["panel"].width, s["panel"].height = px, py, pw, ph
        s["panel"].draw()

        for i, spec in enumerate(panel.sliders):
            tx, ty, tw, th = flip(panel.slider_rect(i))
            mid = ty + th / 2.0
            track = s["tracks"][i]
            track.x, track.y, track.width = tx, mid - 2, tw
            track.draw()

            value = getattr(params, spec.key)
            handle = s["handles"][i]
            handle.x = panel.x_from_value(spec.key, value) - handle.width / 2.0
            handle.y = mid - handle.height / 2.0
            handle.draw()

            label = s["slider_labels"][i]
            label.text = f"{spec.label}  {format_value(spec, value)}"
            label.x = tx + tw + panel.layout.pad
            label.y = mid
            label.draw()

        for i, (_label, action) in enumerate(panel.buttons):
            bx, by, bw, bh = flip(panel.button_rect(i))
            button = s["buttons"][i]
            button.x, button.y, button.width, button.height = bx, by, bw, bh
            button.color = BUTTON_ACTIVE_COLOR if panel.pressed_button == action else BUTTON_COLOR
            button.draw()
            label = s["button_labels"][i]
            label.x = bx + bw / 2.0
            label.y = by + bh / 2.0
            label.draw()

        hint = panel.hint_for(*panel.pointer_pos)
        if hint:
            # Shown just under the panel.
            hint_label = s["hint"]
            hint_label.text = f"Hint: {hint}"
            hint_label.x = px + panel.layout.pad
            hint_label.y = py - panel.layout.pad
            hint_label.draw()
