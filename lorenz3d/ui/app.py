from __future__ import annotations

import math
import sys
from pathlib import Path

import numpy as np

from lorenz3d.core.sim import LorenzSim
from lorenz3d.params import LorenzParams
from lorenz3d.rendering.camera import Vec3
from lorenz3d.rendering.camera_controller import OrbitCamera, PointerState
from lorenz3d.rendering.drawing import create_grid_colors, create_grid_vertices
from lorenz3d.rendering.pyglet_renderer import run_pyglet
from lorenz3d.rendering.trail_manager import TrailManager
from lorenz3d.ui.ui_overlay import ControlPanel, PanelView

TITLE = "Lorenz attractor"


class LorenzApp:
    def __init__(self, params: LorenzParams | None = None, params_path: str | Path | None = None) -> None:
        self.params_path = Path(params_path) if params_path is not None else None
        self.params = params if params is not None else self._load_initial_params()
        self.sim = LorenzSim(self.params)
        self.camera = OrbitCamera.from_params(self.params)
        self.panel = ControlPanel()
        self.trails = TrailManager()

        self._running = True
        self._diverged = False

    def _load_initial_params(self) -> LorenzParams:
        params = LorenzParams().clamp()
        if self.params_path is not None:
            try:
                params = LorenzParams.load(self.params_path)
            except (OSError, ValueError, TypeError) as e:
                print(f"[params] load failed: {e}", file=sys.stderr)
        for warning in params.validate():
            print(f"[params] {warning}")
        return params

    def run(self) -> None:
        panel_view = PanelView(self.panel)
        p = self.params
        print(
            f"[app] {TITLE}: sigma={p.sigma:g} beta={p.beta:g} rho={p.rho:g} dt={p.dt:g} "
            f"tail={p.tail_length} steps/frame={p.steps_per_frame} fps={p.target_fps}"
        )
        run_pyglet(
            width=self.params.width,
            height=self.params.height,
            background_rgb=tuple(self.params.background),  # type: ignore[arg-type]
            process_input=self.process_input,
            get_view=self.get_view,
            step_simulation=self.step,
            get_trail_data=self.get_trail_data,
            get_grid_data=self.get_grid_data,
            draw_overlay=lambda window: panel_view.draw(self.params, window.height),
            on_key=self._on_key,
            get_caption=self._get_caption,
            get_line_width=lambda: float(self.params.line_width),
            target_fps=self.params.target_fps,
            title=TITLE,
            mac_compat=self.params.mac_compat,
        )

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------

    def process_input(self, pointer: PointerState) -> None:
        for action in self.panel.process(self.params, pointer):
            self._dispatch(action)
        if self.panel.wants_pointer(pointer.x, pointer.y):
            # A drag resumed after leaving the panel starts from where it re-enters.
            self.camera.cancel_gestures()
        else:
            self.camera.update(pointer)

    def get_view(self) -> tuple[Vec3, Vec3, Vec3]:
        return self.camera.view_transform()

    def step(self) -> None:
        if not self._running:
            return
        self.sim.step()
        self._check_divergence()

    def get_trail_data(self) -> tuple[np.ndarray, np.ndarray]:
        return self.trails.get_trail_data(self.sim.trail)

    def get_grid_data(self) -> tuple[list[float], list[int]]:
        slices = self.params.grid_slices
        return create_grid_vertices(slices, self.params.grid_spacing), create_grid_colors(slices)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def _dispatch(self, action: str) -> None:
        if action == "reset_params":
            self.sim.reset_parameters()
            return
        if action == "reset_position":
            self.sim.reset_position()
            self._check_divergence()
            return
        if action == "reset_camera":
            self.camera.reset()
            return

    def _on_key(self, k: str) -> None:
        if k == "space":
            self._running = not self._running
            return
        if k == "r":
            self._dispatch("reset_position")
            return
        if k == "p":
            self._dispatch("reset_params")
            return
        if k == "c":
            self._dispatch("reset_camera")
            return
        if k == "esc":
            raise SystemExit(0)

    def _check_divergence(self) -> None:
        diverged = not all(math.isfinite(c) for c in self.sim.head)
        if diverged and not self._diverged:
            issues = "; ".join(self.sim.validate_state())
            p = self.params
            print(
                f"[sim] trajectory diverged (sigma={p.sigma:g} beta={p.beta:g} rho={p.rho:g}): {issues}",
                file=sys.stderr,
            )
        elif self._diverged and not diverged:
            print("[sim] trajectory finite again", file=sys.stderr)
        self._diverged = diverged

    def _get_caption(self) -> str:
        p = self.params
        caption = (
            f"{TITLE} | sigma={p.sigma:.2f} beta={p.beta:.2f} rho={p.rho:.2f} "
            f"| points={len(self.sim.trail)}/{p.tail_length}"
        )
        if not self._running:
            caption += " | paused"
        return caption
