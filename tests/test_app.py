"""
Frame-level tests for LorenzApp (no window is opened).
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from lorenz3d.__main__ import main
from lorenz3d.params import LorenzParams
from lorenz3d.rendering.camera_controller import PointerState
from lorenz3d.ui.app import TITLE, LorenzApp


def _center(rect):
    x, y, w, h = rect
    return x + w / 2.0, y + h / 2.0


class TestLorenzApp(unittest.TestCase):
    def setUp(self):
        self.app = LorenzApp(params=LorenzParams().clamp())

    def test_initial_state(self):
        self.assertEqual(len(self.app.sim.trail), 1)
        self.assertEqual(self.app.sim.head, (0.0, 1.0, 1.05))
        self.assertEqual(self.app.camera.distance, 100.0)

    def test_step_advances_simulation(self):
        self.app.step()
        self.assertEqual(len(self.app.sim.trail), 11)

    def test_pause_skips_step(self):
        self.app._on_key("space")
        self.app.step()
        self.assertEqual(len(self.app.sim.trail), 1)
        self.assertTrue(self.app._get_caption().endswith("paused"))
        self.app._on_key("space")
        self.app.step()
        self.assertEqual(len(self.app.sim.trail), 11)

    def test_drag_outside_panel_orbits(self):
        yaw = self.app.camera.yaw
        self.app.process_input(PointerState(x=600.0, y=400.0, left=True))
        self.app.process_input(PointerState(x=620.0, y=400.0, left=True))
        self.assertAlmostEqual(self.app.camera.yaw, yaw - 20.0 * 0.005)

    def test_drag_across_panel_does_not_jump(self):
        self.app.process_input(PointerState(x=300.0, y=20.0, left=True))
        self.app.process_input(PointerState(x=270.0, y=20.0, left=True))
        yaw = self.app.camera.yaw
        for x in (200.0, 100.0, 20.0):
            self.app.process_input(PointerState(x=x, y=20.0, left=True))
        self.assertEqual(self.app.camera.yaw, yaw)

        # Leaving the panel restarts the gesture instead of applying the whole crossing.
        self.app.process_input(PointerState(x=5.0, y=20.0, left=True))
        self.assertEqual(self.app.camera.yaw, yaw)
        self.app.process_input(PointerState(x=0.0, y=20.0, left=True))
        self.assertAlmostEqual(self.app.camera.yaw, yaw + 5.0 * 0.005)

    def test_pointer_over_panel_leaves_camera(self):
        x, y = _center(self.app.panel.panel_rect())
        eye = self.app.camera.eye_position()
        self.app.process_input(PointerState(x=x, y=y, left=True, scroll_y=3.0))
        self.app.process_input(PointerState(x=x + 5.0, y=y + 5.0, left=True))
        self.assertEqual(self.app.camera.eye_position(), eye)

    def test_slider_drag_does_not_orbit(self):
        x, y = _center(self.app.panel.slider_rect(2))
        yaw = self.app.camera.yaw
        self.app.process_input(PointerState(x=x, y=y, left=True))
        self.app.process_input(PointerState(x=900.0, y=500.0, left=True))
        self.assertEqual(self.app.camera.yaw, yaw)
        self.assertEqual(self.app.params.rho, 40.0)

    def test_reset_params_button(self):
        self.app.params.sigma = -3.0
        self.app.params.rho = 5.0
        x, y = _center(self.app.panel.button_rect(0))
        self.app.process_input(PointerState(x=x, y=y, left=True))
        self.app.process_input(PointerState(x=x, y=y, left=False))
        self.assertEqual(self.app.params.sigma, 10.0)
        self.assertEqual(self.app.params.rho, 28.0)

    def test_reset_position_button(self):
        for _ in range(3):
            self.app.step()
        x, y = _center(self.app.panel.button_rect(1))
        self.app.process_input(PointerState(x=x, y=y, left=True))
        self.app.process_input(PointerState(x=x, y=y, left=False))
        self.assertEqual(list(self.app.sim.trail), [(0.0, 1.0, 1.05)])

    def test_reset_keys(self):
        self.app.step()
        self.app.params.beta = 1.0
        self.app.camera.zoom(10.0)
        self.app._on_key("r")
        self.app._on_key("p")
        self.app._on_key("c")
        self.assertEqual(len(self.app.sim.trail), 1)
        self.assertAlmostEqual(self.app.params.beta, 8.0 / 3.0)
        self.assertEqual(self.app.camera.distance, 100.0)

    def test_escape_quits(self):
        with self.assertRaises(SystemExit):
            self.app._on_key("esc")

    def test_caption(self):
        caption = self.app._get_caption()
        self.assertTrue(caption.startswith(TITLE))
        self.assertIn("rho=28.00", caption)
        self.assertIn("points=1/5000", caption)

    def test_divergence_logged_once(self):
        self.app.params.sigma = 1e300
        self.app.params.dt = 0.1
        err = io.StringIO()
        with redirect_stderr(err):
            for _ in range(20):
                self.app.step()
        self.assertEqual(err.getvalue().count("trajectory diverged"), 1)

        err = io.StringIO()
        with redirect_stderr(err):
            self.app._on_key("r")
        self.assertIn("finite again", err.getvalue())

    def test_grid_data(self):
        vertices, colors = self.app.get_grid_data()
        self.assertEqual(len(vertices) // 3, len(colors) // 4)


class TestParamsFile(unittest.TestCase):
    def _write(self, text):
        fd, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w") as f:
            f.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_loads_params_file(self):
        path = self._write(json.dumps({"rho": 14.0, "tail_length": 300}))
        with redirect_stdout(io.StringIO()):
            app = LorenzApp(params_path=path)
        self.assertEqual(app.params.rho, 14.0)
        self.assertEqual(app.params.tail_length, 300)

    def test_bad_file_falls_back_to_defaults(self):
        path = self._write("not json")
        err = io.StringIO()
        with redirect_stderr(err):
            app = LorenzApp(params_path=path)
        self.assertIn("[params] load failed", err.getvalue())
        self.assertEqual(app.params.rho, 28.0)

    def test_missing_file_falls_back_to_defaults(self):
        err = io.StringIO()
        with redirect_stderr(err):
            app = LorenzApp(params_path="/nonexistent/lorenz.json")
        self.assertIn("load failed", err.getvalue())
        self.assertEqual(app.params.sigma, 10.0)


class TestCommandLine(unittest.TestCase):
    def _run_main(self, argv):
        with patch.object(LorenzApp, "run", autospec=True) as run:
            main(argv)
        run.assert_called_once()
        return run.call_args[0][0]

    def test_defaults(self):
        app = self._run_main([])
        self.assertEqual(app.params.target_fps, 60)

    def test_fps_override(self):
        app = self._run_main(["--fps", "144"])
        self.assertEqual(app.params.target_fps, 144)

    def test_fps_override_is_clamped(self):
        app = self._run_main(["--fps", "3"])
        self.assertEqual(app.params.target_fps, 10)

    def test_params_file(self):
        fd, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w") as f:
            json.dump({"sigma": 12.5, "target_fps": 30}, f)
        self.addCleanup(os.remove, path)
        with redirect_stdout(io.StringIO()):
            app = self._run_main(["--params", path, "--fps", "90"])
        self.assertEqual(app.params.sigma, 12.5)
        self.assertEqual(app.params.target_fps, 90)


if __name__ == "__main__":
    unittest.main()
