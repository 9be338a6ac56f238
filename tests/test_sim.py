import math
import unittest

from lorenz3d.core.lorenz import lorenz_integrate
from lorenz3d.core.sim import LorenzSim
from lorenz3d.params import LorenzParams


class TestSim(unittest.TestCase):
    def _sim(self, **kwargs) -> LorenzSim:
        return LorenzSim(LorenzParams(**kwargs).clamp())

    def test_starts_with_start_point_only(self) -> None:
        sim = self._sim()
        self.assertEqual(list(sim.trail), [(0.0, 1.0, 1.05)])
        self.assertEqual(sim.head, (0.0, 1.0, 1.05))

    def test_single_step_scenario(self) -> None:
        sim = self._sim(steps_per_frame=1, dt=0.005)
        sim.step()

        self.assertEqual(len(sim.trail), 2)
        expected = lorenz_integrate((0.0, 1.0, 1.05), 10.0, 8.0 / 3.0, 28.0, 0.005)
        self.assertEqual(sim.trail[-1], expected)
        self.assertAlmostEqual(sim.trail[-1][0], 0.05, places=12)
        self.assertAlmostEqual(sim.trail[-1][1], 0.995, places=12)
        self.assertAlmostEqual(sim.trail[-1][2], 1.036, places=12)

    def test_step_runs_steps_per_frame(self) -> None:
        sim = self._sim(steps_per_frame=7)
        sim.step()
        self.assertEqual(len(sim.trail), 8)
        self.assertEqual(sim.steps_taken, 7)

    def test_trail_is_chronological(self) -> None:
        sim = self._sim(steps_per_frame=5, tail_length=12)
        for _ in range(10):
            sim.step()
            pts = sim.points()
            for a, b in zip(pts, pts[1:]):
                self.assertEqual(b, lorenz_integrate(a, sim.params.sigma, sim.params.beta, sim.params.rho, sim.params.dt))

    def test_trail_bound_holds_under_changes(self) -> None:
        sim = self._sim(steps_per_frame=10, tail_length=50)
        schedule = [(50, 10), (30, 3), (200, 50), (5, 1), (1, 7), (77, 100)]
        for tail, steps in schedule:
            sim.params.tail_length = tail
            sim.params.steps_per_frame = steps
            for _ in range(4):
                sim.step()
                self.assertLessEqual(len(sim.trail), tail)

    def test_last_point_is_newest(self) -> None:
        sim = self._sim(steps_per_frame=3, tail_length=4)
        sim.step()
        before = sim.head
        sim.step()
        self.assertEqual(sim.trail[-1], sim.head)
        self.assertNotEqual(sim.head, before)

    def test_retroactive_eviction(self) -> None:
        sim = self._sim(steps_per_frame=100, tail_length=5000)
        for _ in range(60):
            sim.step()
        self.assertEqual(len(sim.trail), 5000)
        newest_before = sim.head

        sim.params.tail_length = 10
        sim.params.steps_per_frame = 1
        sim.step()

        self.assertLessEqual(len(sim.trail), 10)
        expected = lorenz_integrate(newest_before, 10.0, 8.0 / 3.0, 28.0, 0.005)
        self.assertEqual(sim.head, expected)
        self.assertEqual(sim.trail[-2], newest_before)

    def test_reset_position(self) -> None:
        sim = self._sim(steps_per_frame=25)
        for _ in range(5):
            sim.step()
        sim.reset_position()
        self.assertEqual(len(sim.trail), 1)
        self.assertEqual(sim.trail[0], sim.start_point)

    def test_reset_parameters_only_touches_coefficients(self) -> None:
        sim = self._sim(steps_per_frame=3, tail_length=40, dt=0.002)
        sim.step()
        sim.params.sigma = -5.0
        sim.params.beta = 12.0
        sim.params.rho = 1.5
        trail_before = sim.points()

        sim.reset_parameters()

        self.assertEqual((sim.params.sigma, sim.params.beta, sim.params.rho), (10.0, 8.0 / 3.0, 28.0))
        self.assertEqual(sim.params.dt, 0.002)
        self.assertEqual(sim.params.tail_length, 40)
        self.assertEqual(sim.params.steps_per_frame, 3)
        self.assertEqual(sim.points(), trail_before)

    def test_validate_state_flags_nan(self) -> None:
        sim = self._sim()
        self.assertEqual(sim.validate_state(), [])

        sim.trail.append((float("nan"), 0.0, 0.0))
        issues = sim.validate_state()
        self.assertTrue(any("non-finite" in issue for issue in issues))

    def test_divergence_ages_out(self) -> None:
        sim = self._sim(steps_per_frame=50, tail_length=20)
        sim.params.sigma = 1e6
        sim.params.rho = 1e6
        sim.params.dt = 0.1
        for _ in range(5):
            sim.step()
        self.assertFalse(all(math.isfinite(c) for c in sim.head))
        self.assertLessEqual(len(sim.trail), 20)

        sim.reset_parameters()
        sim.params.dt = 0.005
        sim.reset_position()
        sim.step()
        sim.step()
        self.assertEqual(sim.validate_state(), [])
