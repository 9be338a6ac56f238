from __future__ import annotations

import math
from collections import deque

from lorenz3d.core.lorenz import Point3, lorenz_integrate
from lorenz3d.params import LorenzParams


class LorenzSim:
    def __init__(self, params: LorenzParams) -> None:
        self.params = params
        self.start_point: Point3 = tuple(params.start_point)  # type: ignore[assignment]
        self.trail: deque[Point3] = deque()
        self.steps_taken = 0
        self.reset_position()

    @property
    def head(self) -> Point3:
        return self.trail[-1]

    def points(self) -> list[Point3]:
        return list(self.trail)

    def step(self) -> None:
        p = self.params
        sigma = float(p.sigma)
        beta = float(p.beta)
        rho = float(p.rho)
        dt = float(p.dt)
        # tail_length may have been lowered since the last frame; eviction below catches up.
        limit = max(1, int(p.tail_length))
        trail = self.trail

        for _ in range(max(0, int(p.steps_per_frame))):
            trail.append(lorenz_integrate(trail[-1], sigma, beta, rho, dt))
            while len(trail) > limit:
                trail.popleft()
            self.steps_taken += 1

    def reset_position(self) -> None:
        self.trail.clear()
        self.trail.append(self.start_point)

    def reset_parameters(self) -> None:
        self.params.reset_coefficients()

    def validate_state(self) -> list[str]:
        issues: list[str] = []
        bad = 0
        first_bad: int | None = None
        for i, (x, y, z) in enumerate(self.trail):
            if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
                bad += 1
                if first_bad is None:
                    first_bad = i
        if bad:
            issues.append(f"{bad} non-finite trail point(s), first at index {first_bad}")
        return issues
