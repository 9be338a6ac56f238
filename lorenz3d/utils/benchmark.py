#!/usr/bin/env python3
"""
Performance benchmark for the Lorenz 3D frame workload.

Times the two per-frame costs that do not need a window:
- LorenzSim.step() (Euler steps + trail eviction)
- TrailManager.get_trail_data() (segment colors and vertex buffers)

Usage:
    python -m lorenz3d.utils.benchmark [--frames 300] [--tail-length 5000] [--steps 10]
"""

from __future__ import annotations

import argparse
import sys
import time

import numpy as np

from lorenz3d.core.sim import LorenzSim
from lorenz3d.params import LorenzParams
from lorenz3d.rendering.trail_manager import TrailManager


def _mean_std_ms(times: list[float]) -> tuple[float, float]:
    mean = sum(times) / len(times)
    std = (sum((t - mean) ** 2 for t in times) / len(times)) ** 0.5
    return mean * 1000, std * 1000


def benchmark_frames(
    frames: int,
    tail_length: int,
    steps_per_frame: int,
    warmup: bool = True,
) -> dict[str, tuple[float, float]]:
    """
    Run the simulator and trail projection for a number of frames.

    Args:
        frames: Frames to time
        tail_length: Trail bound
        steps_per_frame: Euler steps per frame
        warmup: Fill the trail to tail_length before timing

    Returns:
        {"step": (mean_ms, std_ms), "trail": (mean_ms, std_ms)}
    """
    params = LorenzParams(tail_length=tail_length, steps_per_frame=steps_per_frame).clamp()
    sim = LorenzSim(params)
    trails = TrailManager()

    if warmup:
        while len(sim.trail) < params.tail_length:
            sim.step()

    step_times: list[float] = []
    trail_times: list[float] = []
    for _ in range(max(1, frames)):
        t0 = time.perf_counter()
        sim.step()
        t1 = time.perf_counter()
        trails.get_trail_data(sim.trail)
        t2 = time.perf_counter()
        step_times.append(t1 - t0)
        trail_times.append(t2 - t1)

    return {"step": _mean_std_ms(step_times), "trail": _mean_std_ms(trail_times)}


def run_benchmark(frames: int, tail_length: int, steps_per_frame: int) -> dict[str, tuple[float, float]]:
    print(f"\n{'='*60}")
    print(f"Benchmark: {frames} frames, tail {tail_length}, {steps_per_frame} steps/frame")
    print(f"{'='*60}")

    results = benchmark_frames(frames, tail_length, steps_per_frame)
    step_ms, step_std = results["step"]
    trail_ms, trail_std = results["trail"]
    print(f"  step():           {step_ms:.3f} ± {step_std:.3f} ms")
    print(f"  get_trail_data(): {trail_ms:.3f} ± {trail_std:.3f} ms")
    total = step_ms + trail_ms
    budget = 1000.0 / 60.0
    print(f"  total:            {total:.3f} ms ({100.0 * total / budget:.1f}% of a 60 fps frame)")
    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark the Lorenz 3D per-frame workload")
    parser.add_argument("--frames", "-f", type=int, default=300, help="Frames to time")
    parser.add_argument("--tail-length", "-t", type=int, default=5000, help="Trail length")
    parser.add_argument("--steps", "-s", type=int, default=10, help="Euler steps per frame")
    parser.add_argument("--sweep", action="store_true", help="Run sweep over trail lengths")
    args = parser.parse_args()

    print("Lorenz 3D Performance Benchmark")
    print(f"Platform: {sys.platform}")
    print(f"NumPy: {np.__version__}")

    if args.sweep:
        for tail in (500, 2000, 5000, 10000, 20000):
            run_benchmark(args.frames, tail, args.steps)
    else:
        run_benchmark(args.frames, args.tail_length, args.steps)


if __name__ == "__main__":
    main()
