#!/usr/bin/env python3
"""Tick-loop profiler.

Usage:
    python scripts/profile_simulation.py --ticks 1500 --seed 42
    python scripts/profile_simulation.py --ticks 1500 --rooms 4 --cprofile profile.prof

Reports:
    - Per-tick timing statistics (min, p50, p95, p99, max)
    - Per-phase breakdown (memory, units, resolve, host)
    - Ticks over the configured tick budget
    - Optional: cProfile dump
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hive.config import SimulationConfig
from hive.engine.world_loop import WorldLoop


def _run_simulation(cfg: SimulationConfig, num_ticks: int) -> dict:
    """Drive the loop phase by phase and collect per-tick timings."""
    loop = WorldLoop.build(cfg)
    world = loop.world

    tick_times: list[float] = []
    phase_times: list[tuple[float, float, float, float]] = []
    unit_counts: list[int] = []

    for _ in range(num_ticks):
        t0 = time.perf_counter()
        loop._phase_memory()
        t1 = time.perf_counter()
        loop._phase_units()
        t2 = time.perf_counter()
        loop._resolver.resolve(world.drain_intents(), world)
        t3 = time.perf_counter()
        loop._phase_regeneration()
        loop._phase_spawning()
        t4 = time.perf_counter()
        world.tick += 1

        tick_times.append(t4 - t0)
        phase_times.append((t1 - t0, t2 - t1, t3 - t2, t4 - t3))
        unit_counts.append(len(world.units))

    return {
        "tick_times": tick_times,
        "phase_times": phase_times,
        "unit_counts": unit_counts,
        "cache_rebuilds": loop.cache.rebuilds,
    }


def _percentile(data: list[float], p: float) -> float:
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = min(f + 1, len(sorted_data) - 1)
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float, budget_ms: float) -> None:
    tick_times = data["tick_times"]
    phase_times = data["phase_times"]
    num_ticks = len(tick_times)
    if num_ticks == 0:
        print("No ticks executed.")
        return

    print("\n" + "=" * 70)
    print("  TICK LOOP PERFORMANCE REPORT")
    print("=" * 70)

    print(f"\n  Ticks executed:    {num_ticks}")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {num_ticks / wall_time:.1f} ticks/sec")
    print(f"  Units (end/peak):  {data['unit_counts'][-1]} / {max(data['unit_counts'])}")
    print(f"  Room cache rebuilds: {data['cache_rebuilds']}")

    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    for label, value in [
        ("Min", min(tick_times)),
        ("P50 (median)", _percentile(tick_times, 50)),
        ("P95", _percentile(tick_times, 95)),
        ("P99", _percentile(tick_times, 99)),
        ("Max", max(tick_times)),
    ]:
        print(f"  {label:<16} {value * 1000:>10.3f}")

    over = sum(1 for t in tick_times if t * 1000 > budget_ms)
    print(f"\n  Ticks over the {budget_ms:.0f}ms budget: {over}")

    total_sum = sum(tick_times)
    print(f"\n  {'Phase':<16} {'Avg (ms)':>10} {'P95 (ms)':>10} {'% Total':>10}")
    print(f"  {'-' * 16} {'-' * 10} {'-' * 10} {'-' * 10}")
    for idx, name in enumerate(("Memory", "Units", "Resolve", "Host")):
        times = [p[idx] for p in phase_times]
        pct = (sum(times) / total_sum * 100) if total_sum > 0 else 0
        print(f"  {name:<16} {statistics.mean(times) * 1000:>10.3f} "
              f"{_percentile(times, 95) * 1000:>10.3f} {pct:>9.1f}%")

    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the tick loop")
    parser.add_argument("--ticks", type=int, default=1500, help="Number of ticks to run")
    parser.add_argument("--seed", type=int, default=42, help="World seed")
    parser.add_argument("--rooms", type=int, default=1, help="Number of rooms")
    parser.add_argument("--max-units", type=int, default=5, help="Unit cap")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    args = parser.parse_args()

    cfg = SimulationConfig(
        world_seed=args.seed,
        num_rooms=args.rooms,
        max_units=args.max_units,
        max_ticks=args.ticks,
    )
    print(f"Profiling: {args.ticks} ticks, seed={args.seed}, rooms={args.rooms}, max_units={args.max_units}")

    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run_simulation(cfg, args.ticks)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(data, wall_time, cfg.tick_budget_ms)

    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())


if __name__ == "__main__":
    main()
