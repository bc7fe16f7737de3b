#!/usr/bin/env python3
"""Headless step-engine profiler.

Usage:
    python scripts/profile_simulation.py --ticks 2000 --seed 42
    python scripts/profile_simulation.py --grid 64 --entities 400 --cprofile step.prof
    python scripts/profile_simulation.py --ticks 500 --memory

Reports:
    - Per-tick timing statistics (min, max, mean, p50, p95, p99)
    - Share of tick time spent in path searches
    - Alive / stored entity counts over the run
    - Throughput (ticks/sec)
    - Optional: cProfile dump for flame graph generation
    - Optional: tracemalloc memory snapshot
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
import tracemalloc

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hexarena.ai.pathfinding import Pathfinder
from hexarena.config import SimulationConfig
from hexarena.engine.simulator import Simulator


class _TimedPathfinder(Pathfinder):
    """Pathfinder that accumulates the time spent in next-step searches."""

    __slots__ = ("elapsed", "calls")

    def __init__(self, grid) -> None:
        super().__init__(grid)
        self.elapsed = 0.0
        self.calls = 0

    def shortest_path(self, from_cell: int, to_cell: int) -> int:
        t0 = time.perf_counter()
        result = super().shortest_path(from_cell, to_cell)
        self.elapsed += time.perf_counter() - t0
        self.calls += 1
        return result


def _run_simulation(cfg: SimulationConfig, num_ticks: int) -> dict:
    """Run the step engine and collect per-tick timing data."""
    sim = Simulator(cfg, pathfinder_factory=_TimedPathfinder)
    sim.initialize()
    timed = sim.pathfinder

    tick_times: list[float] = []
    path_times: list[float] = []
    path_calls: list[int] = []
    alive_counts: list[int] = []
    stored_counts: list[int] = []

    for _ in range(num_ticks):
        before_path, before_calls = timed.elapsed, timed.calls
        t_start = time.perf_counter()
        sim.next_step()
        tick_times.append(time.perf_counter() - t_start)
        path_times.append(timed.elapsed - before_path)
        path_calls.append(timed.calls - before_calls)

        alive = sim.world.alive_count()
        alive_counts.append(alive)
        stored_counts.append(len(sim.world.entities))
        if alive <= 1:
            break

    return {
        "tick_times": tick_times,
        "path_times": path_times,
        "path_calls": path_calls,
        "alive_counts": alive_counts,
        "stored_counts": stored_counts,
        "final_step": sim.step_index,
        "state_hash": sim.state_hash(),
    }


def _percentile(data: list[float], p: float) -> float:
    """Linear-interpolated percentile."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float) -> None:
    tick_times = data["tick_times"]
    num_ticks = len(tick_times)

    if num_ticks == 0:
        print("No ticks executed.")
        return

    print("\n" + "=" * 70)
    print("  STEP ENGINE PERFORMANCE REPORT")
    print("=" * 70)

    print(f"\n  Ticks executed:    {num_ticks} (final step {data['final_step']})")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {num_ticks / wall_time:.1f} ticks/sec")
    print(f"  Avg tick time:     {statistics.mean(tick_times) * 1000:.3f}ms")
    print(f"  State hash:        {data['state_hash']}")

    alive = data["alive_counts"]
    print(f"\n  Alive (start/end): {alive[0]} / {alive[-1]}")
    print(f"  Stored (peak):     {max(data['stored_counts'])}")

    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    for name, value in [
        ("Min", min(tick_times)),
        ("P50 (median)", _percentile(tick_times, 50)),
        ("P95", _percentile(tick_times, 95)),
        ("P99", _percentile(tick_times, 99)),
        ("Max", max(tick_times)),
    ]:
        print(f"  {name:<16} {value * 1000:>10.3f}")
    if num_ticks > 1:
        print(f"  {'StdDev':<16} {statistics.stdev(tick_times) * 1000:>10.3f}")

    total = sum(tick_times)
    path_total = sum(data["path_times"])
    calls = sum(data["path_calls"])
    print(f"\n  Path searches:     {calls}")
    if calls:
        print(f"  Avg search:        {path_total / calls * 1e6:.1f}us")
    if total > 0:
        print(f"  Search share:      {path_total / total * 100:.1f}% of tick time")

    print("\n  Top 5 slowest ticks:")
    indexed = sorted(enumerate(tick_times), key=lambda x: x[1], reverse=True)[:5]
    for i, t in indexed:
        print(f"    Tick {i + 1:>5}: {t * 1000:.3f}ms  ({data['path_calls'][i]} searches, {alive[i]} alive)")

    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the hex step engine")
    parser.add_argument("--ticks", type=int, default=2000, help="Number of ticks to run")
    parser.add_argument("--seed", type=int, default=42, help="World seed")
    parser.add_argument("--entities", type=int, default=100, help="Initial entity count")
    parser.add_argument("--grid", type=int, default=32, help="Map size (NxN)")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    parser.add_argument("--memory", action="store_true", help="Enable tracemalloc memory profiling")
    args = parser.parse_args()

    cfg = SimulationConfig(
        seed=args.seed,
        map_width=args.grid,
        map_height=args.grid,
        entity_count=args.entities,
        max_ticks=args.ticks,
    )

    print(f"Profiling: {args.ticks} ticks, seed={args.seed}, "
          f"entities={args.entities}, map={args.grid}x{args.grid}")

    if args.memory:
        tracemalloc.start()

    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run_simulation(cfg, args.ticks)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(data, wall_time)

    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"  View with: python -m pstats {args.cprofile}")

        print("\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())

    if args.memory:
        snapshot = tracemalloc.take_snapshot()
        print("\n  Top 10 memory allocations by size:")
        for stat in snapshot.statistics("lineno")[:10]:
            print(f"  {str(stat.traceback):<60} {stat.size / 1024:>8.1f} KB")
        current, peak = tracemalloc.get_traced_memory()
        print(f"\n  Current memory: {current / 1024:.1f} KB")
        print(f"  Peak memory:    {peak / 1024:.1f} KB")
        tracemalloc.stop()


if __name__ == "__main__":
    main()
