#!/usr/bin/env python3
"""
Benchmarks for the weight-balanced leaf trees.

This script measures:
 1. Full tree build times by random insertion, with structural stats
 2. Bulk build times (from_sorted_items)
 3. Per-insert, per-retrieve and per-delete cost into trees of various sizes
 4. Interval query cost on multi-value trees
 5. Rotation counts per insertion order

Usage:
    python benchmarks.py [--alpha A] [--chain-capacity K] [--sizes 100 1000 10000] [--trials T] [--seed S]
"""
import argparse
import time
import gc
from pprint import pprint
from dataclasses import asdict
from statistics import mean, variance

import numpy as np
from tqdm import tqdm

from bb_alpha_trees.base import DEFAULT_ALPHA, DEFAULT_CHAIN_CAPACITY
from bb_alpha_trees.factory import create_wb_tree, create_multi_leaf_tree
from bb_alpha_trees.wb_tree_base import WBTreeBase
from bb_alpha_trees.stats import tree_stats_, max_height
from bb_alpha_trees.profiling import PerformanceTracker


def random_keys(rng: np.random.Generator, n: int, space: int) -> list[int]:
    """n distinct random int keys below `space`."""
    if space <= n:
        raise ValueError(f"Key-space too small! Required: {n + 1}, Available: {space}")
    return [int(k) for k in rng.choice(space, size=n, replace=False)]


def random_tree_of_size(rng: np.random.Generator, n: int, alpha: float) -> WBTreeBase:
    tree = create_wb_tree(alpha)
    tree_insert = tree.insert
    for key in random_keys(rng, n, 1 << 24):
        tree_insert(key, f"val{key}")
    return tree


def bench_build(rng, sizes: list[int], alpha: float) -> None:
    """Measure random-order builds and print the structural stats of the largest."""
    stats = None
    for n in tqdm(sizes, desc="build"):
        t0 = time.perf_counter()
        tree = random_tree_of_size(rng, n, alpha)
        elapsed = time.perf_counter() - t0
        stats = tree_stats_(tree)
        print(f"[bench] random build({n}): {elapsed:.4f}s, height {stats.height} "
              f"(bound {max_height(n, alpha):.2f})")
    if stats is not None:
        pprint(asdict(stats))


def bench_bulk_build(sizes: list[int], alpha: float) -> None:
    for n in sizes:
        items = [(k, f"val{k}") for k in range(n)]
        t0 = time.perf_counter()
        WBTreeBase.from_sorted_items(items, alpha)
        elapsed = time.perf_counter() - t0
        print(f"[bench] from_sorted_items({n}): {elapsed:.4f}s")


def measure_single_ops(rng, n: int, alpha: float, trials: int) -> dict[str, tuple[float, float]]:
    """
    Measure per-operation cost on a tree of exactly `n` keys, averaged over
    `trials` operations. Returns {op: (mean_time_s, variance_time_s)}.
    """
    tree = random_tree_of_size(rng, n, alpha)
    present = tree.keys()
    probe_keys = [int(k) for k in rng.choice(present, size=trials, replace=False)]
    fresh_keys = [k + (1 << 24) for k in probe_keys]

    results = {}
    for op, keys, call in (
        ("retrieve", probe_keys, lambda k: tree.retrieve(k)),
        ("insert", fresh_keys, lambda k: tree.insert(k, "x")),
        ("delete", fresh_keys, lambda k: tree.delete(k)),
    ):
        gc.collect()
        gc.disable()
        try:
            times = []
            for key in keys:
                t0 = time.perf_counter()
                call(key)
                times.append(time.perf_counter() - t0)
        finally:
            gc.enable()
        results[op] = (mean(times), variance(times))
    return results


def bench_single_ops(rng, sizes: list[int], alpha: float, trials: int) -> None:
    for n in sizes:
        for op, (avg, var) in measure_single_ops(rng, n, alpha, trials).items():
            print(f"[bench] {op:<8} size {n:<7} → avg {avg*1e6:8.2f} µs   σ²={var*1e12:8.2f} µs²")


def bench_interval(rng, sizes: list[int], alpha: float, capacity: int, trials: int) -> None:
    for n in sizes:
        tree = create_multi_leaf_tree(alpha, capacity)
        for key in range(n):
            tree.insert(key, f"a{key}")
            tree.insert(key, f"b{key}")
        starts = rng.integers(0, max(n - 100, 1), size=trials)
        t0 = time.perf_counter()
        for start in starts:
            tree.interval_find(int(start), int(start) + 100)
        elapsed = (time.perf_counter() - t0) / trials
        print(f"[bench] interval_find(width 100) size {n:<7} → avg {elapsed*1e6:8.2f} µs")


def bench_rotations(n: int, alpha: float, seed: int) -> None:
    orders = {
        "ascending": list(range(n)),
        "descending": list(range(n - 1, -1, -1)),
        "random": [int(k) for k in np.random.default_rng(seed).permutation(n)],
    }
    tracker = PerformanceTracker.get_instance()
    for name, keys in orders.items():
        tracker.reset()
        tracker.enable()
        tree = create_wb_tree(alpha)
        for key in keys:
            tree.insert(key, key)
        tracker.disable()
        events = tracker.events
        print(f"[bench] {name:<10} n={n}: rotate_left={events['rotate_left']}, "
              f"rotate_right={events['rotate_right']}, height={tree.height}")


def main():
    parser = argparse.ArgumentParser(description="Weight-balanced leaf tree benchmarks")
    parser.add_argument("--alpha", type=float, default=DEFAULT_ALPHA,
                        help="Balance factor of the benchmarked trees")
    parser.add_argument("--chain-capacity", type=int, default=DEFAULT_CHAIN_CAPACITY,
                        help="Value chain segment capacity for multi-value trees")
    parser.add_argument("--sizes", nargs='+', type=int, default=[100, 1000, 10_000],
                        help="Tree sizes for single-operation benchmarks")
    parser.add_argument("--trials", type=int, default=100,
                        help="Number of trials for single-operation benchmarks")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)

    print("\n=== Random Build ===")
    bench_build(rng, args.sizes, args.alpha)

    print("\n=== Bulk Build ===")
    bench_bulk_build(args.sizes, args.alpha)

    print("\n=== Single-Operation Benchmarks ===")
    bench_single_ops(rng, args.sizes, args.alpha, args.trials)

    print("\n=== Interval Queries ===")
    bench_interval(rng, args.sizes, args.alpha, args.chain_capacity, args.trials)

    print("\n=== Rotations per Insertion Order ===")
    bench_rotations(max(args.sizes), args.alpha, args.seed)

    print("\n=== Method-Level Performance Breakdown ===")
    tracker = PerformanceTracker.get_instance()
    tracker.reset()
    tracker.enable()
    random_tree_of_size(rng, max(args.sizes), args.alpha)
    tracker.disable()
    print(tracker.report())


if __name__ == "__main__":
    main()
