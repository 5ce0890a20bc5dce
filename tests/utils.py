"""Utility functions for testing weight-balanced leaf tree invariants."""

import logging
import random
from typing import Callable, Dict, List

from bb_alpha_trees.stats import TreeStats
from bb_alpha_trees.wb_tree_base import WBTreeBase

TREE_FLAGS = (
    "is_search_tree",
    "separators_exact",
    "sizes_consistent",
    "is_alpha_balanced",
    "min_leaf_count_holds",
    "max_height_holds",
)


def _alternating(n: int) -> List[int]:
    """1, n, 2, n-1, ... to provoke rotations on both sides."""
    keys = []
    lo, hi = 1, n
    while lo <= hi:
        keys.append(lo)
        if lo != hi:
            keys.append(hi)
        lo += 1
        hi -= 1
    return keys


def _random(n: int, seed: int = 42) -> List[int]:
    keys = list(range(1, n + 1))
    random.Random(seed).shuffle(keys)
    return keys


# Key insertion orders every tree test runs against
KEY_ORDERS: Dict[str, Callable[[int], List[int]]] = {
    "ascending": lambda n: list(range(1, n + 1)),
    "descending": lambda n: list(range(n, 0, -1)),
    "alternating": _alternating,
    "random": _random,
}


def value_for(key) -> str:
    return f"val_{key}"


def duplicate_value_for(key) -> str:
    return f"dup_{key}"


def assert_tree_invariants_tc(tc, t: WBTreeBase, stats: TreeStats) -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False\n{t.print_structure()}"
        )

    tc.assertEqual(
        stats.leaf_count, t.leaf_count,
        f"Invariant failed: counted {stats.leaf_count} leaves, tree reports {t.leaf_count}"
    )
    tc.assertEqual(
        stats.height, t.height,
        f"Invariant failed: measured height {stats.height}, tree reports {t.height}"
    )

    if not t.is_empty():
        tc.assertEqual(
            stats.interior_count, stats.leaf_count - 1,
            f"Invariant failed: {stats.interior_count} interior nodes for {stats.leaf_count} leaves"
        )
        tc.assertIsNotNone(
            stats.least_key,
            "Invariant failed: least_key is None for non-empty tree"
        )
        tc.assertIsNotNone(
            stats.greatest_key,
            "Invariant failed: greatest_key is None for non-empty tree"
        )


def assert_tree_invariants_raise(t: WBTreeBase, stats: TreeStats) -> bool:
    """Check all invariants, logging the first failure. Returns True if all hold."""
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logging.error(f"Invariant failed: {flag} is False")
            return False

    if stats.leaf_count != t.leaf_count:
        logging.error(f"Invariant failed: counted {stats.leaf_count} leaves, tree reports {t.leaf_count}")
        return False
    return True
