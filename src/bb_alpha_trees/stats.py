"""Structural statistics and invariant checks for weight-balanced leaf trees"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional

from bb_alpha_trees.node import NodeBase
from bb_alpha_trees.wb_tree_base import WBTreeBase

logger = logging.getLogger(__name__)


def min_leaf_count(height: int, alpha: float) -> float:
    """Lower bound (1 / (1 - alpha)) ** h on the leaves of a tree of height h >= 2."""
    return (1 / (1 - alpha)) ** height


def max_height(leaf_count: int, alpha: float) -> float:
    """Upper bound log_{1/(1-alpha)}(n) = log2(n) / log2(1 / (1 - alpha)) on the height."""
    return (1 / math.log2(1 / (1 - alpha))) * math.log2(leaf_count)


@dataclass
class TreeStats:
    height: int
    leaf_count: int
    interior_count: int
    least_key: Optional[Any]
    greatest_key: Optional[Any]
    is_search_tree: bool
    separators_exact: bool
    sizes_consistent: bool
    is_alpha_balanced: bool
    min_leaf_count_holds: bool
    max_height_holds: bool


@dataclass
class _SubtreeStats:
    height: int
    leaf_count: int
    interior_count: int
    least_key: Any
    greatest_key: Any
    is_search_tree: bool
    separators_exact: bool
    sizes_consistent: bool
    is_alpha_balanced: bool


def _subtree_stats(node: NodeBase, alpha: float) -> _SubtreeStats:
    if node.is_leaf():
        return _SubtreeStats(height=0, leaf_count=1, interior_count=0,
                             least_key=node.key, greatest_key=node.key,
                             is_search_tree=True, separators_exact=True,
                             sizes_consistent=True, is_alpha_balanced=True)

    left = _subtree_stats(node.left, alpha)
    right = _subtree_stats(node.right, alpha)
    leaves = left.leaf_count + right.leaf_count

    stats = _SubtreeStats(
        height=1 + max(left.height, right.height),
        leaf_count=leaves,
        interior_count=1 + left.interior_count + right.interior_count,
        least_key=left.least_key,
        greatest_key=right.greatest_key,
        is_search_tree=left.is_search_tree and right.is_search_tree,
        separators_exact=left.separators_exact and right.separators_exact,
        sizes_consistent=left.sizes_consistent and right.sizes_consistent,
        is_alpha_balanced=left.is_alpha_balanced and right.is_alpha_balanced,
    )

    # every left key <= separator < every right key
    if not (left.greatest_key <= node.key < right.least_key):
        stats.is_search_tree = False
    if node.key != left.greatest_key:
        stats.separators_exact = False
    if node.size != leaves:
        stats.sizes_consistent = False
    if left.leaf_count < alpha * leaves or right.leaf_count < alpha * leaves:
        stats.is_alpha_balanced = False
    return stats


def tree_stats_(tree: WBTreeBase) -> TreeStats:
    """
    Returns aggregated statistics for a weight-balanced leaf tree in **O(n)** time.

    Leaf counts are recounted from the node graph, so `sizes_consistent`
    reports drift between cached interior sizes and the real shape.
    """
    if tree.is_empty():
        return TreeStats(height=0, leaf_count=0, interior_count=0,
                         least_key=None, greatest_key=None,
                         is_search_tree=True, separators_exact=True,
                         sizes_consistent=True, is_alpha_balanced=True,
                         min_leaf_count_holds=True, max_height_holds=True)

    sub = _subtree_stats(tree.root, tree.alpha)
    h, n = sub.height, sub.leaf_count

    stats = TreeStats(
        height=h,
        leaf_count=n,
        interior_count=sub.interior_count,
        least_key=sub.least_key,
        greatest_key=sub.greatest_key,
        is_search_tree=sub.is_search_tree,
        separators_exact=sub.separators_exact,
        sizes_consistent=sub.sizes_consistent,
        is_alpha_balanced=sub.is_alpha_balanced,
        min_leaf_count_holds=h < 2 or n >= min_leaf_count(h, tree.alpha),
        max_height_holds=h <= max_height(n, tree.alpha),
    )

    # In-order walk ONCE at the root
    keys = collect_leaf_keys(tree)
    if any(k0 >= k1 for k0, k1 in zip(keys, keys[1:])):
        stats.is_search_tree = False
    if len(keys) != n:
        stats.sizes_consistent = False

    if not stats.is_alpha_balanced:
        logger.debug(f"Tree violates alpha={tree.alpha} balance:\n{tree.print_structure()}")
    return stats


def collect_leaf_keys(tree: WBTreeBase) -> List[Any]:
    """Keys of all leaves in in-order sequence."""
    return [leaf.key for leaf in tree.iter_leaves()]
