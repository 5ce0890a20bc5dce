"""Stateless helpers over leaf-tree nodes: measures, key swaps and rotations"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Optional

from bb_alpha_trees.base import InvariantError
from bb_alpha_trees.node import NodeBase, InteriorNode
from bb_alpha_trees.profiling import PerformanceTracker

if TYPE_CHECKING:
    from bb_alpha_trees.wb_tree_base import WBTreeBase

logger = logging.getLogger(__name__)


def height(node: Optional[NodeBase]) -> int:
    """
    Length of the longest path from `node` down to a leaf.

    A leaf (or an empty subtree) has height 0.
    """
    if node is None or node.is_leaf():
        return 0
    return 1 + max(height(node.left), height(node.right))


def weight(node: Optional[NodeBase]) -> int:
    """
    Number of leaves below (and including) `node`.

    O(1): a leaf weighs 1 and interior nodes carry their cached size.
    """
    if node is None:
        return 0
    return node.weight()


def count_leaves(node: Optional[NodeBase]) -> int:
    """Recount the leaves of a subtree without trusting cached sizes."""
    if node is None:
        return 0
    if node.is_leaf():
        return 1
    return count_leaves(node.left) + count_leaves(node.right)


def leaf_count(tree: 'WBTreeBase') -> int:
    """Number of leaves, i.e. distinct keys, stored in `tree`."""
    return weight(tree.root)


def swap_keys(node1: NodeBase, node2: NodeBase) -> None:
    """Exchange the keys of two nodes in place."""
    node1.key, node2.key = node2.key, node1.key


def copy_node(target: InteriorNode, source: InteriorNode) -> InteriorNode:
    """
    Overwrite key, left and right of `target` with those of `source`.

    Used to splice a subtree into a position while `target` keeps its
    identity. Both nodes must be interior.

    Returns:
        InteriorNode: `target`.
    """
    if target.is_leaf() or source.is_leaf():
        raise InvariantError("copy_node() requires two interior nodes")
    target.key = source.key
    target.left = source.left
    target.right = source.right
    target.size = source.size
    return target


def is_balanced(node: NodeBase, alpha: float) -> bool:
    """
    Check the weight-balance condition of a single node.

    Both children of an interior node must carry at least `alpha` times
    the node's weight. Leaves are always balanced.
    """
    if node.is_leaf():
        return True
    w = weight(node)
    return weight(node.left) >= alpha * w and weight(node.right) >= alpha * w


def _assert_right_rotation_conditions(node: NodeBase) -> None:
    if node.is_leaf():
        raise InvariantError("can only perform right rotation on an interior node")
    if node.left.is_leaf():
        raise InvariantError("can only perform right rotation if node.left is an interior node")


def _assert_left_rotation_conditions(node: NodeBase) -> None:
    if node.is_leaf():
        raise InvariantError("can only perform left rotation on an interior node")
    if node.right.is_leaf():
        raise InvariantError("can only perform left rotation if node.right is an interior node")


def rotate_right(node: InteriorNode) -> InteriorNode:
    """
    Rotate the subtree at `node` to the right, in place.

    Before:            node(k)                After:        node(kl)
                      /       \\                            /       \\
                 left(kl)      C                          A      left(k)
                 /     \\                                          /    \\
                A       B                                        B      C

    The former left node object becomes the new right child and the two
    nodes exchange separator keys, so `node` keeps its identity and the
    in-order leaf sequence is unchanged.

    Raises:
        InvariantError: If `node` or `node.left` is a leaf.
    """
    _assert_right_rotation_conditions(node)
    PerformanceTracker.get_instance().count("rotate_right")

    pivot = node.left
    swap_keys(node, pivot)
    temp = node.right

    node.right = pivot
    node.left = pivot.left

    pivot.left = pivot.right
    pivot.right = temp
    pivot.size = pivot.left.weight() + temp.weight()

    logger.debug(f"rotate_right: new separators {node.key!r} / {pivot.key!r}")
    return node


def rotate_left(node: InteriorNode) -> InteriorNode:
    """
    Rotate the subtree at `node` to the left, in place. Mirror of `rotate_right`.

    Raises:
        InvariantError: If `node` or `node.right` is a leaf.
    """
    _assert_left_rotation_conditions(node)
    PerformanceTracker.get_instance().count("rotate_left")

    pivot = node.right
    swap_keys(node, pivot)
    temp = node.left

    node.left = pivot
    node.right = pivot.right

    pivot.right = pivot.left
    pivot.left = temp
    pivot.size = temp.weight() + pivot.right.weight()

    logger.debug(f"rotate_left: new separators {node.key!r} / {pivot.key!r}")
    return node


def rightmost_leaf(node: NodeBase) -> NodeBase:
    """Follow right pointers down to the maximum leaf of a subtree."""
    while not node.is_leaf():
        node = node.right
    return node


def leftmost_leaf(node: NodeBase) -> NodeBase:
    """Follow left pointers down to the minimum leaf of a subtree."""
    while not node.is_leaf():
        node = node.left
    return node
