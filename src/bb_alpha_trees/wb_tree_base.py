"""Weight-balanced leaf tree (BB[alpha]) base implementation"""

from __future__ import annotations
import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from bb_alpha_trees.base import (
    AbstractLeafTree,
    RetrievalResult,
    DEFAULT_ALPHA,
    MAX_SAFE_ALPHA,
    check_alpha,
)
from bb_alpha_trees.node import NodeBase, LeafNode, InteriorNode
from bb_alpha_trees.tree_utils import (
    height,
    weight,
    copy_node,
    rotate_left,
    rotate_right,
    leftmost_leaf,
    rightmost_leaf,
)
from bb_alpha_trees.profiling import track_performance, PerformanceTracker

logger = logging.getLogger(__name__)


class WBTreeBase(AbstractLeafTree):
    """
    A weight-balanced binary search tree that stores every entry in a leaf.

    Interior nodes only route searches: a key k descends left at node n iff
    k <= n.key. For every interior node n both children weigh at least
    alpha * weight(n), which keeps the height logarithmic in the number of
    leaves.

    Attributes:
        root (Optional[NodeBase]): The root node; None for an empty tree.
        alpha (float): The balance factor, 0 < alpha < 1.
    """
    __slots__ = ("_root", "_alpha", "_delta")

    def __init__(self, alpha: float = DEFAULT_ALPHA, root: Optional[NodeBase] = None):
        self._alpha = check_alpha(alpha)
        if self._alpha > MAX_SAFE_ALPHA:
            logger.warning(
                f"alpha={self._alpha} exceeds {MAX_SAFE_ALPHA:.4f}; "
                "rotations are not guaranteed to restore balance"
            )
        # threshold between single and double rotations
        self._delta = 1.0 / (2.0 - self._alpha)
        self._root: Optional[NodeBase] = root

    @classmethod
    def from_sorted_items(
        cls,
        items: Iterable[Tuple[Any, Any]],
        alpha: float = DEFAULT_ALPHA,
    ) -> 'WBTreeBase':
        """
        Build a perfectly weight-balanced tree from a known-size sequence.

        Args:
            items: (key, value) pairs with strictly increasing keys.
            alpha (float): The balance factor of the new tree.

        Returns:
            WBTreeBase: A new tree holding exactly the given items.

        Raises:
            ValueError: If the keys are not strictly increasing.
        """
        items = list(items)
        for (k0, _), (k1, _) in zip(items, items[1:]):
            if not k0 < k1:
                raise ValueError(f"from_sorted_items(): keys must be strictly increasing, got {k0!r} then {k1!r}")

        tree = cls(alpha)
        if not items:
            return tree

        def _build(lo: int, hi: int) -> NodeBase:
            if hi - lo == 1:
                key, value = items[lo]
                return tree._make_leaf(key, value)
            mid = (lo + hi) // 2
            left = _build(lo, mid)
            right = _build(mid, hi)
            return InteriorNode(items[mid - 1][0], left, right)

        tree._root = _build(0, len(items))
        logger.debug(f"Bulk-built {type(tree).__name__} with {len(items)} leaves")
        return tree

    # Read-only properties
    @property
    def root(self) -> Optional[NodeBase]:
        return self._root

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def height(self) -> int:
        """Height of the root; 0 for an empty or single-leaf tree."""
        return height(self._root)

    @property
    def leaf_count(self) -> int:
        """Number of leaves, which equals the number of distinct keys."""
        return weight(self._root)

    def is_empty(self) -> bool:
        return self._root is None

    def __len__(self) -> int:
        return self.leaf_count

    def __contains__(self, key: Any) -> bool:
        return self._find_leaf(key) is not None

    def __str__(self):
        if self.is_empty():
            return f"Empty {self.__class__.__name__}"
        return f"{self.__class__.__name__}(alpha={self._alpha}, leaves={self.leaf_count}, height={self.height})"

    __repr__ = __str__

    # Public API
    @track_performance
    def insert(self, key: Any, value: Any) -> bool:
        """
        Insert a new key with its value.

        Args:
            key: A key comparable with all stored keys.
            value: The payload stored at the new leaf.

        Returns:
            bool: True if the key was inserted, False if it was already present
                  (the tree is left unchanged).
        """
        if self._root is None:
            self._root = self._make_leaf(key, value)
            return True

        path, leaf = self._descend(key)
        if leaf.key == key:
            return False

        self._split_leaf(path, leaf, self._make_leaf(key, value))
        return True

    @track_performance
    def delete(self, key: Any) -> bool:
        """
        Remove the leaf holding `key`.

        Returns:
            bool: True if a leaf was removed, False if the key was absent.
        """
        return self._remove_leaf(key) is not None

    def retrieve(self, key: Any) -> RetrievalResult:
        """
        Search for the leaf holding `key` and its in-order successor.

        Iteratively descends from the root in O(height). While descending,
        the right sibling of the lowest left turn is remembered; its leftmost
        leaf is the successor of the leaf we end up at.

        Args:
            key: The key to search for.

        Returns:
            RetrievalResult: Contains:
                found_leaf (Optional[LeafNode]): The leaf for `key`, or None.
                next_leaf (Optional[LeafNode]): The leaf with the next larger key, or None.
        """
        if self._root is None:
            return RetrievalResult(None, None)

        node = self._root
        successor_subtree: Optional[NodeBase] = None
        while not node.is_leaf():
            if key <= node.key:
                successor_subtree = node.right
                node = node.left
            else:
                node = node.right

        if key < node.key:
            return RetrievalResult(None, node)

        next_leaf = leftmost_leaf(successor_subtree) if successor_subtree is not None else None
        if key == node.key:
            return RetrievalResult(node, next_leaf)
        return RetrievalResult(None, next_leaf)

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value stored under `key`, or `default` if absent."""
        leaf = self._find_leaf(key)
        return default if leaf is None else leaf.value

    def traverse(self, visitor: Callable[[NodeBase], Any]) -> None:
        """
        Visit every node exactly once in pre-order (node, left subtree,
        right subtree). Used to verify global invariants after mutations.
        """
        if self._root is None:
            return
        stack = [self._root]
        while stack:
            node = stack.pop()
            visitor(node)
            if not node.is_leaf():
                stack.append(node.right)
                stack.append(node.left)

    def iter_leaves(self) -> Iterator[LeafNode]:
        """
        Iterates over all leaves in ascending key order.

        Yields:
            LeafNode: Each leaf, left to right.
        """
        stack: List[NodeBase] = []
        node = self._root
        while stack or node is not None:
            while node is not None and not node.is_leaf():
                stack.append(node)
                node = node.left
            if node is not None:
                yield node
            if not stack:
                return
            node = stack.pop().right

    __iter__ = iter_leaves

    def keys(self) -> List[Any]:
        return [leaf.key for leaf in self.iter_leaves()]

    def items(self) -> List[Tuple[Any, Any]]:
        return [(leaf.key, leaf.value) for leaf in self.iter_leaves()]

    # Private Methods
    def _make_leaf(self, key: Any, value: Any) -> LeafNode:
        """Build the leaf stored for a newly inserted key."""
        return LeafNode(key, value)

    def _descend(self, key: Any) -> Tuple[List[InteriorNode], LeafNode]:
        """
        Walk from the root to the leaf position of `key`.

        Returns:
            The interior nodes on the way down (root first) and the leaf
            reached. The leaf holds `key` iff `key` is stored in the tree.
        """
        path: List[InteriorNode] = []
        node = self._root
        while not node.is_leaf():
            path.append(node)
            node = node.left if key <= node.key else node.right
        return path, node

    def _find_leaf(self, key: Any) -> Optional[LeafNode]:
        if self._root is None:
            return None
        node = self._root
        while not node.is_leaf():
            node = node.left if key <= node.key else node.right
        return node if node.key == key else None

    def _replace_child(
        self,
        parent: Optional[InteriorNode],
        old: NodeBase,
        new: NodeBase,
    ) -> None:
        """Put `new` in the slot of `parent` (or the root slot) that held `old`."""
        if parent is None:
            self._root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    def _split_leaf(self, path: List[InteriorNode], leaf: LeafNode, new_leaf: LeafNode) -> None:
        """
        Replace `leaf` by an interior node holding `leaf` and `new_leaf` in
        key order, then restore balance on the way back to the root.
        """
        if new_leaf.key < leaf.key:
            split = InteriorNode(new_leaf.key, new_leaf, leaf)
        else:
            split = InteriorNode(leaf.key, leaf, new_leaf)

        self._replace_child(path[-1] if path else None, leaf, split)
        PerformanceTracker.get_instance().count("split_leaf")
        logger.debug(f"Split leaf {leaf.key!r} for new key {new_leaf.key!r}")

        for node in path:
            node.size += 1
        self._rebalance_path(path)

    def _remove_leaf(self, key: Any) -> Optional[LeafNode]:
        """
        Detach the leaf holding `key` and rebalance.

        The sibling subtree takes over the parent's position. An interior
        sibling is copied into the parent so the parent keeps its identity;
        a leaf sibling is linked into the grandparent's slot directly.

        Returns:
            Optional[LeafNode]: The detached leaf, or None if `key` is absent.
        """
        if self._root is None:
            return None

        path, leaf = self._descend(key)
        if leaf.key != key:
            return None

        if not path:
            self._root = None
            logger.debug(f"Removed last leaf {key!r}")
            return leaf

        parent = path[-1]
        sibling = parent.right if parent.left is leaf else parent.left
        ancestors = path[:-1]

        if sibling.is_leaf():
            self._replace_child(ancestors[-1] if ancestors else None, parent, sibling)
        else:
            copy_node(parent, sibling)
        PerformanceTracker.get_instance().count("splice_sibling")

        for node in ancestors:
            node.size -= 1
            # the removed key was the maximum of this node's left subtree
            if node.key == key:
                node.key = rightmost_leaf(node.left).key

        logger.debug(f"Removed leaf {key!r}, spliced sibling {sibling.key!r}")
        self._rebalance_path(ancestors)
        return leaf

    def _rebalance_path(self, path: List[InteriorNode]) -> None:
        """Restore the weight-balance of each node on `path`, bottom-up."""
        for node in reversed(path):
            self._rebalance_node(node)

    def _rebalance_node(self, node: InteriorNode) -> None:
        """
        Apply at most one single or double rotation at `node`.

        If the heavy child's inner grandchild (the one facing the light side)
        holds no more than delta = 1 / (2 - alpha) of the heavy child's
        weight, a single rotation toward the light side suffices. Otherwise
        the heavy child is first rotated the opposite way.

        For alpha above 1/2 both children may be light; the heavier one is
        then treated as heavy. A leaf heavy child cannot be rotated, so the
        node is left as it is.
        """
        left_weight, right_weight = node.left.weight(), node.right.weight()
        if min(left_weight, right_weight) >= self._alpha * node.size:
            return

        tracker = PerformanceTracker.get_instance()
        if left_weight <= right_weight:
            heavy = node.right
            if heavy.is_leaf():
                return
            inner = heavy.left
            if not inner.is_leaf() and inner.weight() > self._delta * heavy.size:
                rotate_right(heavy)
                tracker.count("double_rotation")
            rotate_left(node)
        else:
            heavy = node.left
            if heavy.is_leaf():
                return
            inner = heavy.right
            if not inner.is_leaf() and inner.weight() > self._delta * heavy.size:
                rotate_left(heavy)
                tracker.count("double_rotation")
            rotate_right(node)

    def print_structure(self, indent: int = 0, max_depth: Optional[int] = None) -> str:
        """
        Return an indented, right-subtree-first dump of the tree for debugging.

        Args:
            indent (int): Number of leading spaces.
            max_depth (Optional[int]): Stop descending below this depth.
        """
        if self._root is None:
            return f"{' ' * indent}Empty {self.__class__.__name__}"

        result = []

        def _collect(node: NodeBase, depth: int) -> None:
            prefix = ' ' * (indent + 4 * depth)
            if max_depth is not None and depth > max_depth:
                result.append(f"{prefix}... (max depth reached)")
                return
            if node.is_leaf():
                result.append(f"{prefix}Leaf(key={node.key!r}, value={node.value!r})")
                return
            _collect(node.right, depth + 1)
            result.append(f"{prefix}Interior(key={node.key!r}, size={node.size})")
            _collect(node.left, depth + 1)

        _collect(self._root, 0)
        return "\n".join(result)
