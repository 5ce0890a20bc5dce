"""Multi-value leaf tree base implementation"""

from __future__ import annotations
import logging
from typing import Any, List, Type

from bb_alpha_trees.base import IntervalEntry
from bb_alpha_trees.node import NodeBase, LeafNode
from bb_alpha_trees.value_chain_base import ValueChainBase
from bb_alpha_trees.wb_tree_base import WBTreeBase
from bb_alpha_trees.profiling import track_performance

logger = logging.getLogger(__name__)


class MultiLeafTreeBase(WBTreeBase):
    """
    A weight-balanced leaf tree that keeps every value ever inserted for a
    key, in insertion order, in a value chain stored at the key's leaf.

    A leaf is created on the first insert of a key and lives until the key
    is deleted; repeated inserts only append to its chain. The factory
    injects:
      - ChainClass : which value chain to build for each leaf
    """
    __slots__ = ()

    ChainClass: Type[ValueChainBase] = ValueChainBase

    # Public API
    @track_performance
    def insert(self, key: Any, value: Any) -> None:
        """
        Add `value` to the chain of `key`.

        A new key gets a fresh leaf (and the tree is rebalanced); an
        existing key's chain is extended in place without structural change.
        """
        if self._root is None:
            self._root = self._make_leaf(key, value)
            return

        path, leaf = self._descend(key)
        if leaf.key == key:
            leaf.value.append(value)
            return

        self._split_leaf(path, leaf, self._make_leaf(key, value))

    def find(self, key: Any) -> ValueChainBase:
        """
        Return the live value chain of `key`.

        The returned chain is the tree's own; it reflects later appends and
        must be considered stale after `set` or `delete` on the same key.
        An absent key yields a new empty chain.
        """
        leaf = self._find_leaf(key)
        if leaf is None:
            return self.ChainClass()
        return leaf.value

    def find_snapshot(self, key: Any) -> List[Any]:
        """Return an independent list of the values of `key`, in insertion order."""
        leaf = self._find_leaf(key)
        if leaf is None:
            return []
        return leaf.value.entries()

    @track_performance
    def delete(self, key: Any) -> ValueChainBase:
        """
        Remove `key` together with all of its values.

        Returns:
            ValueChainBase: The chain that was stored for `key`, or an empty
                            chain if `key` was absent.
        """
        leaf = self._remove_leaf(key)
        if leaf is None:
            return self.ChainClass()
        return leaf.value

    @track_performance
    def set(self, key: Any, value: Any) -> None:
        """
        Replace all values of `key` by exactly `[value]`.

        An existing leaf gets a new chain in place, so the tree shape is not
        touched; an absent key is inserted.
        """
        leaf = self._find_leaf(key)
        if leaf is None:
            self.insert(key, value)
            return
        leaf.value = self.ChainClass([value])

    def interval_find(self, start: Any, end: Any) -> List[IntervalEntry]:
        """
        Collect every stored key k with start <= k < end.

        Subtrees that cannot intersect the half-open range are skipped, so
        the cost is O(height + number of reported keys).

        Returns:
            List[IntervalEntry]: (key, values) pairs in ascending key order,
                                 with each key's live value chain. Empty if no
                                 key falls in the range.
        """
        result: List[IntervalEntry] = []
        if self._root is None or not start < end:
            return result

        stack: List[NodeBase] = [self._root]
        while stack:
            node = stack.pop()
            if node.is_leaf():
                if start <= node.key < end:
                    result.append(IntervalEntry(node.key, node.value))
                continue
            # keys <= node.key are on the left, larger keys on the right
            if node.key < end:
                stack.append(node.right)
            if start <= node.key:
                stack.append(node.left)
        return result

    def value_count(self) -> int:
        """Total number of values stored over all keys."""
        return sum(len(leaf.value) for leaf in self.iter_leaves())

    def items(self):
        return [(leaf.key, leaf.value.entries()) for leaf in self.iter_leaves()]

    # Private Methods
    def _make_leaf(self, key: Any, value: Any) -> LeafNode:
        return LeafNode(key, self.ChainClass([value]))
