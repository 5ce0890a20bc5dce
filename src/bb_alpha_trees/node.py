"""Leaf and interior nodes of a leaf-oriented search tree"""

from __future__ import annotations
from typing import Any


class NodeBase:
    """
    Common base of the two node variants.

    The variant is decided by the class tag `IS_LEAF`, never by probing
    which fields happen to be set.
    """
    __slots__ = ("key",)

    IS_LEAF: bool

    def is_leaf(self) -> bool:
        return self.IS_LEAF

    # Content changes under rotation; identity is all that stays fixed.
    __hash__ = None


class LeafNode(NodeBase):
    """
    A leaf stores a key together with its payload.

    Attributes:
        key: The key of the stored entry.
        value: An opaque payload (plain tree) or a value chain (multi-value tree).
    """
    __slots__ = ("value",)

    IS_LEAF = True

    def __init__(self, key: Any, value: Any = None) -> None:
        self.key = key
        self.value = value

    def weight(self) -> int:
        return 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeBase):
            return NotImplemented
        return other.is_leaf() and self.key == other.key and self.value == other.value

    def __repr__(self) -> str:
        return f"LeafNode(key={self.key!r}, value={self.value!r})"


class InteriorNode(NodeBase):
    """
    An interior node routes searches by its separator key.

    Keys less than or equal to `key` live in `left`, greater keys in `right`.
    The separator equals the key of the rightmost leaf of the left subtree.

    `size` caches the number of leaves below this node. It is set from the
    children on construction and kept current by the tree's mutators and
    the rotation helpers; `stats.tree_stats_` recounts it to detect drift.
    """
    __slots__ = ("left", "right", "size")

    IS_LEAF = False

    def __init__(self, key: Any, left: NodeBase, right: NodeBase) -> None:
        self.key = key
        self.left = left
        self.right = right
        self.size = left.weight() + right.weight()

    def weight(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeBase):
            return NotImplemented
        if other.is_leaf() or self.key != other.key:
            return False
        # pairwise walk over both shapes
        stack = [(self.left, other.left), (self.right, other.right)]
        while stack:
            a, b = stack.pop()
            if a is b:
                continue
            if a.is_leaf() or b.is_leaf():
                if a != b:
                    return False
                continue
            if a.key != b.key:
                return False
            stack.append((a.left, b.left))
            stack.append((a.right, b.right))
        return True

    def __repr__(self) -> str:
        return f"InteriorNode(key={self.key!r}, left={self.left!r}, right={self.right!r})"
