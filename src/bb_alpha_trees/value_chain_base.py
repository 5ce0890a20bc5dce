"""Value chain implementation"""

from typing import Any, Callable, Iterator, List, Optional, Type

from bb_alpha_trees.base import InvariantError


class ValueChainNodeBase:
    """
    A segment of a value chain.

    Each segment stores up to CAPACITY values in insertion order.
    """
    __slots__ = ("values", "next")

    # Default capacity that will be overridden by factory-created subclasses
    CAPACITY: int = 8

    def __init__(self):
        self.values: List[Any] = []
        self.next: Optional['ValueChainNodeBase'] = None

    def is_full(self) -> bool:
        return len(self.values) >= self.__class__.CAPACITY


class ValueChainBase:
    """
    An ordered FIFO of all values stored under one key, implemented as a
    singly linked list of fixed-capacity segments.

    Values are only ever appended at the tail; the chain never reorders or
    removes single values. A whole chain is dropped when its key is deleted.
    """
    __slots__ = ("head", "tail", "_length")

    # Will be assigned by factory
    ChainNodeClass: Type[ValueChainNodeBase] = ValueChainNodeBase

    def __init__(self, values=None):
        self.head: Optional[ValueChainNodeBase] = None
        self.tail: Optional[ValueChainNodeBase] = None
        self._length = 0
        if values is not None:
            for value in values:
                self.append(value)

    def append(self, value: Any) -> 'ValueChainBase':
        """
        Append a value at the end of the chain in O(1).

        Returns:
            ValueChainBase: The chain itself, so calls can be chained.
        """
        if self.tail is None:
            self.head = self.tail = self.ChainNodeClass()
        elif self.tail.is_full():
            node = self.ChainNodeClass()
            self.tail.next = node
            self.tail = node
        self.tail.values.append(value)
        self._length += 1
        return self

    @property
    def length(self) -> int:
        """Number of values in the chain, O(1)."""
        return self._length

    def __len__(self) -> int:
        return self._length

    def is_empty(self) -> bool:
        return self.head is None

    def entries(self) -> List[Any]:
        """Return an independent list snapshot of the values in insertion order."""
        return list(self)

    def each(self, visitor: Callable[[Any], Any]) -> None:
        """Call `visitor` with every value in insertion order."""
        for value in self:
            visitor(value)

    def physical_height(self) -> int:
        """Number of segments in this chain."""
        height = 0
        node = self.head
        while node is not None:
            height += 1
            node = node.next
        return height

    def __iter__(self) -> Iterator[Any]:
        node = self.head
        while node:
            yield from node.values
            node = node.next

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValueChainBase):
            return len(self) == len(other) and self.entries() == other.entries()
        if isinstance(other, (list, tuple)):
            return self.entries() == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.entries()!r})"

    def print_structure(self, indent: int = 0) -> str:
        """Return a per-segment string representation for debugging."""
        if self.is_empty():
            return f"{' ' * indent}Empty"

        result = []
        node = self.head
        index = 0
        while node:
            result.append(f"{' ' * indent}ChainNode(idx={index}, K={self.ChainNodeClass.CAPACITY}): {node.values!r}")
            node = node.next
            index += 1
        return "\n".join(result)

    def check_invariant(self) -> None:
        """
        Verifies that:
          1) head and tail are both None, or tail is the true last segment.
          2) Every segment except the tail is filled to CAPACITY and none is empty.
          3) The cached length equals the number of stored values.

        Raises:
            InvariantError: if any of these conditions fails.
        """
        if (self.head is None) != (self.tail is None):
            raise InvariantError("head and tail must both be set or both be None")
        if self.tail is not None and self.tail.next is not None:
            raise InvariantError("tail must reference the final segment")

        count = 0
        node = self.head
        while node is not None:
            if not node.values:
                raise InvariantError("value chain contains an empty segment")
            if node is not self.tail and len(node.values) != self.ChainNodeClass.CAPACITY:
                raise InvariantError(
                    f"non-tail segment holds {len(node.values)} values, "
                    f"expected {self.ChainNodeClass.CAPACITY}"
                )
            count += len(node.values)
            node = node.next

        if count != self._length:
            raise InvariantError(f"cached length {self._length} != stored values {count}")
