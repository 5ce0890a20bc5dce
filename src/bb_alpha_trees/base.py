from abc import ABC, abstractmethod
import math

from typing import Any, NamedTuple, Optional, TypeVar, Generic, TYPE_CHECKING

if TYPE_CHECKING:
    from bb_alpha_trees.node import LeafNode
    from bb_alpha_trees.value_chain_base import ValueChainBase

# Constants
DEFAULT_ALPHA = 0.29
# Upper bound for which single/double rotations provably restore BB[alpha]
MAX_SAFE_ALPHA = 1 - 1 / math.sqrt(2)
DEFAULT_CHAIN_CAPACITY = 8


class InvariantError(AssertionError):
    """Raised when a structural precondition or tree invariant is violated."""
    pass


T = TypeVar("T", bound="AbstractLeafTree")

class AbstractLeafTree(ABC, Generic[T]):
    """
    Abstract base class for ordered containers that keep all values at leaves
    and use interior nodes purely as routing separators.
    """

    @abstractmethod
    def insert(self, key: Any, value: Any):
        """
        Insert a value under the given key.

        Parameters:
            key: A totally ordered key.
            value: The payload to store at the key's leaf.
        """
        pass

    @abstractmethod
    def delete(self, key: Any):
        """
        Remove the leaf holding the given key, if present.

        Parameters:
            key: The key to remove.
        """
        pass

    @abstractmethod
    def retrieve(self, key: Any) -> 'RetrievalResult':
        """
        Retrieve the leaf associated with the given key.

        Parameters:
            key: The key of the leaf to retrieve.

        Returns:
            RetrievalResult: A named tuple containing:
                - found_leaf: The leaf holding the key, or None.
                - next_leaf: The leaf with the smallest key greater than `key`,
                             or None if no such leaf exists.
        """
        pass

    @abstractmethod
    def traverse(self, visitor) -> None:
        """Visit every node (interior and leaf) once, in pre-order."""
        pass


class RetrievalResult(NamedTuple):
    """
    A container for the result of a lookup in an AbstractLeafTree.

    Attributes:
        found_leaf (Optional[LeafNode]):
            The leaf holding the searched key if found; otherwise, None.
        next_leaf (Optional[LeafNode]):
            The in-order successor leaf, or None if the searched key is
            greater than or equal to every stored key.
    """
    found_leaf: Optional['LeafNode']
    next_leaf: Optional['LeafNode']


class IntervalEntry(NamedTuple):
    """A key together with the value chain stored under it."""
    key: Any
    values: 'ValueChainBase'


def check_alpha(alpha) -> float:
    """
    Validate a balance factor.

    Parameters:
        alpha (float): The weight-balance factor, 0 < alpha < 1.

    Returns:
        float: The validated alpha.

    Raises:
        TypeError: If alpha is not a real number.
        ValueError: If alpha is outside the open interval (0, 1).
    """
    if isinstance(alpha, bool) or not isinstance(alpha, (int, float)):
        raise TypeError(f"alpha must be a float, got {type(alpha).__name__!r}")
    if not 0 < alpha < 1:
        raise ValueError(f"alpha must satisfy 0 < alpha < 1, got {alpha!r}")
    return float(alpha)


def check_capacity(k: int) -> int:
    """
    Validate the per-segment capacity of a value chain.

    Raises:
        ValueError: If k is not a positive int.
    """
    if isinstance(k, bool) or not isinstance(k, int) or k <= 0:
        raise ValueError(f"capacity must be a positive int, got {k!r}")
    return k
