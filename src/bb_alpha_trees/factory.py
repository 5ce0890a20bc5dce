"""Factory for the creation of weight-balanced leaf trees"""

from typing import Type, Tuple, Dict
import logging

from bb_alpha_trees.base import DEFAULT_ALPHA, DEFAULT_CHAIN_CAPACITY, check_capacity
from bb_alpha_trees.wb_tree_base import WBTreeBase
from bb_alpha_trees.multi_leaf_tree_base import MultiLeafTreeBase
from bb_alpha_trees.value_chain_base import ValueChainBase, ValueChainNodeBase

# Configure logging for the whole package
package_logger = logging.getLogger("bb_alpha_trees")
if not package_logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO)

logger = logging.getLogger(__name__)

# Cache for previously created classes to avoid recreating them
_class_cache: Dict[int, Tuple[Type, Type, Type]] = {}


def make_leaf_tree_classes(K: int) -> Tuple[
    Type[MultiLeafTreeBase],
    Type[ValueChainBase],
    Type[ValueChainNodeBase]
]:
    """
    Factory function to generate multi-value tree and value chain classes
    specialized for a given chain segment capacity K.

    Returns:
        MultiLeafTreeK   – subclass of MultiLeafTreeBase with ChainClass=ValueChainK.
        ValueChainK      – subclass of ValueChainBase with ChainNodeClass=ValueChainNodeK.
        ValueChainNodeK  – subclass of ValueChainNodeBase with CAPACITY=K.
    """
    check_capacity(K)

    # Check if we've already created classes for this K value
    if K in _class_cache:
        logger.debug(f"Using cached classes for K={K}")
        return _class_cache[K]

    logger.debug(f"Creating new classes for K={K}")

    # 1) Chain segment: capacity K
    ValueChainNodeK = type(
        f"ValueChainNode_K{K}",
        (ValueChainNodeBase,),
        {
            "CAPACITY": K,
            "__slots__": ()
        }
    )
    logger.debug(f"Created ValueChainNode_K{K} with CAPACITY={K}")

    # 2) Chain class points at the segment class
    ValueChainK = type(
        f"ValueChain_K{K}",
        (ValueChainBase,),
        {
            "ChainNodeClass": ValueChainNodeK,
            "__slots__": ()
        }
    )
    logger.debug(f"Created ValueChain_K{K} with ChainNodeClass={ValueChainNodeK.__name__}")

    # 3) Tree class builds its leaf chains from ValueChainK
    MultiLeafTreeK = type(
        f"MultiLeafTree_K{K}",
        (MultiLeafTreeBase,),
        {
            "ChainClass": ValueChainK,
            "__slots__": ()
        }
    )
    logger.debug(f"Created MultiLeafTree_K{K} with ChainClass={ValueChainK.__name__}")

    # Cache the created classes
    _class_cache[K] = (MultiLeafTreeK, ValueChainK, ValueChainNodeK)
    logger.debug(f"Cached classes for K={K}")

    return MultiLeafTreeK, ValueChainK, ValueChainNodeK


def create_wb_tree(alpha: float = DEFAULT_ALPHA) -> WBTreeBase:
    """
    Create a new, empty single-value weight-balanced leaf tree.

    Args:
        alpha (float): The balance factor, 0 < alpha < 1.
    """
    tree = WBTreeBase(alpha)
    logger.debug(f"Created tree instance of type {type(tree).__name__} with alpha={alpha}")
    return tree


def create_multi_leaf_tree(
    alpha: float = DEFAULT_ALPHA,
    K: int = DEFAULT_CHAIN_CAPACITY,
) -> MultiLeafTreeBase:
    """
    Create a new, empty multi-value leaf tree.

    Args:
        alpha (float): The balance factor, 0 < alpha < 1.
        K (int): The capacity of each value chain segment.

    Returns:
        A new empty MultiLeafTree with the specified alpha and chain capacity
    """
    MultiLeafTreeK, _, _ = make_leaf_tree_classes(K)
    tree = MultiLeafTreeK(alpha)
    logger.debug(f"Created tree instance of type {type(tree).__name__} with alpha={alpha}")
    return tree
