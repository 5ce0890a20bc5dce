"""
Weight-balanced (BB[alpha]) leaf trees.

All values live at leaves; interior nodes only route searches. The
multi-value variant keeps an ordered value chain per key and answers
half-open interval queries.
"""

from bb_alpha_trees.base import (
    DEFAULT_ALPHA,
    DEFAULT_CHAIN_CAPACITY,
    IntervalEntry,
    InvariantError,
    RetrievalResult,
)
from bb_alpha_trees.node import LeafNode, InteriorNode
from bb_alpha_trees.wb_tree_base import WBTreeBase
from bb_alpha_trees.multi_leaf_tree_base import MultiLeafTreeBase
from bb_alpha_trees.value_chain_base import ValueChainBase
from bb_alpha_trees.factory import (
    make_leaf_tree_classes,
    create_wb_tree,
    create_multi_leaf_tree,
)

__all__ = [
    'DEFAULT_ALPHA',
    'DEFAULT_CHAIN_CAPACITY',
    'IntervalEntry',
    'InvariantError',
    'RetrievalResult',
    'LeafNode',
    'InteriorNode',
    'WBTreeBase',
    'MultiLeafTreeBase',
    'ValueChainBase',
    'make_leaf_tree_classes',
    'create_wb_tree',
    'create_multi_leaf_tree',
]
