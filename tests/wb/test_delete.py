"""Tests for weight-balanced leaf tree deletion"""
# pylint: skip-file

import random
import unittest
import logging

from bb_alpha_trees.stats import tree_stats_, collect_leaf_keys
from tests.utils import assert_tree_invariants_tc, value_for
from tests.wb.base import TreeTestCase

# Configure logging for test
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

NUM_EL = 100


class TestDelete(TreeTestCase):

    def test_delete_from_empty(self):
        self.assertFalse(self.tree.delete(1))
        self.assertTrue(self.tree.is_empty())

    def test_delete_missing_key(self):
        self.build(range(1, 11))
        self.assertFalse(self.tree.delete(11))
        self.assertFalse(self.tree.delete(0))
        self.expected_leaf_count = 10

    def test_delete_only_leaf(self):
        self.tree.insert(1, value_for(1))
        self.assertTrue(self.tree.delete(1))
        self.assertTrue(self.tree.is_empty())
        self.assertEqual(self.tree.leaf_count, 0)

    def test_delete_leaf_with_leaf_sibling_at_root(self):
        self.build([1, 2])
        self.assertTrue(self.tree.delete(1))
        self.assertTrue(self.tree.root.is_leaf())
        self.assertEqual(self.tree.root.key, 2)
        self.expected_leaf_keys = [2]

    def test_delete_links_leaf_sibling_into_grandparent(self):
        self.build([1, 2, 3, 4])
        root = self.tree.root
        left = root.left
        self.assertFalse(left.is_leaf())
        self.assertTrue(self.tree.delete(1))
        self.assertIs(self.tree.root, root)
        self.assertTrue(root.left.is_leaf())
        self.assertEqual(root.left.key, 2)
        self.assertEqual(root.key, 2)
        self.expected_leaf_keys = [2, 3, 4]

    def test_delete_keeps_parent_identity_for_interior_sibling(self):
        # root(2; (1; 1, 2), (3; 3, (4; 4, 5)))
        self.build([1, 2, 3, 4, 5])
        parent = self.tree.root.right
        self.assertEqual(parent.key, 3)
        self.assertFalse(parent.right.is_leaf())
        self.assertTrue(self.tree.delete(3))
        self.assertIs(self.tree.root.right, parent)
        self.assertEqual(parent.key, 4)
        self.assertEqual(parent.size, 2)
        self.expected_leaf_keys = [1, 2, 4, 5]

    def test_delete_rightmost_of_left_subtree_updates_separator(self):
        self.tree = type(self.tree).from_sorted_items(
            [(k, value_for(k)) for k in range(1, 9)], self.ALPHA
        )
        root = self.tree.root
        self.assertEqual(root.key, 4)
        self.assertTrue(self.tree.delete(4))
        self.assertIs(self.tree.root, root)
        self.assertEqual(root.key, 3)
        self.expected_leaf_keys = [1, 2, 3, 5, 6, 7, 8]

    def test_delete_decrements_leaf_count(self):
        self.build(range(1, NUM_EL + 1))
        for i, key in enumerate(range(1, NUM_EL + 1, 3), start=1):
            self.assertTrue(self.tree.delete(key))
            self.assertEqual(self.tree.leaf_count, NUM_EL - i)
        self.expected_leaf_keys = [k for k in range(1, NUM_EL + 1) if (k - 1) % 3 != 0]

    def test_second_delete_returns_false(self):
        self.build(range(1, 21))
        self.assertTrue(self.tree.delete(10))
        self.assertFalse(self.tree.delete(10))
        self.assertNotIn(10, self.tree)
        self.expected_leaf_count = 19

    def test_balance_after_every_delete(self):
        for name, keys in self.key_orders(NUM_EL):
            with self.subTest(order=name):
                tree = self.build(keys, self.new_tree())
                delete_order = list(keys)
                random.Random(7).shuffle(delete_order)
                remaining = set(keys)
                for key in delete_order:
                    self.assertTrue(tree.delete(key))
                    remaining.discard(key)
                    stats = tree_stats_(tree)
                    assert_tree_invariants_tc(self, tree, stats)
                    self.assertEqual(collect_leaf_keys(tree), sorted(remaining))
                self.assertTrue(tree.is_empty())

    def test_delete_from_one_side_rebalances(self):
        self.build(range(1, NUM_EL + 1))
        for key in range(1, NUM_EL // 2 + 1):
            self.tree.delete(key)
            assert_tree_invariants_tc(self, self.tree, tree_stats_(self.tree))
        self.expected_leaf_keys = list(range(NUM_EL // 2 + 1, NUM_EL + 1))

    def test_interleaved_inserts_and_deletes(self):
        rng = random.Random(1234)
        present = set()
        for _ in range(500):
            key = rng.randint(1, 60)
            if key in present and rng.random() < 0.5:
                self.assertTrue(self.tree.delete(key))
                present.discard(key)
            else:
                self.assertEqual(self.tree.insert(key, value_for(key)), key not in present)
                present.add(key)
            assert_tree_invariants_tc(self, self.tree, tree_stats_(self.tree))
        self.expected_leaf_keys = sorted(present)

    def test_reinsert_after_delete(self):
        self.build(range(1, 11))
        self.tree.delete(5)
        self.assertTrue(self.tree.insert(5, "again"))
        self.assertEqual(self.tree.get(5), "again")
        self.expected_leaf_keys = list(range(1, 11))


if __name__ == "__main__":
    unittest.main()
