"""Tests for weight-balanced leaf tree retrieval, traversal and bulk build"""
# pylint: skip-file

import unittest
import logging

from bb_alpha_trees.base import RetrievalResult
from bb_alpha_trees.wb_tree_base import WBTreeBase
from tests.utils import value_for
from tests.wb.base import TreeTestCase

# Configure logging for test
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TestRetrieve(TreeTestCase):

    def setUp(self):
        super().setUp()
        # even keys only, so odd keys fall between leaves
        self.keys = list(range(2, 41, 2))
        self.build(self.keys)
        self.expected_leaf_keys = self.keys

    def _assert_retrieval_result(self, result, expected_key=None, expected_next_key=None):
        """Helper method to assert retrieval results"""
        self.assertIsInstance(result, RetrievalResult)
        if expected_key is None:
            self.assertIsNone(result.found_leaf, "Expected no found leaf")
        else:
            self.assertIsNotNone(result.found_leaf, f"Expected a found leaf {expected_key}")
            self.assertEqual(result.found_leaf.key, expected_key)
            self.assertEqual(result.found_leaf.value, value_for(expected_key))

        if expected_next_key is None:
            self.assertIsNone(result.next_leaf, "Expected no next leaf")
        else:
            self.assertIsNotNone(result.next_leaf, f"Expected a next leaf {expected_next_key}")
            self.assertEqual(result.next_leaf.key, expected_next_key)

    def test_retrieve_existing_keys(self):
        for key in self.keys:
            with self.subTest(key=key):
                expected_next = key + 2 if key < 40 else None
                self._assert_retrieval_result(self.tree.retrieve(key), key, expected_next)

    def test_retrieve_between_keys(self):
        for key in range(3, 40, 2):
            with self.subTest(key=key):
                self._assert_retrieval_result(self.tree.retrieve(key), None, key + 1)

    def test_retrieve_below_min(self):
        self._assert_retrieval_result(self.tree.retrieve(1), None, 2)

    def test_retrieve_above_max(self):
        self._assert_retrieval_result(self.tree.retrieve(41), None, None)

    def test_retrieve_from_empty(self):
        tree = self.new_tree()
        self.assertEqual(tree.retrieve(1), RetrievalResult(None, None))

    def test_get_with_default(self):
        self.assertEqual(self.tree.get(4), value_for(4))
        self.assertIsNone(self.tree.get(5))
        self.assertEqual(self.tree.get(5, "missing"), "missing")


class TestTraverse(TreeTestCase):

    def test_pre_order(self):
        self.tree = WBTreeBase.from_sorted_items([(k, value_for(k)) for k in range(1, 5)])
        visited = []
        self.tree.traverse(lambda node: visited.append((node.is_leaf(), node.key)))
        self.assertEqual(visited, [
            (False, 2),
            (False, 1), (True, 1), (True, 2),
            (False, 3), (True, 3), (True, 4),
        ])

    def test_traverse_empty(self):
        visited = []
        self.tree.traverse(visited.append)
        self.assertEqual(visited, [])

    def test_iterates_leaves_in_order(self):
        self.build([5, 1, 4, 2, 3])
        self.assertEqual([leaf.key for leaf in self.tree], [1, 2, 3, 4, 5])


class TestBulkBuild(TreeTestCase):

    def test_from_sorted_items(self):
        for n in (1, 2, 3, 7, 64, 100):
            with self.subTest(n=n):
                self.tree = WBTreeBase.from_sorted_items(
                    [(k, value_for(k)) for k in range(n)], alpha=self.ALPHA
                )
                self.assertEqual(self.tree.leaf_count, n)
                self.assertEqual(self.tree.keys(), list(range(n)))
                self.tearDown()

    def test_from_empty(self):
        self.tree = WBTreeBase.from_sorted_items([])
        self.assertTrue(self.tree.is_empty())

    def test_rejects_unsorted_or_duplicate_keys(self):
        with self.assertRaises(ValueError):
            WBTreeBase.from_sorted_items([(2, "b"), (1, "a")])
        with self.assertRaises(ValueError):
            WBTreeBase.from_sorted_items([(1, "a"), (1, "b")])

    def test_insert_after_bulk_build(self):
        self.tree = WBTreeBase.from_sorted_items([(k, value_for(k)) for k in range(0, 50, 2)])
        self.build(range(1, 50, 2))
        self.expected_leaf_keys = list(range(50))


if __name__ == "__main__":
    unittest.main()
