#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
test_priority_queue_item.py
---------------------------
Tests for `PriorityQueueItem` and `HeapOptions`.
"""

import unittest

from heap_options import HeapOptions, resolve_options
from priority_queue_item import PriorityQueueItem


class _CustomEquatable:
    def __init__(self, ident: int, name: str):
        self.ident = ident
        self.name = name

    def __eq__(self, other):
        return (
            isinstance(other, _CustomEquatable)
            and self.ident == other.ident
            and self.name == other.name
        )

    def __hash__(self):
        return hash((self.ident, self.name))


class TestPriorityQueueItem(unittest.TestCase):
    def test_create(self):
        item = PriorityQueueItem.create(10, "TestItem")
        self.assertIsNotNone(item)
        self.assertEqual(item.priority, 10)
        self.assertEqual(item.value, "TestItem")

    def test_create_with_different_types(self):
        int_item = PriorityQueueItem.create(5, 100)
        str_item = PriorityQueueItem.create(3, "StringItem")
        self.assertEqual((int_item.priority, int_item.value), (5, 100))
        self.assertEqual((str_item.priority, str_item.value), (3, "StringItem"))

    def test_create_with_custom_type(self):
        obj = _CustomEquatable(1, "TestObject")
        item = PriorityQueueItem.create(7, obj)
        self.assertEqual(item.priority, 7)
        self.assertEqual(item.value, _CustomEquatable(1, "TestObject"))
        self.assertIsInstance(item.value, _CustomEquatable)
        self.assertEqual(item.value.name, "TestObject")

    def test_read_only(self):
        item = PriorityQueueItem(1, "a")
        with self.assertRaises(AttributeError):
            item.priority = 2
        with self.assertRaises(AttributeError):
            item.value = "b"
        with self.assertRaises(AttributeError):
            del item.priority
        self.assertEqual((item.priority, item.value), (1, "a"))

    def test_deep_copy(self):
        obj = _CustomEquatable(2, "shared")
        item = PriorityQueueItem.create(4, obj)
        clone = item.deep_copy()
        self.assertIsNot(clone, item)
        self.assertIs(clone.value, obj)
        self.assertEqual(clone.priority, 4)

    def test_items_compare_by_identity(self):
        self.assertNotEqual(PriorityQueueItem(1, "a"), PriorityQueueItem(1, "a"))

    def test_repr(self):
        self.assertEqual(
            repr(PriorityQueueItem(2, "Call boss")),
            "PriorityQueueItem(priority=2, value='Call boss')",
        )


class TestHeapOptions(unittest.TestCase):
    def test_defaults(self):
        self.assertTrue(HeapOptions().is_hash_map_enabled)

    def test_disable_hash_map_chains(self):
        options = HeapOptions()
        self.assertIs(options.disable_hash_map(), options)
        self.assertFalse(options.is_hash_map_enabled)

    def test_resolve(self):
        self.assertTrue(resolve_options(None).is_hash_map_enabled)
        given = HeapOptions(False)
        self.assertIs(resolve_options(given), given)

        def builder(options):
            options.is_hash_map_enabled = False

        self.assertFalse(resolve_options(builder).is_hash_map_enabled)
        with self.assertRaises(TypeError):
            resolve_options(42)


if __name__ == "__main__":
    unittest.main(verbosity=2)
