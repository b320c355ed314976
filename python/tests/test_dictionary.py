#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
test_dictionary.py
------------------

Checks the dict‑like protocol that ``Dictionary`` derives from the primitive
operations, using both ``OrderedMap`` and a tiny sorted‑list container to
show that the two are interchangeable.
"""

import bisect
import unittest
from typing import Any, List

from dictionary import Cursor, Dictionary, KeyNotFound
from ordered_map import OrderedMap


class _ListCursor(Cursor):
    def __init__(self, owner: "_SortedListDictionary", index: int) -> None:
        self._owner = owner
        self._index = index

    @property
    def key(self) -> Any:
        return self._owner._keys[self._index]

    @property
    def value(self) -> Any:
        return self._owner._values[self._index]

    def at_end(self) -> bool:
        return self._index >= len(self._owner._keys)

    def advance(self) -> "_ListCursor":
        self._index += 1
        return self

    def retreat(self) -> "_ListCursor":
        self._index -= 1
        return self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _ListCursor) and self._index == other._index


class _SortedListDictionary(Dictionary):
    """Reference container kept as two parallel sorted lists."""

    def __init__(self) -> None:
        self._keys: List[Any] = []
        self._values: List[Any] = []

    def _index(self, key: Any) -> int:
        return bisect.bisect_left(self._keys, key)

    def contains(self, key: Any) -> bool:
        i = self._index(key)
        return i < len(self._keys) and self._keys[i] == key

    def insert(self, key: Any, value: Any) -> None:
        i = self._index(key)
        if i < len(self._keys) and self._keys[i] == key:
            self._values[i] = value
        else:
            self._keys.insert(i, key)
            self._values.insert(i, value)

    def remove(self, key: Any) -> None:
        if self.contains(key):
            i = self._index(key)
            del self._keys[i]
            del self._values[i]

    def read(self, key: Any) -> Any:
        if not self.contains(key):
            raise KeyNotFound(key)
        return self._values[self._index(key)]

    def access(self, key: Any) -> Any:
        if not self.contains(key):
            self.insert(key, None)
        return self.read(key)

    def begin(self) -> _ListCursor:
        return _ListCursor(self, 0)

    def end(self) -> _ListCursor:
        return _ListCursor(self, len(self._keys))

    def __len__(self) -> int:
        return len(self._keys)


class TestDictionaryProtocol(unittest.TestCase):
    # ------------------------------------------------------------------
    #  Helpers
    # ------------------------------------------------------------------
    def _fill(self, container: Dictionary) -> Dictionary:
        container.update([(5, "five"), (2, "two"), (8, "eight"), (2, "TWO")])
        return container

    def implementations(self) -> List[Dictionary]:
        return [OrderedMap(), _SortedListDictionary()]

    # ------------------------------------------------------------------
    #  Derived protocol
    # ------------------------------------------------------------------
    def test_abstract_interface_cannot_be_instantiated(self):
        with self.assertRaises(TypeError):
            Dictionary()  # type: ignore[abstract]

    def test_mapping_protocol(self):
        for container in self.implementations():
            with self.subTest(type(container).__name__):
                self._fill(container)
                self.assertEqual(len(container), 3)
                self.assertTrue(container)
                self.assertIn(5, container)
                self.assertNotIn(3, container)
                self.assertEqual(container[2], "TWO")
                container[3] = "three"
                del container[8]
                del container[8]
                self.assertEqual(container.keys(), [2, 3, 5])
                self.assertEqual(container.values(), ["TWO", "three", "five"])

    def test_get_does_not_vivify(self):
        for container in self.implementations():
            with self.subTest(type(container).__name__):
                self._fill(container)
                self.assertEqual(container.get(5), "five")
                self.assertIsNone(container.get(6))
                self.assertEqual(container.get(6, "dflt"), "dflt")
                self.assertFalse(container.contains(6))

    def test_getitem_missing_raises(self):
        for container in self.implementations():
            with self.subTest(type(container).__name__):
                with self.assertRaises(KeyNotFound):
                    container[1]

    def test_empty_container_is_falsy(self):
        for container in self.implementations():
            with self.subTest(type(container).__name__):
                self.assertFalse(container)
                self.assertEqual(list(container), [])
                self.assertEqual(container.items(), [])

    def test_implementations_compare_equal(self):
        tree, flat = (self._fill(c) for c in self.implementations())
        self.assertEqual(tree, flat)
        flat.access(99)
        self.assertNotEqual(tree, flat)
        tree.access(99)
        self.assertEqual(tree, flat)
        self.assertNotEqual(tree, {2: "TWO", 5: "five", 8: "eight", 99: None})


if __name__ == "__main__":
    unittest.main(verbosity=2)
