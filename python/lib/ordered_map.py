#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ordered_map.py
--------------

An ordered mapping (key → value) backed by a plain, **unbalanced** binary
search tree.  Nodes are linked through ``left`` / ``right`` children and a
``parent`` back‑reference, which lets the iterator walk the tree in order
without an auxiliary stack.

No rebalancing is ever done: operations are O(height), which degrades to
O(n) when keys arrive in sorted order.

Features
~~~~~~~~
* `m.insert(key, value)` / `m[key] = value`  – insert / replace
* `m.read(key)` / `m[key]`                    – strict lookup (KeyNotFound if missing)
* `m.access(key)`                             – lookup that creates a default entry
* `m.remove(key)` / `del m[key]`              – delete (no‑op if missing)
* `m.contains(key)` / `key in m`              – membership test
* `m.begin()`, `m.end()`, `m.find(key)`       – bidirectional cursors
* `m.copy()`, `m.take()`, `m.move_from(o)`, `m.swap(o)`, `m.clear()`
* `m.dump()`, `m.validate()`, `m.height()`    – debugging helpers

Typical usage
~~~~~~~~~~~~~
>>> from ordered_map import OrderedMap
>>> m = OrderedMap()
>>> for k in [5, 3, 8]:
...     m[k] = str(k)
>>> list(m)
[3, 5, 8]
>>> m.remove(5)
>>> 5 in m
False
>>> counts = OrderedMap(default_factory=int)
>>> counts.access("a")
0
"""

from __future__ import annotations

import copy
import logging
from typing import (
    Any,
    Callable,
    Generator,
    Generic,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from dictionary import Cursor, Dictionary, KeyNotFound, ProgrammerError

__all__ = [
    "KeyNotFound",
    "OrderedMap",
    "ProgrammerError",
    "TreeIterator",
]

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


def _check_order_agrees(key: Any, other: Any) -> None:
    """Keys that compare equal must not also compare as ordered."""
    if key < other or other < key:
        raise ProgrammerError(
            f"keys {key!r} and {other!r} are equal but ordered; "
            "== and < disagree"
        )


class _Node(Generic[K, V]):
    """Internal node object – not meant to be used directly by callers."""

    __slots__ = ("key", "value", "left", "right", "parent")

    def __init__(
        self,
        key: K,
        value: V,
        parent: Optional["_Node[K, V]"] = None,
    ) -> None:
        self.key = key
        self.value = value
        self.left: Optional[_Node[K, V]] = None
        self.right: Optional[_Node[K, V]] = None
        self.parent = parent

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def minimum(self) -> "_Node[K, V]":
        """Leftmost node of the subtree rooted here."""
        node = self
        while node.left is not None:
            node = node.left
        return node

    def maximum(self) -> "_Node[K, V]":
        """Rightmost node of the subtree rooted here."""
        node = self
        while node.right is not None:
            node = node.right
        return node

    def __repr__(self) -> str:
        return f"<{self.key!r}:{self.value!r}>"


class TreeIterator(Cursor[K, V]):
    """
    In‑order cursor over an :class:`OrderedMap`.

    The cursor holds the current node, or ``None`` once it is past the end.
    Stepping uses only child and parent links.  Any structural change to the
    map may invalidate live cursors.

    A cursor is also a Python iterator: ``next(it)`` returns the current key
    and advances.
    """

    __slots__ = ("_owner", "_node")

    def __init__(
        self, owner: "OrderedMap[K, V]", node: Optional[_Node[K, V]]
    ) -> None:
        self._owner = owner
        self._node = node

    def _current(self) -> _Node[K, V]:
        if self._node is None:
            raise ProgrammerError("past-the-end iterator cannot be dereferenced")
        return self._node

    @property
    def key(self) -> K:
        return self._current().key

    @property
    def value(self) -> V:
        return self._current().value

    @value.setter
    def value(self, value: V) -> None:
        self._current().value = value

    def at_end(self) -> bool:
        return self._node is None

    def advance(self) -> "TreeIterator[K, V]":
        """Step to the in‑order successor (or to the end)."""
        node = self._current()
        if node.right is not None:
            self._node = node.right.minimum()
            return self
        # Climb while we are coming up from a right subtree.
        while node.parent is not None and node is node.parent.right:
            node = node.parent
        self._node = node.parent
        return self

    def retreat(self) -> "TreeIterator[K, V]":
        """Step to the in‑order predecessor; from the end, go to the maximum."""
        if self._node is None:
            root = self._owner._root
            if root is None:
                raise ProgrammerError("cannot retreat in an empty map")
            self._node = root.maximum()
            return self

        node = self._node
        if node.left is not None:
            self._node = node.left.maximum()
            return self
        while node.parent is not None and node is node.parent.left:
            node = node.parent
        if node.parent is None:
            raise ProgrammerError("cannot retreat before the first element")
        self._node = node.parent
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeIterator):
            return NotImplemented
        if other._owner is not self._owner:
            raise ProgrammerError("iterators belong to different maps")
        return self._node is other._node

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> "TreeIterator[K, V]":
        return self

    def __next__(self) -> K:
        if self._node is None:
            raise StopIteration
        key = self._node.key
        self.advance()
        return key

    def __repr__(self) -> str:
        if self._node is None:
            return "TreeIterator(<end>)"
        return f"TreeIterator({self._node.key!r})"


class OrderedMap(Dictionary[K, V]):
    """
    A mutable mapping implemented with an unbalanced binary search tree.

    Besides the primitive operations of :class:`Dictionary` the map offers
    value semantics over its node graph: ``copy`` clones every node, ``take``
    and ``move_from`` hand the whole tree to another map in O(1), and
    ``clear`` releases all nodes.  None of these recurse, so degenerate
    (chain‑shaped) trees of any depth are handled.
    """

    __slots__ = ("_root", "_size", "_default_factory")

    # ------------------------------------------------------------------
    #   Construction
    # ------------------------------------------------------------------
    def __init__(
        self,
        items: Optional[Union["OrderedMap[K, V]", Iterable[Tuple[K, V]]]] = None,
        *,
        default_factory: Optional[Callable[[], V]] = None,
    ) -> None:
        """
        Create an empty map, a copy of another map, or a map filled from an
        iterable of ``(key, value)`` pairs.

        Parameters
        ----------
        items : OrderedMap or iterable of (key, value)   optional
            Another ``OrderedMap`` is cloned node for node (same shape);
            any other iterable is inserted pair by pair.
        default_factory : callable   optional
            Produces the value that ``access`` stores for a missing key.
            Without a factory the stored value is ``None``.
        """
        self._root: Optional[_Node[K, V]] = None
        self._size: int = 0
        self._default_factory = default_factory

        if isinstance(items, OrderedMap):
            if default_factory is None:
                self._default_factory = items._default_factory
            self._root = items._clone_nodes()
            self._size = items._size
        elif items is not None:
            self.update(items)

    @property
    def default_factory(self) -> Optional[Callable[[], V]]:
        return self._default_factory

    # ------------------------------------------------------------------
    #   Search helpers (internal)
    # ------------------------------------------------------------------
    def _locate(
        self, key: K
    ) -> Tuple[Optional[_Node[K, V]], Optional[_Node[K, V]]]:
        """
        Walk from the root towards *key*.

        Returns ``(node, parent)``: *node* holds *key* or is ``None`` when the
        key is absent, in which case *parent* is the last node visited (the
        attachment point for a new leaf, ``None`` for an empty tree).
        """
        parent: Optional[_Node[K, V]] = None
        cur = self._root
        while cur is not None:
            if key == cur.key:
                _check_order_agrees(key, cur.key)
                return cur, parent
            parent = cur
            cur = cur.left if key < cur.key else cur.right
        return None, parent

    def _link(self, parent: Optional[_Node[K, V]], key: K, value: V) -> _Node[K, V]:
        """Attach a new leaf for *key* under *parent* (or as the root)."""
        node = _Node(key, value, parent)
        if parent is None:
            self._root = node
        elif key < parent.key:
            parent.left = node
        else:
            parent.right = node
        self._size += 1
        return node

    # ------------------------------------------------------------------
    #   Primitive operations
    # ------------------------------------------------------------------
    def contains(self, key: K) -> bool:
        node, _ = self._locate(key)
        return node is not None

    def insert(self, key: K, value: V) -> None:
        """Insert *key* with *value* or replace the existing value."""
        node, parent = self._locate(key)
        if node is not None:
            node.value = value
            return
        self._link(parent, key, value)

    def read(self, key: K) -> V:
        node, _ = self._locate(key)
        if node is None:
            raise KeyNotFound(key)
        return node.value

    def access(self, key: K) -> V:
        """
        Return the value for *key*, creating the entry first if needed.

        The new entry is attached where the failed search ended and holds
        ``default_factory()`` (or ``None``).  Use ``read`` or check
        ``contains`` first when a lookup must not modify the map.
        """
        node, parent = self._locate(key)
        if node is None:
            factory = self._default_factory
            value = factory() if factory is not None else None
            node = self._link(parent, key, value)  # type: ignore[arg-type]
            logger.debug("access(%r) created a default entry", key)
        return node.value

    def remove(self, key: K) -> None:
        """Remove *key* if present; missing keys are ignored."""
        node, _ = self._locate(key)
        if node is None:
            return
        self._remove_node(node)

    def _remove_node(self, node: _Node[K, V]) -> None:
        """
        Unlink *node* while keeping the ordering intact.

        An inner node takes over the payload of its in‑order predecessor
        (largest key on the left) or, lacking a left child, its successor
        (smallest key on the right).  That replacement is then removed the
        same way, until the node to drop is a leaf.
        """
        while not node.is_leaf():
            if node.left is not None:
                replacement = node.left.maximum()
            else:
                replacement = node.right.minimum()  # type: ignore[union-attr]
            node.key = replacement.key
            node.value = replacement.value
            node = replacement

        parent = node.parent
        if parent is None:
            self._root = None
        elif parent.left is node:
            parent.left = None
        else:
            parent.right = None
        node.parent = None
        self._size -= 1

    def __len__(self) -> int:
        return self._size

    # ------------------------------------------------------------------
    #   Iteration
    # ------------------------------------------------------------------
    def begin(self) -> TreeIterator[K, V]:
        if self._root is None:
            return self.end()
        return TreeIterator(self, self._root.minimum())

    def end(self) -> TreeIterator[K, V]:
        return TreeIterator(self, None)

    def find(self, key: K) -> TreeIterator[K, V]:
        """Cursor positioned at *key*, or ``end()`` if *key* is missing."""
        node, _ = self._locate(key)
        return TreeIterator(self, node)

    def __reversed__(self) -> Generator[K, None, None]:
        """Yield keys in descending order."""
        if self._root is None:
            return
        first = self.begin()
        cur = self.end().retreat()
        while True:
            yield cur.key
            if cur == first:
                return
            cur.retreat()

    # ------------------------------------------------------------------
    #   Minimum / maximum
    # ------------------------------------------------------------------
    def min_key(self) -> K:
        """Return the smallest key stored in the map."""
        if self._root is None:
            raise ValueError("Tree is empty")
        return self._root.minimum().key

    def max_key(self) -> K:
        """Return the largest key stored in the map."""
        if self._root is None:
            raise ValueError("Tree is empty")
        return self._root.maximum().key

    # ------------------------------------------------------------------
    #   Value semantics: copy / move / destroy
    # ------------------------------------------------------------------
    def _clone_nodes(
        self, copy_fn: Optional[Callable[[Any], Any]] = None
    ) -> Optional[_Node[K, V]]:
        """Clone the node graph, keeping its shape; returns the new root."""
        if self._root is None:
            return None
        dup = copy_fn if copy_fn is not None else (lambda obj: obj)

        root: _Node[K, V] = _Node(dup(self._root.key), dup(self._root.value))
        stack: List[Tuple[_Node[K, V], _Node[K, V]]] = [(self._root, root)]
        while stack:
            src, dst = stack.pop()
            if src.left is not None:
                dst.left = _Node(dup(src.left.key), dup(src.left.value), dst)
                stack.append((src.left, dst.left))
            if src.right is not None:
                dst.right = _Node(dup(src.right.key), dup(src.right.value), dst)
                stack.append((src.right, dst.right))
        return root

    def copy(self) -> "OrderedMap[K, V]":
        """
        Return an independent map with the same entries and tree shape.

        Keys and values themselves are shared (like ``dict.copy``); use
        ``copy.deepcopy`` to duplicate them too.
        """
        logger.debug("copying map with %d entries", self._size)
        return OrderedMap(self)

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "OrderedMap[K, V]":
        clone: OrderedMap[K, V] = OrderedMap(default_factory=self._default_factory)
        memo[id(self)] = clone
        clone._root = self._clone_nodes(lambda obj: copy.deepcopy(obj, memo))
        clone._size = self._size
        return clone

    def take(self) -> "OrderedMap[K, V]":
        """Move every entry into a new map and leave this one empty."""
        target: OrderedMap[K, V] = OrderedMap(default_factory=self._default_factory)
        target._root, target._size = self._root, self._size
        self._root, self._size = None, 0
        logger.debug("moved %d entries out of map", target._size)
        return target

    def move_from(self, other: "OrderedMap[K, V]") -> None:
        """
        Replace this map's contents with *other*'s, leaving *other* empty.

        The previous contents of this map are released first.
        """
        if not isinstance(other, OrderedMap):
            raise TypeError(f"cannot move from {type(other).__name__}")
        if other is self:
            return
        self.clear()
        self._root, self._size = other._root, other._size
        other._root, other._size = None, 0
        logger.debug("moved %d entries into map", self._size)

    def swap(self, other: "OrderedMap[K, V]") -> None:
        """Exchange the contents of two maps in O(1)."""
        if not isinstance(other, OrderedMap):
            raise TypeError(f"cannot swap with {type(other).__name__}")
        self._root, other._root = other._root, self._root
        self._size, other._size = other._size, self._size

    def clear(self) -> None:
        """Release every node; the map is empty afterwards."""
        released = 0
        stack: List[_Node[K, V]] = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
            node.left = node.right = node.parent = None
            released += 1
        self._root = None
        self._size = 0
        if released:
            logger.debug("released %d nodes", released)

    # ------------------------------------------------------------------
    #   Diagnostics
    # ------------------------------------------------------------------
    def height(self) -> int:
        """Number of nodes on the longest root‑to‑leaf path (0 when empty)."""
        best = 0
        stack: List[Tuple[_Node[K, V], int]] = (
            [(self._root, 1)] if self._root is not None else []
        )
        while stack:
            node, depth = stack.pop()
            best = max(best, depth)
            if node.left is not None:
                stack.append((node.left, depth + 1))
            if node.right is not None:
                stack.append((node.right, depth + 1))
        return best

    def dump(self) -> str:
        """
        Pre‑order text picture of the tree, one node per line.

        Each line is indented by the node's depth and tagged with its path
        from the root (``0`` = left, ``1`` = right)::

            : 5
             0: 3
              01: 4
             1: 8
        """
        lines: List[str] = []
        stack: List[Tuple[_Node[K, V], str]] = (
            [(self._root, "")] if self._root is not None else []
        )
        while stack:
            node, path = stack.pop()
            lines.append(f"{' ' * len(path)}{path}: {node.key!r}")
            if node.right is not None:
                stack.append((node.right, path + "1"))
            if node.left is not None:
                stack.append((node.left, path + "0"))
        return "\n".join(lines)

    def validate(self) -> None:
        """
        Verify the search‑tree ordering, the parent links and the size count.
        Raises ``AssertionError`` with a descriptive message if something is broken.
        """
        if self._root is None:
            assert self._size == 0, "Empty tree with non-zero size"
            return

        assert self._root.parent is None, "Root has a parent"
        count = 0
        # (node, exclusive lower bound, exclusive upper bound); None = unbounded
        stack: List[Tuple[_Node[K, V], Optional[_Node[K, V]], Optional[_Node[K, V]]]]
        stack = [(self._root, None, None)]
        while stack:
            node, low, high = stack.pop()
            count += 1
            if low is not None:
                assert low.key < node.key, "BST property violated (key too small)"
            if high is not None:
                assert node.key < high.key, "BST property violated (key too large)"
            if node.left is not None:
                assert node.left.parent is node, "Broken parent link (left child)"
                stack.append((node.left, low, node))
            if node.right is not None:
                assert node.right.parent is node, "Broken parent link (right child)"
                stack.append((node.right, node, high))

        assert count == self._size, f"Size mismatch: {count} nodes, size {self._size}"

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"OrderedMap({{{items}}})"
