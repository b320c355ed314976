#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
dictionary.py
-------------

Abstract interface shared by the key → value containers in this library.

A concrete container only has to provide the primitive operations
(``contains``, ``insert``, ``remove``, ``read``, ``access``, ``begin``,
``end`` and ``__len__``); the dict‑like protocol (``m[k]``, ``m[k] = v``,
``del m[k]``, ``k in m``, iteration, ``keys()`` / ``values()`` / ``items()``)
is derived here from those primitives, so alternate backing trees are
interchangeable.

Errors
~~~~~~
* ``KeyNotFound``     – strict lookup of a missing key (subclass of ``KeyError``)
* ``ProgrammerError`` – contract violation by the caller, e.g. dereferencing a
  past‑the‑end cursor (subclass of ``AssertionError``)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import (
    Generator,
    Generic,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
)

K = TypeVar("K")
V = TypeVar("V")


class KeyNotFound(KeyError):
    """Raised by a strict read of a key that has no entry."""

    def __init__(self, key: object) -> None:
        super().__init__(key)
        self.key = key


class ProgrammerError(AssertionError):
    """A precondition of the container API was violated by the caller."""


class Cursor(ABC, Generic[K, V]):
    """
    A position inside a container: either an element or past‑the‑end.

    Two cursors compare equal iff they refer to the same element (or are
    both past‑the‑end).
    """

    __slots__ = ()

    @property
    @abstractmethod
    def key(self) -> K:
        """Key at the current position."""

    @property
    @abstractmethod
    def value(self) -> V:
        """Value at the current position."""

    @property
    def item(self) -> Tuple[K, V]:
        return self.key, self.value

    @abstractmethod
    def at_end(self) -> bool:
        """True when the cursor is past‑the‑end."""

    @abstractmethod
    def advance(self) -> "Cursor[K, V]":
        """Move to the next larger key and return ``self``."""

    @abstractmethod
    def retreat(self) -> "Cursor[K, V]":
        """Move to the next smaller key and return ``self``."""


class Dictionary(ABC, Generic[K, V]):
    """
    Abstract ordered mapping.

    Subclasses implement the primitive operations; everything else in this
    class is expressed in terms of them.
    """

    __slots__ = ()

    # ------------------------------------------------------------------
    #   Primitive operations
    # ------------------------------------------------------------------
    @abstractmethod
    def contains(self, key: K) -> bool:
        """Return ``True`` if *key* has an entry."""

    @abstractmethod
    def insert(self, key: K, value: V) -> None:
        """
        Store *value* under *key*.

        If an equal key is already present only its value is replaced.
        """

    @abstractmethod
    def remove(self, key: K) -> None:
        """
        Drop the entry for *key*.

        Removing a missing key is a no‑op, so afterwards ``contains(key)``
        is always ``False``.
        """

    @abstractmethod
    def read(self, key: K) -> V:
        """
        Return the value stored under *key* without modifying the container.

        Raises
        ------
        KeyNotFound
            If *key* has no entry.
        """

    @abstractmethod
    def access(self, key: K) -> V:
        """
        Return the value stored under *key*, creating a default entry first
        if *key* is missing.
        """

    @abstractmethod
    def begin(self) -> Cursor[K, V]:
        """Cursor at the smallest key (equal to ``end()`` when empty)."""

    @abstractmethod
    def end(self) -> Cursor[K, V]:
        """Past‑the‑end cursor."""

    @abstractmethod
    def __len__(self) -> int:
        ...

    # ------------------------------------------------------------------
    #   dict‑like protocol
    # ------------------------------------------------------------------
    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def __getitem__(self, key: K) -> V:
        return self.read(key)

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: K) -> None:
        # Same contract as ``remove``: deleting a missing key is allowed.
        self.remove(key)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dictionary):
            return NotImplemented
        return len(self) == len(other) and self.items() == other.items()

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Generator[K, None, None]:
        """Yield keys in ascending order."""
        cur = self.begin()
        while not cur.at_end():
            yield cur.key
            cur.advance()

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Like ``read`` but return *default* instead of raising."""
        if not self.contains(key):
            return default
        return self.read(key)

    def update(self, items: Iterable[Tuple[K, V]]) -> None:
        """Insert every ``(key, value)`` pair from *items*."""
        for key, value in items:
            self.insert(key, value)

    def keys(self) -> List[K]:
        """Return a list of all keys in sorted order."""
        return list(self)

    def values(self) -> List[V]:
        """Return a list of all values in key order."""
        return [value for _, value in self.items()]

    def items(self) -> List[Tuple[K, V]]:
        """Return a list of ``(key, value)`` pairs in sorted order."""
        pairs: List[Tuple[K, V]] = []
        cur = self.begin()
        while not cur.at_end():
            pairs.append(cur.item)
            cur.advance()
        return pairs
