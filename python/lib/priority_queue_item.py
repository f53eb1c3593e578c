#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
priority_queue_item.py
----------------------

The entry type stored by the binary heaps in ``priority_queue.py``.

A ``PriorityQueueItem`` pairs an ordered *priority* with a *value*.  The
value is what identifies the entry: two items with equal values denote the
same logical entry, whatever their priorities are.  Items are read-only once
built; to change a priority, build a new item and hand it to
``BinaryHeap.update``.

>>> from priority_queue_item import PriorityQueueItem
>>> item = PriorityQueueItem.create(2, "Call boss")
>>> item.priority, item.value
(2, 'Call boss')
>>> clone = item.deep_copy()
>>> clone is item, clone.value is item.value
(False, True)
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

T = TypeVar("T")                     # type of the payload
P = TypeVar("P")                     # type of the priority (totally ordered)


class PriorityQueueItem(Generic[P, T]):
    """An immutable ``(priority, value)`` pair."""

    __slots__ = ("_priority", "_value")

    def __init__(self, priority: P, value: T) -> None:
        object.__setattr__(self, "_priority", priority)
        object.__setattr__(self, "_value", value)

    @classmethod
    def create(cls, priority: P, value: T) -> "PriorityQueueItem[P, T]":
        return cls(priority, value)

    @property
    def priority(self) -> P:
        return self._priority

    @property
    def value(self) -> T:
        return self._value

    def deep_copy(self) -> "PriorityQueueItem[P, T]":
        """
        Return a new, independent item with the same priority and the same
        value reference.
        """
        return type(self)(self._priority, self._value)

    def __setattr__(self, name: str, _: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only ({name!r})")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only ({name!r})")

    def __repr__(self) -> str:
        return f"PriorityQueueItem(priority={self._priority!r}, value={self._value!r})"
