#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
priority_queue.py
-----------------

Array-backed binary heaps of ``PriorityQueueItem`` in two orderings.

Features
~~~~~~~~
* One engine, ``BinaryHeap``, parameterised by a *dominance* predicate:
  ``MAX_PRIORITY`` (largest priority on top) or ``MIN_PRIORITY`` (smallest
  priority on top).
* ``insert``, ``top``, ``peek``, ``update`` (upsert), ``count`` and two bulk
  loaders, ``heapify_deep`` (copies the input) and ``heapify_shallow``
  (adopts the caller's list).
* Optional ``value -> index`` map kept in step with every move, so that
  ``update`` is O(log n).  Without it ``update`` scans the array, O(n).
* ``top`` / ``peek`` on an empty heap return ``None``; nothing here raises
  for an empty heap.

Typical usage
~~~~~~~~~~~~~
>>> from priority_queue import PriorityQueueFactory
>>> from priority_queue_item import PriorityQueueItem
>>> heap = PriorityQueueFactory.create_binary_max_heap()
>>> heap.insert(PriorityQueueItem.create(5, "Item1"))
>>> heap.insert(PriorityQueueItem.create(10, "Item2"))
>>> heap.peek().value
'Item2'
>>> heap.update(PriorityQueueItem.create(25, "Item1"))
>>> heap.top().priority
25
>>> heap.count()
1

An engine is not thread safe.  Share one between threads only behind a lock
held for the whole of each call.
"""

from __future__ import annotations

import logging
import operator
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    TypeVar,
    Union,
)

from heap_options import HeapOptions, OptionsBuilder, resolve_options
from priority_queue_item import PriorityQueueItem

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
#  Generic type variables
# ----------------------------------------------------------------------
T = TypeVar("T")                     # type of the stored value
P = TypeVar("P")                     # type of the priority

Dominance = Callable[[Any, Any], bool]

# ``dominates(a, b)`` is true when priority ``a`` belongs above ``b``.
MAX_PRIORITY: Dominance = operator.gt
MIN_PRIORITY: Dominance = operator.lt


# ----------------------------------------------------------------------
#  Locating an entry by value
# ----------------------------------------------------------------------
class _PositionIndex:
    """
    ``value -> index`` map for the heap array.

    The engine calls ``record`` for every slot it writes and ``discard`` for
    every item it drops, so between public calls the map agrees exactly
    with the array.
    """

    __slots__ = ("_position",)

    def __init__(self) -> None:
        # Mapping value -> current index in the heap list. Allows O(1) locate.
        self._position: Dict[Hashable, int] = {}

    def record(self, item: PriorityQueueItem, idx: int) -> None:
        self._position[item.value] = idx

    def discard(self, item: PriorityQueueItem) -> None:
        self._position.pop(item.value, None)

    def locate(self, items: List[PriorityQueueItem], value: Any) -> int:
        return self._position.get(value, -1)

    def rebuild(self, items: List[PriorityQueueItem]) -> List[PriorityQueueItem]:
        """
        Return *items* with one entry per value, the last one given winning
        (as with repeated ``update``), and map every kept item to its slot.
        """
        # dict keeps the slot of the first occurrence, the item of the last.
        latest: Dict[Hashable, PriorityQueueItem] = {}
        for item in items:
            latest[item.value] = item
        kept = list(latest.values())
        self._position = {item.value: idx for idx, item in enumerate(kept)}
        return kept

    def agrees_with(self, items: List[PriorityQueueItem]) -> bool:
        if len(self._position) != len(items):
            return False
        return all(
            self._position.get(item.value) == idx for idx, item in enumerate(items)
        )


class _LinearScan:
    """
    Stand-in for ``_PositionIndex`` when the map is disabled.
    Nothing is stored; every lookup is an O(n) equality scan.
    """

    __slots__ = ()

    def record(self, item: PriorityQueueItem, idx: int) -> None:
        pass

    def discard(self, item: PriorityQueueItem) -> None:
        pass

    def locate(self, items: List[PriorityQueueItem], value: Any) -> int:
        for idx, item in enumerate(items):
            if item.value == value:
                return idx
        return -1

    def rebuild(self, items: List[PriorityQueueItem]) -> List[PriorityQueueItem]:
        """Same rule as ``_PositionIndex.rebuild``, by ``==`` instead of hash."""
        kept: List[PriorityQueueItem] = []
        for item in items:
            idx = self.locate(kept, item.value)
            if idx < 0:
                kept.append(item)
            else:
                kept[idx] = item
        return kept

    def agrees_with(self, items: List[PriorityQueueItem]) -> bool:
        # no map, nothing to disagree
        return True


# ----------------------------------------------------------------------
#  Core class
# ----------------------------------------------------------------------
class BinaryHeap(Generic[P, T]):
    """
    A binary heap of ``PriorityQueueItem`` stored in a list, children of
    slot ``i`` at ``2i+1`` and ``2i+2``.

    Parameters
    ----------
    dominates : Callable[[P, P], bool], default ``MAX_PRIORITY``
        Strict ordering between priorities; ``dominates(parent, child)``
        or equality must hold for every parent/child pair.  Fixed for the
        life of the heap.

    options : HeapOptions or Callable[[HeapOptions], Any], optional
        Construction settings, or a callable that adjusts the defaults
        (``lambda o: o.disable_hash_map()``).

    Values stored in the heap are unique: ``insert`` of a value that is
    already present behaves like ``update``, and the heapify loaders keep
    only the last item given for each value.  Because ``insert`` has to
    look the value up first, with the hash map disabled every ``insert``
    is an O(n) scan as well as every ``update``.
    """

    __slots__ = ("_items", "_dominates", "_index", "_options")

    def __init__(
        self,
        dominates: Dominance = MAX_PRIORITY,
        options: Union[HeapOptions, OptionsBuilder, None] = None,
    ) -> None:
        if not callable(dominates):
            raise TypeError(f"dominates must be callable, got {dominates!r}")
        # Strict "belongs above" test between two priorities.
        self._dominates = dominates
        self._options = resolve_options(options)

        # The underlying list; children of slot i live at 2i+1 and 2i+2.
        self._items: List[PriorityQueueItem[P, T]] = []

        # value -> slot bookkeeping, or a no-op scanner when disabled.
        # Every sift calls it either way.
        self._index: Union[_PositionIndex, _LinearScan] = (
            _PositionIndex() if self._options.is_hash_map_enabled else _LinearScan()
        )

    @property
    def dominates(self) -> Dominance:
        return self._dominates

    @property
    def is_hash_map_enabled(self) -> bool:
        return self._options.is_hash_map_enabled

    # ------------------------------------------------------------------
    #   Core public API
    # ------------------------------------------------------------------
    def insert(self, item: PriorityQueueItem[P, T]) -> None:
        """
        Add *item* and sift it up to its place.
        If an entry with an equal value is already present it is replaced,
        exactly as ``update`` would.
        """
        if self._index.locate(self._items, item.value) >= 0:
            logger.debug("insert of present value %r treated as update", item.value)
            self.update(item)
            return
        self._append(item)

    def top(self) -> Optional[PriorityQueueItem[P, T]]:
        """
        Remove and return the dominant item, or ``None`` if the heap is empty.
        """
        if not self._items:
            return None

        last = self._items.pop()
        self._index.discard(last)
        if not self._items:
            return last

        root = self._items[0]
        self._index.discard(root)
        self._items[0] = last
        self._sift_down(0)
        return root

    def peek(self) -> Optional[PriorityQueueItem[P, T]]:
        """Return the dominant item without removing it, or ``None``."""
        return self._items[0] if self._items else None

    def update(self, item: PriorityQueueItem[P, T]) -> None:
        """
        Replace the entry whose value equals ``item.value`` with *item* and
        move it up or down as its new priority requires.
        If no such entry exists, *item* is inserted.
        """
        idx = self._index.locate(self._items, item.value)
        if idx < 0:
            logger.debug("update of absent value %r inserts it", item.value)
            self._append(item)
            return

        old_priority = self._items[idx].priority
        self._items[idx] = item
        self._index.record(item, idx)

        # Direction follows old vs. new priority only.
        if self._dominates(item.priority, old_priority):
            self._sift_up(idx)
        else:
            self._sift_down(idx)

    def heapify_deep(self, items: Iterable[PriorityQueueItem[P, T]]) -> None:
        """
        Replace the contents with a heap built from copies of *items*.
        Later changes to *items* (or to the heap) are not seen by the other.
        """
        self._load([item.deep_copy() for item in items], "deep")

    def heapify_shallow(self, items: List[PriorityQueueItem[P, T]]) -> None:
        """
        Replace the contents with *items* itself, reordered in place into a
        heap.  The list is shared from then on: changing it from outside
        changes the heap, and ``insert`` / ``top`` change the caller's list.
        """
        if not isinstance(items, list):
            raise TypeError(f"heapify_shallow needs a list, got {type(items).__name__}")
        self._load(items, "shallow")

    def count(self) -> int:
        """Return the number of items currently stored."""
        return len(self._items)

    # ------------------------------------------------------------------
    #   Python protocol support
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, value: Any) -> bool:
        """Membership by *value* (not by item)."""
        return self._index.locate(self._items, value) >= 0

    def __iter__(self) -> Iterator[PriorityQueueItem[P, T]]:
        """
        Iterate over the items in heap order (not sorted).  Use repeated
        ``top()`` for priority order.
        """
        return iter(list(self._items))

    def __repr__(self) -> str:
        if self._dominates is MAX_PRIORITY:
            ordering = "max"
        elif self._dominates is MIN_PRIORITY:
            ordering = "min"
        else:
            ordering = repr(self._dominates)
        return (
            f"<BinaryHeap {ordering} count={len(self._items)} "
            f"hash_map={self.is_hash_map_enabled}>"
        )

    # ------------------------------------------------------------------
    #   Internal heap-maintenance helpers
    # ------------------------------------------------------------------
    def _append(self, item: PriorityQueueItem[P, T]) -> None:
        self._items.append(item)
        self._sift_up(len(self._items) - 1)

    def _load(self, items: List[PriorityQueueItem[P, T]], mode: str) -> None:
        kept = self._index.rebuild(items)
        if len(kept) != len(items):
            logger.debug(
                "heapify (%s) dropped %d repeated values", mode, len(items) - len(kept)
            )
            # Shallow loads stay aliased to the caller's list.
            items[:] = kept
        self._items = items
        for idx in range(len(items) // 2 - 1, -1, -1):
            self._sift_down(idx)
        logger.debug(
            "heapify (%s) loaded %d items, hash map %s",
            mode,
            len(items),
            "rebuilt" if self.is_hash_map_enabled else "disabled",
        )

    def _sift_up(self, idx: int) -> None:
        """
        Move the item at *idx* toward the root while it dominates its parent.
        Displaced parents shift down one level; the item is written once,
        at its final slot.
        """
        items = self._items
        current = items[idx]
        while idx > 0:
            parent = (idx - 1) // 2
            if not self._dominates(current.priority, items[parent].priority):
                break
            items[idx] = items[parent]
            self._index.record(items[idx], idx)
            idx = parent
        items[idx] = current
        self._index.record(current, idx)

    def _sift_down(self, idx: int) -> None:
        """
        Move the item at *idx* toward the leaves while its more dominant
        child dominates it.  On equal children the left one is taken.
        """
        items = self._items
        n = len(items)
        current = items[idx]
        while (child := 2 * idx + 1) < n:
            right = child + 1
            if right < n and self._dominates(
                items[right].priority, items[child].priority
            ):
                child = right
            if not self._dominates(items[child].priority, current.priority):
                break
            items[idx] = items[child]
            self._index.record(items[idx], idx)
            idx = child
        items[idx] = current
        self._index.record(current, idx)

    # ------------------------------------------------------------------
    #   Debug/validation helpers
    # ------------------------------------------------------------------
    def _is_valid(self) -> bool:
        """Internal sanity check of the heap order and the position map."""
        items = self._items
        for idx in range(1, len(items)):
            parent = (idx - 1) // 2
            if self._dominates(items[idx].priority, items[parent].priority):
                return False
        return self._index.agrees_with(items)


# ----------------------------------------------------------------------
#  Construction helpers
# ----------------------------------------------------------------------
def binary_max_heap(
    options: Union[HeapOptions, OptionsBuilder, None] = None,
) -> BinaryHeap:
    """A heap whose top is the item with the largest priority."""
    return BinaryHeap(MAX_PRIORITY, options)


def binary_min_heap(
    options: Union[HeapOptions, OptionsBuilder, None] = None,
) -> BinaryHeap:
    """A heap whose top is the item with the smallest priority."""
    return BinaryHeap(MIN_PRIORITY, options)


class PriorityQueueFactory:
    """
    Named constructors, each taking an optional options builder:

    >>> heap = PriorityQueueFactory.create_binary_min_heap(
    ...     lambda options: options.disable_hash_map())
    >>> heap.is_hash_map_enabled
    False
    """

    @staticmethod
    def create_binary_max_heap(
        options_builder: Union[HeapOptions, OptionsBuilder, None] = None,
    ) -> BinaryHeap:
        return binary_max_heap(options_builder)

    @staticmethod
    def create_binary_min_heap(
        options_builder: Union[HeapOptions, OptionsBuilder, None] = None,
    ) -> BinaryHeap:
        return binary_min_heap(options_builder)
