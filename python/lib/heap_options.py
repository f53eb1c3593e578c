#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
heap_options.py
---------------

Construction-time settings for ``BinaryHeap``.

There is one option, ``is_hash_map_enabled``.  When it is true (the default)
the heap keeps a ``value -> index`` map next to its array so that ``update``
finds an entry in O(1) and fixes it up in O(log n).  When false, no memory
is spent on the map and values do not need to be hashable, but locating a
value becomes an O(n) scan.  That applies to ``insert`` too: it checks for
an entry with the same value (and replaces it) before adding, so without the
map each ``insert`` costs O(n) rather than O(log n).

>>> HeapOptions().disable_hash_map().is_hash_map_enabled
False
"""

from __future__ import annotations

from typing import Any, Callable, Union


class HeapOptions:
    __slots__ = ("is_hash_map_enabled",)

    def __init__(self, is_hash_map_enabled: bool = True) -> None:
        self.is_hash_map_enabled = is_hash_map_enabled

    def disable_hash_map(self) -> "HeapOptions":
        """Turn the position map off; returns ``self`` for chaining."""
        self.is_hash_map_enabled = False
        return self

    def __repr__(self) -> str:
        return f"HeapOptions(is_hash_map_enabled={self.is_hash_map_enabled!r})"


OptionsBuilder = Callable[[HeapOptions], Any]


def resolve_options(
    options: Union[HeapOptions, OptionsBuilder, None] = None,
) -> HeapOptions:
    """
    Turn whatever the caller handed in into a ``HeapOptions``.

    ``None`` gives the defaults, a ``HeapOptions`` is used as is, and a
    callable is applied to a fresh default instance (its return value is
    ignored, so both ``lambda o: o.disable_hash_map()`` and a plain
    ``def`` that mutates ``o`` work).
    """
    if options is None:
        return HeapOptions()
    if isinstance(options, HeapOptions):
        return options
    if callable(options):
        resolved = HeapOptions()
        options(resolved)
        return resolved
    raise TypeError(
        f"expected HeapOptions or an options builder, got {type(options).__name__}"
    )
