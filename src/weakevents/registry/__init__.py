"""
Weak subscriber registry.

This module provides the data structures behind weak events:
- WeakCollection: Ordered, deduplicated, weakly held subscribers
- AnchorTable: Keeps each subscriber alive exactly as long as its target

Example:
    >>> from weakevents.registry import WeakCollection
    >>>
    >>> subscribers = WeakCollection()
    >>> subscribers.try_add(view.on_changed)
    >>> subscribers.for_each(lambda callback: callback(model))
"""

from weakevents.registry.anchors import AnchorTable
from weakevents.registry.weak import WeakCollection

__all__ = [
    "AnchorTable",
    "WeakCollection",
]
