"""
Weak events.

This module provides the event surface built on the weak registry:
- WeakEvent: Calls subscribers synchronously
- AsyncWeakEvent: Awaits subscribers concurrently
- event / async_event: Per-instance event declarations

Example:
    >>> from weakevents.events import WeakEvent, event
    >>>
    >>> changed = WeakEvent("changed")
    >>> changed += view.on_changed
    >>> changed.emit(model)
"""

from weakevents.events.async_event import AsyncWeakEvent
from weakevents.events.base import BaseWeakEvent, EventHandlerFunc
from weakevents.events.descriptor import EventDescriptor, async_event, event
from weakevents.events.event import WeakEvent

__all__ = [
    "BaseWeakEvent",
    "EventHandlerFunc",
    "WeakEvent",
    "AsyncWeakEvent",
    "EventDescriptor",
    "event",
    "async_event",
]
