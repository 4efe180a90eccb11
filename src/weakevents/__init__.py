"""
weakevents - Thread-safe weak event subscriptions for Python.

This library provides:
- Events whose subscribers are held by weak reference, so subscribing never
  keeps a subscriber alive and forgetting to unsubscribe never leaks
- Bound-method subscribers that stay registered exactly as long as their
  instance is alive elsewhere
- Synchronous and asyncio events, plus per-instance event declarations
- Snapshot iteration that is safe under concurrent subscribe/unsubscribe
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("weakevents-py")
except PackageNotFoundError:
    # Package not installed (running from source without install)
    __version__ = "0.0.0.dev0"

from weakevents.args import EventArgs
from weakevents.config import CleanupMode, WeakEventConfig
from weakevents.events import (
    AsyncWeakEvent,
    BaseWeakEvent,
    EventDescriptor,
    EventHandlerFunc,
    WeakEvent,
    async_event,
    event,
)
from weakevents.exceptions import (
    ConsistencyError,
    InvalidHandlerError,
    WeakEventsError,
)
from weakevents.handlers import CallbackHandle, get_handler_name
from weakevents.registry import AnchorTable, WeakCollection

__all__ = [
    "__version__",
    # Events
    "WeakEvent",
    "AsyncWeakEvent",
    "BaseWeakEvent",
    "EventHandlerFunc",
    "EventDescriptor",
    "event",
    "async_event",
    "EventArgs",
    # Configuration
    "WeakEventConfig",
    "CleanupMode",
    # Registry
    "WeakCollection",
    "AnchorTable",
    "CallbackHandle",
    "get_handler_name",
    # Exceptions
    "WeakEventsError",
    "InvalidHandlerError",
    "ConsistencyError",
]
