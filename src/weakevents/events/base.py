"""
Shared subscription management for weak events.

BaseWeakEvent owns a WeakCollection and implements everything that does not
depend on how handlers are invoked: subscribing, unsubscribing, compaction
scheduling, statistics and trace attributes. WeakEvent and AsyncWeakEvent
add the synchronous and asynchronous emit().
"""

import logging
from collections.abc import Callable
from typing import Any, Self

from weakevents.args import EventArgs
from weakevents.config import WeakEventConfig
from weakevents.handlers.handle import get_handler_name
from weakevents.observability import Tracer, create_tracer
from weakevents.observability.attributes import (
    ATTR_ENTRIES_COMPACTED,
    ATTR_EVENT_ID,
    ATTR_EVENT_NAME,
    ATTR_EVENT_TYPE,
    ATTR_HANDLER_COUNT,
)
from weakevents.registry import WeakCollection

logger = logging.getLogger(__name__)

# Handler shape: any callable; (sender, args) by convention
EventHandlerFunc = Callable[..., Any]


class BaseWeakEvent:
    """
    Base class for events whose subscribers are held weakly.

    Subscribing never keeps a subscriber alive. A bound method stays
    subscribed while its instance is alive elsewhere and silently stops
    receiving events once the instance is collected. Plain functions and
    lambdas stay subscribed until they are unsubscribed.

    Thread Safety:
        - subscribe, unsubscribe, cleanup and clear are thread-safe
        - Handlers run outside any lock and may subscribe or unsubscribe
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        config: WeakEventConfig | None = None,
        tracer: Tracer | None = None,
    ) -> None:
        """
        Initialize the event with no subscribers.

        Args:
            name: Name used in logs and spans (defaults to the class name)
            config: Behaviour settings. Defaults to WeakEventConfig().
            tracer: Optional custom Tracer instance. If not provided, one is
                   created based on config.enable_tracing.
        """
        self._name = name or type(self).__name__
        self._config = config or WeakEventConfig()
        self._subscribers = WeakCollection(debug_checks=self._config.debug_checks)
        # Set by an emit in deferred cleanup mode, consumed by the next subscribe
        self._cleanup_pending = False
        self._stats = {
            "events_emitted": 0,
            "handlers_invoked": 0,
            "handler_errors": 0,
            "cleanups": 0,
            "entries_compacted": 0,
        }

        # Tracing configuration - composition, not inheritance
        self._tracer = tracer or create_tracer(__name__, self._config.enable_tracing)
        self._enable_tracing = self._tracer.enabled

    @property
    def name(self) -> str:
        """Name used in logs and spans."""
        return self._name

    @property
    def config(self) -> WeakEventConfig:
        """The event's configuration."""
        return self._config

    @property
    def subscribers(self) -> WeakCollection:
        """The underlying weak collection."""
        return self._subscribers

    @property
    def subscriber_count(self) -> int:
        """Number of entries, including collected ones not yet compacted."""
        return self._subscribers.count

    def subscribe(self, handler: EventHandlerFunc) -> bool:
        """
        Subscribe a handler.

        Thread-safe: Can be called from any thread.

        Args:
            handler: Callable invoked on every emit

        Returns:
            True if the handler was added, False if already subscribed

        Raises:
            InvalidHandlerError: If handler is None or not callable
        """
        if self._cleanup_pending:
            self.cleanup()
        return self._subscribers.try_add(handler)

    def unsubscribe(self, handler: EventHandlerFunc) -> bool:
        """
        Unsubscribe a handler. Unknown handlers are ignored.

        Thread-safe: Can be called from any thread.

        Args:
            handler: The handler to remove

        Returns:
            True if the handler was found and removed, False otherwise
        """
        return self._subscribers.try_remove(handler)

    def __iadd__(self, handler: EventHandlerFunc) -> Self:
        self.subscribe(handler)
        return self

    def __isub__(self, handler: EventHandlerFunc) -> Self:
        self.unsubscribe(handler)
        return self

    def cleanup(self) -> int:
        """
        Remove entries whose subscriber has been collected.

        Returns:
            Number of entries removed
        """
        self._cleanup_pending = False
        with self._tracer.span(
            "weakevents.event.cleanup",
            {ATTR_EVENT_NAME: self._name},
        ) as span:
            removed = self._subscribers.cleanup()
            if span:
                span.set_attribute(ATTR_ENTRIES_COMPACTED, removed)

        self._stats["cleanups"] += 1
        self._stats["entries_compacted"] += removed
        logger.debug(
            f"Cleanup of {self._name} removed {removed} entries",
            extra={"event_name": self._name, "removed": removed},
        )
        return removed

    def clear(self) -> None:
        """
        Remove all subscribers.

        Thread-safe: Can be called from any thread.
        """
        self._subscribers.clear()
        self._cleanup_pending = False
        logger.info(
            f"All subscribers of {self._name} cleared",
            extra={"event_name": self._name},
        )

    def get_stats(self) -> dict[str, int]:
        """
        Get statistics about event operation.

        Returns:
            Dictionary with counts:
            - events_emitted: Total completed emits
            - handlers_invoked: Total successful handler invocations
            - handler_errors: Total handler errors
            - cleanups: Compaction passes run
            - entries_compacted: Collected entries removed by compaction
        """
        return dict(self._stats)

    def _after_emit(self, cleanup_needed: bool) -> None:
        """Run or schedule compaction after an emit found collected entries."""
        self._stats["events_emitted"] += 1
        if not cleanup_needed:
            return
        if self._config.cleanup_mode == "inline":
            self.cleanup()
        else:
            self._cleanup_pending = True

    def _handle_error(self, callback: EventHandlerFunc, error: Exception) -> None:
        """Log and count a handler failure."""
        self._stats["handler_errors"] += 1
        handler_name = get_handler_name(callback)
        logger.error(
            f"Handler {handler_name} failed processing {self._name}: {error}",
            exc_info=True,
            extra={
                "handler": handler_name,
                "event_name": self._name,
                "error": str(error),
            },
        )

    def _emit_attributes(self, args: tuple[Any, ...]) -> dict[str, Any]:
        """Span attributes for an emit, including EventArgs details if present."""
        attributes: dict[str, Any] = {
            ATTR_EVENT_NAME: self._name,
            ATTR_HANDLER_COUNT: self._subscribers.count,
        }
        payload = next((arg for arg in args if isinstance(arg, EventArgs)), None)
        if payload is not None:
            attributes[ATTR_EVENT_ID] = str(payload.event_id)
            attributes[ATTR_EVENT_TYPE] = payload.event_type
        return attributes

    def __len__(self) -> int:
        return self._subscribers.count

    def __contains__(self, handler: object) -> bool:
        return handler in self._subscribers

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, subscribers={self._subscribers.count})"


__all__ = [
    "BaseWeakEvent",
    "EventHandlerFunc",
]
