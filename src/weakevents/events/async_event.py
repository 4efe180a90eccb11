"""
Asynchronous weak event.

Handlers follow the asynchronous event-handler shape ``(sender, ...)`` and
may be coroutine functions, plain functions, or plain functions that return
an awaitable. Cancelling the task awaiting emit() cancels the handlers still
running.
"""

import asyncio
import inspect
from typing import Any

from weakevents.events.base import BaseWeakEvent, EventHandlerFunc
from weakevents.handlers.handle import get_handler_name
from weakevents.observability.attributes import (
    ATTR_ERROR_TYPE,
    ATTR_EVENT_NAME,
    ATTR_HANDLER_NAME,
    ATTR_HANDLER_SUCCESS,
)


class AsyncWeakEvent(BaseWeakEvent):
    """
    Event that awaits its weakly held subscribers concurrently.

    Features:
    - Support for sync and async handlers
    - Error isolation (handler failures don't stop other handlers)
    - Snapshot semantics: handlers subscribed during an emit are first
      called by the next emit

    Example:
        >>> loaded = AsyncWeakEvent("Session.loaded")
        >>> loaded += dashboard.on_loaded   # async def on_loaded(self, sender)
        >>> await loaded.emit(session)

    Thread Safety:
        - Subscription methods (subscribe, unsubscribe) are thread-safe
        - emit() must be awaited from an event loop
    """

    async def emit(self, *args: Any, **kwargs: Any) -> None:
        """
        Call every live subscriber and wait for all of them to finish.

        Args:
            *args: Positional arguments for the handlers (by convention
                the sender and an EventArgs payload)
            **kwargs: Keyword arguments for the handlers

        Raises:
            Exception: The first handler failure, only when the event is
                configured with continue_on_error=False
        """
        callbacks: list[EventHandlerFunc] = []
        cleanup_needed = False

        try:
            with self._tracer.span("weakevents.event.emit", self._emit_attributes(args)):
                cleanup_needed = self._subscribers.for_each(callbacks.append)
                if callbacks:
                    await asyncio.gather(
                        *(self._invoke(callback, args, kwargs) for callback in callbacks)
                    )
        finally:
            self._after_emit(cleanup_needed)

    async def _invoke(
        self,
        callback: EventHandlerFunc,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        """Call and await one handler, recording the outcome."""
        with self._tracer.span(
            "weakevents.event.handle",
            {
                ATTR_EVENT_NAME: self._name,
                ATTR_HANDLER_NAME: get_handler_name(callback),
            },
        ) as span:
            try:
                result = callback(*args, **kwargs)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                if span:
                    span.set_attribute(ATTR_HANDLER_SUCCESS, False)
                    span.set_attribute(ATTR_ERROR_TYPE, type(e).__name__)
                if not self._config.continue_on_error:
                    # The span records the exception as it propagates
                    self._stats["handler_errors"] += 1
                    raise
                if span:
                    span.record_exception(e)
                self._handle_error(callback, e)
                return

            if span:
                span.set_attribute(ATTR_HANDLER_SUCCESS, True)
            self._stats["handlers_invoked"] += 1


__all__ = ["AsyncWeakEvent"]
