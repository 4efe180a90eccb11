"""Synchronous weak event."""

from typing import Any

from weakevents.events.base import BaseWeakEvent, EventHandlerFunc
from weakevents.handlers.handle import get_handler_name
from weakevents.observability.attributes import (
    ATTR_ERROR_TYPE,
    ATTR_EVENT_NAME,
    ATTR_HANDLER_NAME,
    ATTR_HANDLER_SUCCESS,
)


class WeakEvent(BaseWeakEvent):
    """
    Event that calls its weakly held subscribers synchronously.

    Handlers run on the emitting thread, in subscription order. A handler
    failure is logged and the remaining handlers still run, unless the
    event is configured with ``continue_on_error=False``.

    Example:
        >>> saved = WeakEvent("Document.saved")
        >>> saved += view.on_saved      # kept while view is alive
        >>> saved.emit(document, DocumentSaved(path="notes.txt"))
        >>> saved -= view.on_saved
    """

    def emit(self, *args: Any, **kwargs: Any) -> None:
        """
        Call every live subscriber with the given arguments.

        Subscribers added while the emit is running are first called by the
        next emit. Entries whose subscriber was collected are compacted
        according to config.cleanup_mode.

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
                for callback in callbacks:
                    self._invoke(callback, args, kwargs)
        finally:
            # Runs even when a handler raises
            self._after_emit(cleanup_needed)

    def _invoke(
        self,
        callback: EventHandlerFunc,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        """Call one handler, recording the outcome."""
        with self._tracer.span(
            "weakevents.event.handle",
            {
                ATTR_EVENT_NAME: self._name,
                ATTR_HANDLER_NAME: get_handler_name(callback),
            },
        ) as span:
            try:
                callback(*args, **kwargs)
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


__all__ = ["WeakEvent"]
