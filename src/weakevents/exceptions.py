"""Library exceptions for the weakevents package."""

from typing import Any


class WeakEventsError(Exception):
    """Base exception for weakevents library."""

    pass


class InvalidHandlerError(WeakEventsError, TypeError):
    """
    Raised when a subscriber that cannot be invoked is registered.

    Registering ``None`` or a non-callable object is a programming error.
    The error is raised before the registry is touched, so internal state
    is never left half-updated.

    Attributes:
        handler: The rejected value
    """

    def __init__(self, handler: Any) -> None:
        self.handler = handler
        if handler is None:
            message = "Handler must not be None"
        else:
            message = f"Handler must be callable, got {type(handler).__name__}"
        super().__init__(message)


class ConsistencyError(WeakEventsError):
    """
    Raised when the weak entry list and the anchor table disagree.

    Every live subscriber must be anchored exactly once under its capturing
    target, and no two live entries may resolve to equal handlers. A
    violation indicates a bug in the registry itself; normal use of the
    public API cannot produce one.

    Attributes:
        handler_name: Name of the subscriber involved in the violation
        reason: Short description of what was found
    """

    def __init__(self, handler_name: str, reason: str) -> None:
        self.handler_name = handler_name
        self.reason = reason
        super().__init__(f"Registry inconsistency for handler {handler_name}: {reason}")


__all__ = [
    "WeakEventsError",
    "InvalidHandlerError",
    "ConsistencyError",
]
