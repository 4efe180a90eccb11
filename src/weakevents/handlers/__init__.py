"""
Handler infrastructure for weak events.

This module provides utilities for working with subscriber callables:
- CallbackHandle: Splits a callable into a weakly held target and its behaviour
- get_handler_name: Descriptive handler name for logging

Example:
    >>> from weakevents.handlers import CallbackHandle
    >>>
    >>> handle = CallbackHandle(view.on_model_changed)
    >>> callback = handle.resolve()  # None once view is collected
"""

from weakevents.handlers.handle import CallbackHandle, get_handler_name

__all__ = [
    "CallbackHandle",
    "get_handler_name",
]
