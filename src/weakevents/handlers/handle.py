"""
Callback handles for weakly registered subscribers.

A subscriber is any Python callable. Storing a bound method by weak
reference does not work on its own: ``obj.method`` builds a new method
object on every attribute access, so a weak reference to it dies as soon as
``subscribe()`` returns, even though ``obj`` is alive. Storing the bound
method strongly is no better, because the method references ``obj`` and
keeps it alive forever.

CallbackHandle solves this by splitting a callable into its capturing
target (held weakly) and its behaviour (held strongly), and rebuilding an
equal callable on demand. The target decides how long the handle is worth
keeping; the registry decides where the handle is kept.
"""

import functools
import types
import weakref
from collections.abc import Callable
from typing import Any

from weakevents.exceptions import InvalidHandlerError

# Callables that never carry per-instance state worth tracking
_STATELESS_TYPES: tuple[type, ...] = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    functools.partial,
    type,
)


def get_handler_name(handler: Any) -> str:
    """
    Get a descriptive name for a handler for logging and debugging.

    Args:
        handler: Any callable (bound method, function, lambda, instance)

    Returns:
        Qualified name when the callable has one, its class name otherwise
    """
    name = getattr(handler, "__qualname__", None)
    if isinstance(name, str):
        return name
    return type(handler).__name__


def _weak_target(obj: Any) -> weakref.ref[Any] | None:
    """Return a weak reference to obj, or None if obj does not support one."""
    try:
        return weakref.ref(obj)
    except TypeError:
        return None


class CallbackHandle:
    """
    Equality-comparable handle for a subscriber callable.

    The handle decomposes a callable as follows:
    - Bound method ``obj.meth``: target is ``obj`` (weak), behaviour is
      ``meth.__func__``
    - Callable instance: target is the instance itself (weak)
    - Anything else (functions, lambdas, partials, builtins, classes, or a
      bound method whose ``__self__`` cannot be weakly referenced): no
      target, the callable itself is held strongly

    Handles without a target are anchored under the registry's sentinel key
    and live until they are unsubscribed or the registry goes away.

    Two handles are equal when they wrap the same target object and equal
    behaviour, which matches how bound methods themselves compare. Captured
    data is never compared.

    Example:
        >>> counter = Counter()
        >>> handle = CallbackHandle(counter.on_changed)
        >>> handle.target is counter
        True
        >>> handle == CallbackHandle(counter.on_changed)
        True
        >>> handle.resolve()()  # calls counter.on_changed()

    Raises:
        InvalidHandlerError: If handler is None or not callable
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, handler: Callable[..., Any]) -> None:
        if handler is None or not callable(handler):
            raise InvalidHandlerError(handler)

        self._name = get_handler_name(handler)
        self._target_ref: weakref.ref[Any] | None = None
        self._func: Callable[..., Any] | None = None
        self._callable: Callable[..., Any] | None = None

        if isinstance(handler, types.MethodType):
            self._target_ref = _weak_target(handler.__self__)
            if self._target_ref is not None:
                self._func = handler.__func__
                return
        elif not isinstance(handler, _STATELESS_TYPES):
            self._target_ref = _weak_target(handler)
            if self._target_ref is not None:
                return

        self._callable = handler

    @property
    def name(self) -> str:
        """Get the handler's descriptive name."""
        return self._name

    @property
    def has_target(self) -> bool:
        """True if the handle is governed by a capturing target."""
        return self._target_ref is not None

    @property
    def target(self) -> Any | None:
        """The live capturing target, or None if there is none or it was collected."""
        if self._target_ref is None:
            return None
        return self._target_ref()

    @property
    def alive(self) -> bool:
        """True while the handle can still be resolved."""
        return self._target_ref is None or self._target_ref() is not None

    def resolve(self) -> Callable[..., Any] | None:
        """
        Rebuild the subscribed callable.

        Returns:
            A callable equal to the one originally subscribed, or None if
            the capturing target has been collected
        """
        if self._target_ref is None:
            return self._callable

        target = self._target_ref()
        if target is None:
            return None
        if self._func is None:
            return target  # type: ignore[no-any-return]
        return types.MethodType(self._func, target)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CallbackHandle):
            return NotImplemented
        if self is other:
            return True
        if self._target_ref is None or other._target_ref is None:
            return (
                self._target_ref is None
                and other._target_ref is None
                and self._callable == other._callable
            )
        target = self._target_ref()
        return target is not None and target is other._target_ref() and self._func == other._func

    def __repr__(self) -> str:
        state = "" if self.alive else ", collected"
        return f"CallbackHandle({self._name}{state})"


__all__ = [
    "CallbackHandle",
    "get_handler_name",
]
