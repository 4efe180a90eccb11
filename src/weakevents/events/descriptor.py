"""
Per-instance event declarations.

Declaring an event as a class attribute gives every instance its own weak
event, created on first access:

    >>> class Document:
    ...     saved = event()
    ...     loaded = async_event()
    ...
    >>> document = Document()
    >>> document.saved += view.on_saved
    >>> document.saved.emit(document, DocumentSaved(path="notes.txt"))

The event object lives in the instance ``__dict__``, so classes using
``__slots__`` must include ``__dict__``.
"""

from typing import Any, Generic, TypeVar, overload

from weakevents.config import WeakEventConfig
from weakevents.events.async_event import AsyncWeakEvent
from weakevents.events.base import BaseWeakEvent
from weakevents.events.event import WeakEvent

E = TypeVar("E", bound=BaseWeakEvent)


class EventDescriptor(Generic[E]):
    """
    Descriptor creating one event of type ``event_class`` per instance.

    Supports ``instance.evt += handler`` and ``instance.evt -= handler``.
    Assigning anything other than the instance's own event raises
    AttributeError.

    Attributes:
        event_class: WeakEvent or AsyncWeakEvent (or a subclass)
        config: Configuration passed to every created event
    """

    def __init__(
        self,
        event_class: type[E],
        *,
        config: WeakEventConfig | None = None,
    ) -> None:
        self.event_class = event_class
        self.config = config
        self._attr_name = ""
        self._qualname = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self._attr_name = name
        self._qualname = f"{owner.__name__}.{name}"

    @overload
    def __get__(self, instance: None, owner: type | None = None) -> "EventDescriptor[E]": ...

    @overload
    def __get__(self, instance: object, owner: type | None = None) -> E: ...

    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        existing = instance.__dict__.get(self._attr_name)
        if existing is not None:
            return existing
        created = self.event_class(self._qualname, config=self.config)
        # setdefault keeps the first event if two threads race here
        return instance.__dict__.setdefault(self._attr_name, created)

    def __set__(self, instance: object, value: Any) -> None:
        if value is not self.__get__(instance, type(instance)):
            raise AttributeError(
                f"Cannot assign to event '{self._qualname}'. "
                f"Use += and -= to manage its subscribers."
            )

    def __delete__(self, instance: object) -> None:
        raise AttributeError(f"Cannot delete event '{self._qualname}'")


def event(*, config: WeakEventConfig | None = None) -> EventDescriptor[WeakEvent]:
    """
    Declare a synchronous per-instance event.

    Args:
        config: Configuration for each instance's WeakEvent

    Returns:
        Descriptor to assign as a class attribute
    """
    return EventDescriptor(WeakEvent, config=config)


def async_event(*, config: WeakEventConfig | None = None) -> EventDescriptor[AsyncWeakEvent]:
    """
    Declare an asynchronous per-instance event.

    Args:
        config: Configuration for each instance's AsyncWeakEvent

    Returns:
        Descriptor to assign as a class attribute
    """
    return EventDescriptor(AsyncWeakEvent, config=config)


__all__ = [
    "EventDescriptor",
    "event",
    "async_event",
]
