"""
Tracers used by weak events.

An event never talks to OpenTelemetry directly. It receives a Tracer and
opens spans through it: emit, one span per handler, and compaction. Tests
pass a MockTracer and assert on the recorded span names.
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterator
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from opentelemetry.trace import Span

from weakevents.observability.tracing import OTEL_AVAILABLE, get_tracer

SpanAttributes = dict[str, Any] | None


@runtime_checkable
class Tracer(Protocol):
    """
    Anything that can open a span around a block of event work.

    ``span()`` yields the live span when there is one, so callers guard
    attribute updates with ``if span:``.
    """

    def span(
        self, name: str, attributes: SpanAttributes = None
    ) -> AbstractContextManager[Span | None]: ...

    @property
    def enabled(self) -> bool: ...


class NullTracer:
    """Tracer used when tracing is off. Spans cost nothing and yield None."""

    @contextlib.contextmanager
    def span(self, name: str, attributes: SpanAttributes = None) -> Iterator[None]:
        yield None

    @property
    def enabled(self) -> bool:
        return False


class OpenTelemetryTracer:
    """
    Tracer backed by the global OpenTelemetry tracer provider.

    Spans become the current span, so handler spans nest under the emit span
    (asyncio tasks started by an async emit inherit the context).

    Raises:
        ImportError: If opentelemetry-api is not installed
    """

    def __init__(self, tracer_name: str) -> None:
        tracer = get_tracer(tracer_name)
        if tracer is None:
            raise ImportError(
                "OpenTelemetry is not installed. Install with: pip install 'weakevents-py[otel]'"
            )
        self._tracer = tracer

    def span(
        self, name: str, attributes: SpanAttributes = None
    ) -> AbstractContextManager[Span | None]:
        return self._tracer.start_as_current_span(name, attributes=attributes or {})

    @property
    def enabled(self) -> bool:
        return True


class MockTracer:
    """
    Tracer that records ``(name, attributes)`` for every span opened.

    Example:
        >>> tracer = MockTracer()
        >>> saved = WeakEvent("Document.saved", tracer=tracer)
        >>> saved.emit()
        >>> tracer.span_names
        ['weakevents.event.emit']
    """

    def __init__(self) -> None:
        self.spans: list[tuple[str, SpanAttributes]] = []

    @contextlib.contextmanager
    def span(self, name: str, attributes: SpanAttributes = None) -> Iterator[None]:
        self.spans.append((name, attributes))
        yield None

    @property
    def enabled(self) -> bool:
        return True

    @property
    def span_names(self) -> list[str]:
        return [name for name, _ in self.spans]

    def clear(self) -> None:
        self.spans.clear()


def create_tracer(name: str, enable_tracing: bool = True) -> Tracer:
    """
    Pick the tracer for an event.

    Args:
        name: Tracer name, usually the module ``__name__``
        enable_tracing: False forces a NullTracer

    Returns:
        OpenTelemetryTracer when tracing is enabled and OpenTelemetry is
        importable, NullTracer otherwise
    """
    if enable_tracing and OTEL_AVAILABLE:
        return OpenTelemetryTracer(name)
    return NullTracer()


__all__ = [
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockTracer",
    "create_tracer",
]
