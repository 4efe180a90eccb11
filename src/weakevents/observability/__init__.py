"""
Observability utilities for weakevents.

This module provides the tracer abstraction and standard attribute
definitions used by weak events.

Example:
    >>> from weakevents.observability import OTEL_AVAILABLE, create_tracer
    >>>
    >>> class Emitter:
    ...     def __init__(self, enable_tracing: bool = True):
    ...         self._tracer = create_tracer(__name__, enable_tracing)

Note:
    OpenTelemetry is an optional dependency. All utilities in this module
    gracefully handle the case where OpenTelemetry is not installed.
"""

from weakevents.observability.attributes import (
    ATTR_ENTRIES_COMPACTED,
    ATTR_ERROR_TYPE,
    ATTR_EVENT_ID,
    ATTR_EVENT_NAME,
    ATTR_EVENT_TYPE,
    ATTR_HANDLER_COUNT,
    ATTR_HANDLER_NAME,
    ATTR_HANDLER_SUCCESS,
)
from weakevents.observability.tracer import (
    MockTracer,
    NullTracer,
    OpenTelemetryTracer,
    Tracer,
    create_tracer,
)
from weakevents.observability.tracing import OTEL_AVAILABLE, get_tracer

__all__ = [
    # Tracing utilities
    "OTEL_AVAILABLE",
    "get_tracer",
    # Tracer (composition-based API)
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockTracer",
    "create_tracer",
    # Attributes - Event
    "ATTR_EVENT_NAME",
    "ATTR_EVENT_ID",
    "ATTR_EVENT_TYPE",
    # Attributes - Handler
    "ATTR_HANDLER_NAME",
    "ATTR_HANDLER_COUNT",
    "ATTR_HANDLER_SUCCESS",
    # Attributes - Compaction
    "ATTR_ENTRIES_COMPACTED",
    "ATTR_ERROR_TYPE",
]
