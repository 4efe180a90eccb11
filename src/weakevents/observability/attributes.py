"""
Standard span attributes for weakevents.

This module defines attribute constants used across weakevents components
for consistent span naming. They follow OpenTelemetry semantic conventions
where applicable.

Example:
    >>> from weakevents.observability.attributes import (
    ...     ATTR_EVENT_NAME,
    ...     ATTR_HANDLER_COUNT,
    ... )
    >>>
    >>> with tracer.span(
    ...     "weakevents.event.emit",
    ...     {ATTR_EVENT_NAME: "changed", ATTR_HANDLER_COUNT: 3},
    ... ):
    ...     pass
"""

# =============================================================================
# Event Attributes
# =============================================================================

ATTR_EVENT_NAME = "weakevents.event.name"
"""Name of the weak event being emitted (e.g., 'Document.saved')."""

ATTR_EVENT_ID = "weakevents.event.id"
"""Unique identifier of the EventArgs payload, if any (UUID string)."""

ATTR_EVENT_TYPE = "weakevents.event.type"
"""Type name of the EventArgs payload, if any (e.g., 'DocumentSaved')."""

# =============================================================================
# Handler Attributes
# =============================================================================

ATTR_HANDLER_NAME = "weakevents.handler.name"
"""Name of the subscriber being invoked (string)."""

ATTR_HANDLER_COUNT = "weakevents.handler.count"
"""Number of entries considered by an emit (integer)."""

ATTR_HANDLER_SUCCESS = "weakevents.handler.success"
"""Whether the subscriber completed without raising (boolean)."""

# =============================================================================
# Compaction Attributes
# =============================================================================

ATTR_ENTRIES_COMPACTED = "weakevents.entries.compacted"
"""Number of collected entries removed by a cleanup pass (integer)."""

ATTR_ERROR_TYPE = "error.type"
"""Exception class name when an operation fails (OTEL semantic convention)."""
