"""
OpenTelemetry availability for weakevents.

OpenTelemetry is an optional dependency. This module is the single place
that imports it, so the rest of the package can check OTEL_AVAILABLE.

Example:
    >>> from weakevents.observability import OTEL_AVAILABLE, create_tracer
    >>>
    >>> tracer = create_tracer(__name__, enable_tracing=OTEL_AVAILABLE)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from opentelemetry.trace import Tracer

# Optional OpenTelemetry import - single source of truth
try:
    from opentelemetry import trace

    OTEL_AVAILABLE = True
except ImportError:
    OTEL_AVAILABLE = False
    trace = None  # type: ignore[assignment]


def get_tracer(name: str) -> Tracer | None:
    """
    Get an OpenTelemetry tracer if available.

    Args:
        name: The name for the tracer (typically __name__ of the module)

    Returns:
        OpenTelemetry Tracer if available, None otherwise
    """
    if OTEL_AVAILABLE and trace is not None:
        return trace.get_tracer(name)
    return None


__all__ = [
    "OTEL_AVAILABLE",
    "get_tracer",
]
