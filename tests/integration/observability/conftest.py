"""
Shared pytest fixtures for observability integration tests.

This module provides fixtures for OpenTelemetry testing infrastructure
using an in-memory span exporter for span inspection.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest

from weakevents.observability import OTEL_AVAILABLE

# Module-level storage for the global test provider
_test_provider = None


@pytest.fixture(scope="session")
def setup_test_tracing() -> Generator[Any, None, None]:
    """
    Set up a global TracerProvider once per session.

    OpenTelemetry allows the global provider to be set only once, so an
    existing SDK provider is reused.
    """
    global _test_provider

    if not OTEL_AVAILABLE:
        pytest.skip("OpenTelemetry not installed")
    sdk_trace = pytest.importorskip("opentelemetry.sdk.trace")
    from opentelemetry import trace

    current_provider = trace.get_tracer_provider()
    if isinstance(current_provider, sdk_trace.TracerProvider):
        _test_provider = current_provider
    else:
        _test_provider = sdk_trace.TracerProvider()
        trace.set_tracer_provider(_test_provider)

    yield _test_provider


@pytest.fixture
def trace_exporter(setup_test_tracing: Any) -> Generator[Any, None, None]:
    """
    In-memory span exporter attached to the session provider.

    Processors cannot be removed from a provider, so the exporter is
    cleared after the test instead.
    """
    from opentelemetry.sdk.trace.export import SimpleSpanProcessor
    from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

    exporter = InMemorySpanExporter()
    setup_test_tracing.add_span_processor(SimpleSpanProcessor(exporter))

    yield exporter

    exporter.clear()


@pytest.fixture
def find_spans(trace_exporter: Any) -> Callable[[str], list[Any]]:
    """Return all finished spans whose name contains the given substring."""

    def _find_spans(name_contains: str) -> list[Any]:
        return [s for s in trace_exporter.get_finished_spans() if name_contains in s.name]

    return _find_spans
