"""
Shared pytest fixtures for the weakevents library tests.

This module provides:
- Registry fixtures (collection, anchor_table)
- Event fixtures (weak_event, async_weak_event, mock_tracer)
- Subscriber fixtures (recorder, call_log)
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tests.fixtures import Recorder, static_calls
from weakevents import AsyncWeakEvent, WeakEvent, WeakEventConfig
from weakevents.observability import MockTracer
from weakevents.registry import AnchorTable, WeakCollection

# ============================================================================
# Registry Fixtures
# ============================================================================


@pytest.fixture
def collection() -> WeakCollection:
    """Weak collection that verifies its invariants after every mutation."""
    return WeakCollection(debug_checks=True)


@pytest.fixture
def anchor_table() -> AnchorTable:
    """Empty anchor table."""
    return AnchorTable()


# ============================================================================
# Event Fixtures
# ============================================================================


@pytest.fixture
def debug_config() -> WeakEventConfig:
    """Configuration with consistency checks and no OpenTelemetry."""
    return WeakEventConfig(debug_checks=True, enable_tracing=False)


@pytest.fixture
def mock_tracer() -> MockTracer:
    """Tracer recording span names and attributes."""
    return MockTracer()


@pytest.fixture
def weak_event(debug_config: WeakEventConfig) -> WeakEvent:
    """Synchronous weak event with consistency checks."""
    return WeakEvent("test.changed", config=debug_config)


@pytest.fixture
def async_weak_event(debug_config: WeakEventConfig) -> AsyncWeakEvent:
    """Asynchronous weak event with consistency checks."""
    return AsyncWeakEvent("test.loaded", config=debug_config)


# ============================================================================
# Subscriber Fixtures
# ============================================================================


@pytest.fixture
def call_log() -> list[str]:
    """Shared list subscribers append their names to, in call order."""
    return []


@pytest.fixture
def recorder(call_log: list[str]) -> Recorder:
    """Recorder kept alive for the duration of the test."""
    return Recorder("recorder", call_log)


@pytest.fixture(autouse=True)
def reset_static_calls() -> Iterator[None]:
    """Module-level handler state must not leak between tests."""
    static_calls.clear()
    yield
    static_calls.clear()
