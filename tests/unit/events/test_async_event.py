"""
Unit tests for AsyncWeakEvent.

Tests cover:
- Coroutine, plain and mixed handlers
- Error isolation and propagation
- Weak retention of async subscribers
- Snapshot semantics for handlers subscribed during an emit
"""

import asyncio
import logging
import weakref
from typing import Any

import pytest

from tests.fixtures import AsyncRecorder, Recorder
from weakevents import AsyncWeakEvent, WeakEventConfig
from weakevents.observability import MockTracer
from weakevents.testing import assert_collected


class TestAsyncEmit:
    """Tests for awaiting handlers."""

    @pytest.mark.asyncio
    async def test_coroutine_handler_awaited(self, async_weak_event: AsyncWeakEvent) -> None:
        subscriber = AsyncRecorder()
        async_weak_event.subscribe(subscriber.on_event)

        await async_weak_event.emit("sender", 1)

        assert subscriber.calls == [("sender", 1)]

    @pytest.mark.asyncio
    async def test_sync_handler_called(
        self, async_weak_event: AsyncWeakEvent, recorder: Recorder
    ) -> None:
        async_weak_event.subscribe(recorder.on_event)

        await async_weak_event.emit("sender", key="value")

        assert recorder.calls == [(("sender",), {"key": "value"})]

    @pytest.mark.asyncio
    async def test_mixed_handlers(
        self, async_weak_event: AsyncWeakEvent, call_log: list[str], recorder: Recorder
    ) -> None:
        subscriber = AsyncRecorder("async", call_log)
        async_weak_event.subscribe(recorder.on_event)
        async_weak_event.subscribe(subscriber.on_event)

        await async_weak_event.emit()

        assert sorted(call_log) == ["async", "recorder"]

    @pytest.mark.asyncio
    async def test_handler_returning_awaitable(self, async_weak_event: AsyncWeakEvent) -> None:
        done: list[str] = []

        async def finish() -> None:
            done.append("finished")

        def start(*_: Any) -> Any:
            return finish()

        async_weak_event.subscribe(start)

        await async_weak_event.emit()

        assert done == ["finished"]

    @pytest.mark.asyncio
    async def test_handlers_run_concurrently(self, async_weak_event: AsyncWeakEvent) -> None:
        started = asyncio.Event()
        order: list[str] = []

        async def waiter(*_: Any) -> None:
            await asyncio.wait_for(started.wait(), timeout=5)
            order.append("waiter")

        async def starter(*_: Any) -> None:
            order.append("starter")
            started.set()

        async_weak_event.subscribe(waiter)
        async_weak_event.subscribe(starter)

        await async_weak_event.emit()

        assert order == ["starter", "waiter"]

    @pytest.mark.asyncio
    async def test_emit_without_subscribers(self, async_weak_event: AsyncWeakEvent) -> None:
        await async_weak_event.emit()

        assert async_weak_event.get_stats()["events_emitted"] == 1


class TestAsyncErrors:
    """Handler failures."""

    @pytest.mark.asyncio
    async def test_failure_isolated_and_logged(
        self,
        async_weak_event: AsyncWeakEvent,
        call_log: list[str],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        failing = AsyncRecorder("failing", call_log)
        healthy = AsyncRecorder("healthy", call_log)
        async_weak_event.subscribe(failing.fail)
        async_weak_event.subscribe(healthy.on_event)

        with caplog.at_level(logging.ERROR, logger="weakevents"):
            await async_weak_event.emit()

        assert call_log == ["healthy"]
        assert "Handler AsyncRecorder.fail failed processing test.loaded" in caplog.text
        assert async_weak_event.get_stats()["handler_errors"] == 1

    @pytest.mark.asyncio
    async def test_failure_propagates_when_configured(self) -> None:
        event = AsyncWeakEvent(
            "strict",
            config=WeakEventConfig(continue_on_error=False, enable_tracing=False),
        )
        failing = AsyncRecorder("failing")
        event.subscribe(failing.fail)

        with pytest.raises(RuntimeError, match="failing failed"):
            await event.emit()

        assert event.get_stats()["handler_errors"] == 1
        assert event.get_stats()["events_emitted"] == 1

    @pytest.mark.asyncio
    async def test_cleanup_runs_when_handler_propagates(self) -> None:
        event = AsyncWeakEvent(
            "strict",
            config=WeakEventConfig(continue_on_error=False, enable_tracing=False),
        )
        transient = AsyncRecorder("transient")
        failing = AsyncRecorder("failing")
        event.subscribe(transient.on_event)
        event.subscribe(failing.fail)
        ref = weakref.ref(transient)
        del transient
        assert_collected(ref, "transient")

        with pytest.raises(RuntimeError):
            await event.emit()

        assert event.subscriber_count == 1
        assert event.get_stats()["entries_compacted"] == 1


class TestAsyncRetention:
    """Subscriber lifetime for async events."""

    @pytest.mark.asyncio
    async def test_collected_subscriber_skipped(self, async_weak_event: AsyncWeakEvent) -> None:
        subscriber = AsyncRecorder()
        async_weak_event.subscribe(subscriber.on_event)
        calls = subscriber.calls
        ref = weakref.ref(subscriber)

        del subscriber
        assert_collected(ref, "subscriber")
        await async_weak_event.emit()

        assert calls == []
        assert async_weak_event.subscriber_count == 0
        assert async_weak_event.get_stats()["entries_compacted"] == 1

    @pytest.mark.asyncio
    async def test_subscriber_added_during_emit_waits_for_next(
        self, async_weak_event: AsyncWeakEvent, call_log: list[str]
    ) -> None:
        late = AsyncRecorder("late", call_log)

        async def adder(*_: Any) -> None:
            call_log.append("adder")
            async_weak_event.subscribe(late.on_event)

        async_weak_event.subscribe(adder)

        await async_weak_event.emit()
        assert call_log == ["adder"]

        call_log.clear()
        await async_weak_event.emit()
        assert sorted(call_log) == ["adder", "late"]


class TestAsyncTracing:
    """Spans for async emits."""

    @pytest.mark.asyncio
    async def test_emit_and_handle_spans(self, mock_tracer: MockTracer) -> None:
        event = AsyncWeakEvent("Session.loaded", tracer=mock_tracer)
        subscriber = AsyncRecorder()
        event.subscribe(subscriber.on_event)

        await event.emit()

        assert mock_tracer.span_names == ["weakevents.event.emit", "weakevents.event.handle"]
