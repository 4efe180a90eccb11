"""
Shared test fixtures for the weakevents library.

Usage:
    from tests.fixtures import (
        AsyncRecorder,
        CallableRecorder,
        Recorder,
        SlottedRecorder,
        Spawner,
        static_handler,
    )
"""

from tests.fixtures.subscribers import (
    AsyncRecorder,
    CallableRecorder,
    Recorder,
    SlottedRecorder,
    Spawner,
    static_calls,
    static_handler,
)

__all__ = [
    "AsyncRecorder",
    "CallableRecorder",
    "Recorder",
    "SlottedRecorder",
    "Spawner",
    "static_calls",
    "static_handler",
]
