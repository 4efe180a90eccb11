"""
Configuration for weak events.

This module provides:
- WeakEventConfig: Behaviour settings shared by WeakEvent and AsyncWeakEvent
- CleanupMode: Type alias for the compaction scheduling modes
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

# When compaction runs after an emit reports collected subscribers
CleanupMode = Literal["inline", "deferred"]


@dataclass(frozen=True)
class WeakEventConfig:
    """
    Configuration for a weak event.

    Attributes:
        cleanup_mode: When to compact entries whose subscriber was collected
            - "inline": Right after the emit that noticed them (default)
            - "deferred": At the start of the next subscribe call
        continue_on_error: Whether remaining handlers still run after one
            raises. When False, the first handler exception propagates to
            the caller of emit().
        debug_checks: Verify registry consistency after every mutation.
            Linear in the number of subscribers; meant for tests.
        enable_tracing: Emit OpenTelemetry spans when available. Ignored
            if a tracer is passed to the event explicitly.

    Example:
        >>> config = WeakEventConfig(cleanup_mode="deferred", debug_checks=True)
        >>> changed = WeakEvent("changed", config=config)
    """

    cleanup_mode: CleanupMode = "inline"
    continue_on_error: bool = True
    debug_checks: bool = False
    enable_tracing: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.cleanup_mode not in get_args(CleanupMode):
            raise ValueError(
                f"cleanup_mode must be 'inline' or 'deferred', got {self.cleanup_mode!r}. "
                "Use 'inline' (default) to compact right after an emit."
            )


__all__ = [
    "CleanupMode",
    "WeakEventConfig",
]
