"""
Weakly held, ordered collection of subscriber handles.

WeakCollection stores one weak reference per subscriber and anchors the
subscriber's handle in an AnchorTable under its capturing target. The
collection therefore never keeps a subscriber alive, and a subscriber stays
registered for as long as the object it belongs to is alive.

Iteration works on a snapshot and never mutates the list; entries whose
subscriber was collected are only reported. Removing them is a separate
compaction pass (cleanup()) so that add and remove stay cheap.
"""

import logging
import threading
import weakref
from collections.abc import Callable, Iterator
from typing import Any

from weakevents.exceptions import ConsistencyError
from weakevents.handlers.handle import CallbackHandle
from weakevents.registry.anchors import AnchorTable

logger = logging.getLogger(__name__)


def _resolve(entry: weakref.ref[CallbackHandle]) -> CallbackHandle | None:
    """Return the entry's handle if both the handle and its target are alive."""
    handle = entry()
    if handle is None or not handle.alive:
        return None
    return handle


class WeakCollection:
    """
    Thread-safe collection of weakly held subscriber callables.

    Features:
    - Deduplicated insertion (equal handlers are stored once)
    - Removal by handler equality
    - Snapshot iteration that reports collected entries
    - Explicit compaction of collected entries

    Example:
        >>> subscribers = WeakCollection()
        >>> subscribers.try_add(view.on_changed)
        True
        >>> subscribers.try_add(view.on_changed)
        False
        >>> needs_cleanup = subscribers.for_each(lambda callback: callback(model))
        >>> if needs_cleanup:
        ...     subscribers.cleanup()

    Thread Safety:
        - try_add, try_remove, cleanup and clear are serialized by one lock
        - for_each copies the entries under the lock and visits them after
          releasing it, so a visitor may add or remove subscribers
    """

    def __init__(self, *, debug_checks: bool = False) -> None:
        """
        Initialize an empty collection.

        Args:
            debug_checks: Run check_consistency() after every mutation
        """
        self._entries: list[weakref.ref[CallbackHandle]] = []
        self._anchors = AnchorTable()
        self._lock = threading.RLock()
        self._debug_checks = debug_checks

    @property
    def count(self) -> int:
        """
        Number of stored entries.

        Includes entries whose subscriber has been collected but not yet
        compacted, so this is a point-in-time size rather than a count of
        live subscribers.
        """
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.count

    @property
    def anchors(self) -> AnchorTable:
        """The anchor table keeping this collection's handles alive."""
        return self._anchors

    def try_add(self, handler: Callable[..., Any]) -> bool:
        """
        Add a subscriber unless an equal one is already present.

        Args:
            handler: The subscriber callable

        Returns:
            True if the subscriber was added, False if it was already present

        Raises:
            InvalidHandlerError: If handler is None or not callable
        """
        handle = CallbackHandle(handler)
        # Hold the target strongly until it is anchored
        target = handle.target

        with self._lock:
            for entry in self._entries:
                existing = _resolve(entry)
                if existing is not None and existing == handle:
                    logger.debug(
                        f"Handler {handle.name} already registered",
                        extra={"handler": handle.name},
                    )
                    return False

            self._anchors.anchor(target, handle)
            self._entries.append(weakref.ref(handle))

            if self._debug_checks:
                self._check_consistency_locked()

        logger.debug(
            f"Registered handler {handle.name}",
            extra={"handler": handle.name, "anchored": handle.has_target},
        )
        return True

    def try_remove(self, handler: Callable[..., Any]) -> bool:
        """
        Remove the first entry equal to handler. Does nothing if not present.

        Args:
            handler: The subscriber callable to remove

        Returns:
            True if an entry was removed, False otherwise
        """
        if handler is None or not callable(handler):
            return False

        candidate = CallbackHandle(handler)

        with self._lock:
            for i, entry in enumerate(self._entries):
                existing = _resolve(entry)
                if existing is not None and existing == candidate:
                    self._entries.pop(i)
                    self._anchors.release(existing.target, existing)

                    if self._debug_checks:
                        self._check_consistency_locked()

                    logger.debug(
                        f"Unregistered handler {existing.name}",
                        extra={"handler": existing.name},
                    )
                    return True

        logger.debug(
            f"Handler {candidate.name} not found",
            extra={"handler": candidate.name},
        )
        return False

    def for_each(self, visit: Callable[[Callable[..., Any]], None]) -> bool:
        """
        Call visit with every live subscriber.

        The entries are copied under the lock; visit runs after the lock is
        released, in insertion order. Subscribers added after the copy is
        taken are not visited by this call.

        Args:
            visit: Called with each live subscriber callable

        Returns:
            True if collected entries were found and cleanup() is warranted
        """
        with self._lock:
            snapshot = list(self._entries)

        cleanup_needed = False
        for entry in snapshot:
            handle = entry()
            callback = handle.resolve() if handle is not None else None
            if callback is None:
                cleanup_needed = True
                continue
            visit(callback)

        return cleanup_needed

    def cleanup(self) -> int:
        """
        Remove entries whose subscriber has been collected.

        Returns:
            Number of entries removed
        """
        with self._lock:
            before = len(self._entries)
            self._entries[:] = [entry for entry in self._entries if _resolve(entry) is not None]
            removed = before - len(self._entries)

            if self._debug_checks:
                self._check_consistency_locked()

        if removed:
            logger.debug(
                f"Compacted {removed} collected handler(s)",
                extra={"removed": removed},
            )
        return removed

    def clear(self) -> None:
        """Remove every subscriber."""
        with self._lock:
            self._entries.clear()
            self._anchors.clear()

    def check_consistency(self) -> None:
        """
        Verify that the entry list and the anchor table agree.

        Raises:
            ConsistencyError: If a live subscriber is listed twice, is not
                anchored exactly once under its own target, or if an anchored
                handle has no live entry
        """
        with self._lock:
            self._check_consistency_locked()

    def _check_consistency_locked(self) -> None:
        # Pair each handle with its target in one pass; holding the targets
        # keeps them from being collected for the rest of the check
        live: list[tuple[CallbackHandle, Any]] = []
        for handle in map(_resolve, self._entries):
            if handle is None:
                continue
            target = handle.target
            if handle.has_target and target is None:
                continue
            live.append((handle, target))

        for i, (handle, _) in enumerate(live):
            if any(handle == other for other, _ in live[i + 1 :]):
                raise ConsistencyError(handle.name, "listed more than once")

        anchored = self._anchors.snapshot()
        for handle, target in live:
            occurrences = sum(
                1 for _, handles in anchored for candidate in handles if candidate is handle
            )
            if occurrences != 1:
                raise ConsistencyError(handle.name, f"anchored {occurrences} times, expected 1")
            if not any(candidate is handle for candidate in self._anchors.handles(target)):
                raise ConsistencyError(handle.name, "anchored under the wrong target")

        for _, handles in anchored:
            for candidate in handles:
                if not any(candidate is handle for handle, _ in live):
                    raise ConsistencyError(candidate.name, "anchored without a live entry")

    def __contains__(self, handler: object) -> bool:
        if handler is None or not callable(handler):
            return False
        candidate = CallbackHandle(handler)
        with self._lock:
            return any(
                existing is not None and existing == candidate
                for existing in map(_resolve, self._entries)
            )

    def __iter__(self) -> Iterator[Callable[..., Any]]:
        """Iterate a snapshot of the live subscribers."""
        with self._lock:
            snapshot = list(self._entries)
        for entry in snapshot:
            handle = entry()
            callback = handle.resolve() if handle is not None else None
            if callback is not None:
                yield callback

    def __repr__(self) -> str:
        return f"WeakCollection(count={self.count})"


__all__ = ["WeakCollection"]
