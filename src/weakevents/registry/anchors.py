"""
Anchor table tying subscriber handles to their capturing targets.

A weak entry list on its own would let a handle be collected right after
registration, because nothing but the registry ever refers to it. The
anchor table keeps each handle strongly reachable for exactly as long as
its capturing target is alive, without the table itself keeping the target
alive.

Keys are held through ``weakref.ref`` with a reclaim callback. When a key
is collected, its whole set of handles is released. Handles only hold their
target weakly, so a value never keeps its own key alive.

Handles that have no capturing target are anchored under a sentinel key
that belongs to the table and lives as long as the table does.
"""

import logging
import threading
import weakref
from collections.abc import Callable
from typing import Any

from weakevents.handlers.handle import CallbackHandle

logger = logging.getLogger(__name__)


class _NoTarget:
    """Sentinel anchor key for handles that capture no target."""

    def __repr__(self) -> str:
        return "<no target>"


class _Anchor:
    """One anchor key and the handles anchored under it, in insertion order."""

    __slots__ = ("key_ref", "handles")

    def __init__(self, key_ref: weakref.ref[Any]) -> None:
        self.key_ref = key_ref
        self.handles: list[CallbackHandle] = []


class AnchorTable:
    """
    Weakly keyed table of strongly held callback handles.

    Keys are compared by identity, so unhashable targets and targets with
    custom ``__eq__`` work as anchor keys. Values are ordered and
    deduplicated by handle equality.

    Thread Safety:
        All operations serialize through one lock. The reclaim callback
        never blocks on that lock: when it is busy (another thread holds it,
        or a garbage collection pass fired inside a locked section) the
        release is queued and applied at the start of the next operation.

    Example:
        >>> table = AnchorTable()
        >>> handle = CallbackHandle(view.on_changed)
        >>> table.anchor(view, handle)
        >>> table.contains(view, handle)
        True
        >>> del view  # the handle is released with its key
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._anchors: dict[int, _Anchor] = {}
        # (key id, dead key ref) pairs waiting for the lock
        self._pending: list[tuple[int, weakref.ref[Any]]] = []
        self._sentinel = _NoTarget()
        sentinel_anchor = _Anchor(weakref.ref(self._sentinel))
        self._anchors[id(self._sentinel)] = sentinel_anchor

    @property
    def sentinel(self) -> Any:
        """The key used for handles without a capturing target."""
        return self._sentinel

    @property
    def key_count(self) -> int:
        """Number of keys with at least one handle, including the sentinel if used."""
        with self._lock:
            self._purge_pending()
            return sum(1 for anchor in self._anchors.values() if anchor.handles)

    def anchor(self, key: Any | None, handle: CallbackHandle) -> None:
        """
        Anchor a handle under a key.

        Idempotent: anchoring an equal handle twice under the same key keeps
        a single copy.

        Args:
            key: Capturing target, or None for the sentinel
            handle: The handle to keep alive while key is alive
        """
        key = self._sentinel if key is None else key

        with self._lock:
            self._purge_pending()
            anchor = self._anchors.get(id(key))
            if anchor is None or anchor.key_ref() is not key:
                key_ref = weakref.ref(key, self._make_reclaim_callback(id(key)))
                anchor = _Anchor(key_ref)
                self._anchors[id(key)] = anchor
            if handle not in anchor.handles:
                anchor.handles.append(handle)

    def release(self, key: Any | None, handle: CallbackHandle) -> bool:
        """
        Remove a handle from a key's set.

        The key's entry is dropped once its set is empty. The sentinel entry
        is kept.

        Args:
            key: Capturing target, or None for the sentinel
            handle: The handle to release

        Returns:
            True if the handle was anchored under key and has been removed
        """
        key = self._sentinel if key is None else key

        with self._lock:
            self._purge_pending()
            anchor = self._anchors.get(id(key))
            if anchor is None or anchor.key_ref() is not key:
                return False
            for i, anchored in enumerate(anchor.handles):
                if anchored == handle:
                    anchor.handles.pop(i)
                    break
            else:
                return False
            if not anchor.handles and key is not self._sentinel:
                del self._anchors[id(key)]
            return True

    def contains(self, key: Any | None, handle: CallbackHandle) -> bool:
        """Check whether handle is anchored under key."""
        return handle in self.handles(key)

    def handles(self, key: Any | None) -> list[CallbackHandle]:
        """
        Get a copy of the handles anchored under a key.

        Args:
            key: Capturing target, or None for the sentinel

        Returns:
            Handles in anchoring order (empty if key has no entry)
        """
        key = self._sentinel if key is None else key

        with self._lock:
            self._purge_pending()
            anchor = self._anchors.get(id(key))
            if anchor is None or anchor.key_ref() is not key:
                return []
            return list(anchor.handles)

    def snapshot(self) -> list[tuple[Any, list[CallbackHandle]]]:
        """
        Get every live key with a copy of its handles.

        The sentinel key is reported as None. Used by consistency checks.
        """
        with self._lock:
            self._purge_pending()
            anchors = self._anchors.copy()
            result = []
            for anchor in anchors.values():
                key = anchor.key_ref()
                if key is None or not anchor.handles:
                    continue
                result.append((None if key is self._sentinel else key, list(anchor.handles)))
            return result

    def clear(self) -> None:
        """Release every handle, keeping only the empty sentinel entry."""
        with self._lock:
            self._pending.clear()
            self._anchors.clear()
            self._anchors[id(self._sentinel)] = _Anchor(weakref.ref(self._sentinel))

    def _make_reclaim_callback(self, key_id: int) -> Callable[[weakref.ref[Any]], None]:
        # The callback must not keep the table alive through the key's weakref
        table_ref = weakref.ref(self)

        def reclaim(key_ref: weakref.ref[Any]) -> None:
            table = table_ref()
            if table is not None:
                table._reclaim(key_id, key_ref)

        return reclaim

    def _reclaim(self, key_id: int, key_ref: weakref.ref[Any]) -> None:
        """Release the anchor of a collected key, or queue it if the lock is busy."""
        if not self._lock.acquire(blocking=False):
            self._pending.append((key_id, key_ref))
            return
        try:
            self._drop(key_id, key_ref)
        finally:
            self._lock.release()

    def _purge_pending(self) -> None:
        """Apply queued releases. Caller must hold the lock."""
        while self._pending:
            key_id, key_ref = self._pending.pop()
            self._drop(key_id, key_ref)

    def _drop(self, key_id: int, key_ref: weakref.ref[Any]) -> None:
        anchor = self._anchors.get(key_id)
        # The id may already belong to a newer key
        if anchor is not None and anchor.key_ref is key_ref:
            del self._anchors[key_id]
            logger.debug(
                f"Released {len(anchor.handles)} handle(s) of a collected target",
                extra={"handle_count": len(anchor.handles)},
            )


__all__ = ["AnchorTable"]
