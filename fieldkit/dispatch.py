# # Change dispatcher: debounces edits per field into ordered, de-duplicated store commits.

from __future__ import annotations

import dataclasses
import heapq
import itertools
import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from .fields import FieldValue, copy_value
from .store import DocumentStore

log = logging.getLogger(__name__)

CommitListener = Callable[[str, FieldValue], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    # # asyncio event loops satisfy this as-is
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class _LogicalHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class LogicalTimer:
    """Manually advanced clock implementing the Scheduler protocol."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, _LogicalHandle, Callable[..., Any], Tuple[Any, ...]]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> _LogicalHandle:
        handle = _LogicalHandle()
        heapq.heappush(self._queue, (self.now + max(0.0, delay), next(self._seq), handle, callback, args))
        return handle

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due callbacks in order. Returns how many fired."""
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, handle, callback, args = heapq.heappop(self._queue)
            self.now = when
            if handle.cancelled:
                continue
            callback(*args)
            fired += 1
        self.now = target
        return fired

    def pending(self) -> int:
        return sum(1 for entry in self._queue if not entry[2].cancelled)


@dataclasses.dataclass
class _Window:
    value: FieldValue
    handle: TimerHandle


_UNSET = object()


class ChangeDispatcher:
    """
    Coalesces edit events into at most one commit per debounce window per field.

    - last write wins inside a window; a new edit restarts the window
    - a window whose value equals the last committed value commits nothing
    - per-field commits reach the store in edit order
    """

    def __init__(self, store: DocumentStore, scheduler: Scheduler, debounce_seconds: float = 0.5):
        self.store = store
        self.scheduler = scheduler
        self.debounce_seconds = debounce_seconds
        self._pending: Dict[str, _Window] = {}
        self._committed: Dict[str, Any] = {}
        self._listeners: List[CommitListener] = []

    def add_listener(self, listener: CommitListener) -> None:
        self._listeners.append(listener)

    def track(self, path: str, committed_value: FieldValue) -> None:
        self._committed[path] = copy_value(committed_value)

    def last_committed(self, path: str) -> FieldValue:
        return copy_value(self._committed.get(path))

    def enqueue(self, path: str, value: FieldValue) -> None:
        self.cancel(path)
        handle = self.scheduler.call_later(self.debounce_seconds, self._on_window_closed, path)
        self._pending[path] = _Window(value=copy_value(value), handle=handle)

    def cancel(self, path: str) -> bool:
        window = self._pending.pop(path, None)
        if window is None:
            return False
        window.handle.cancel()
        return True

    def pending(self) -> List[str]:
        return list(self._pending.keys())

    def flush(self, path: Optional[str] = None) -> int:
        """Commit open windows now instead of waiting for them to expire."""
        paths = [path] if path is not None else list(self._pending.keys())
        committed = 0
        for p in paths:
            window = self._pending.pop(p, None)
            if window is None:
                continue
            window.handle.cancel()
            if self._commit(p, window.value):
                committed += 1
        return committed

    def _on_window_closed(self, path: str) -> None:
        window = self._pending.pop(path, None)
        if window is None:
            return
        self._commit(path, window.value)

    def _commit(self, path: str, value: FieldValue) -> bool:
        if self._committed.get(path, _UNSET) == value:
            log.debug("Skipping no-op commit for %s", path)
            return False
        self.store.commit_value(path, value)
        self._committed[path] = copy_value(value)
        log.debug("Committed %s", path)
        for listener in self._listeners:
            listener(path, copy_value(value))
        return True

    def close(self) -> None:
        for path in list(self._pending.keys()):
            self.cancel(path)
