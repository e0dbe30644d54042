"""Thread-safe in-memory store for live ingester status."""

from __future__ import annotations

import threading
from collections import deque
from contextlib import contextmanager
from datetime import datetime
from functools import partial
from typing import Callable, Iterator

from biosky_ingester.core.errors import IngesterError
from biosky_ingester.core.logging import get_logger
from biosky_ingester.core.metrics import ERRORS_BY_KIND
from biosky_ingester.models.entities import (
    COUNTER_NAMES,
    CommitTiming,
    IngesterStats,
    IngesterStatus,
    RecentEvent,
)
from biosky_ingester.utils.time import ensure_utc, utc_now

logger = get_logger(__name__)

DEFAULT_RECENT_EVENTS = 10


class StatsStore:
    """Single source of truth for pipeline status.

    Writers mutate private fields under a lock and, when the outermost write
    finishes, publish a new frozen :class:`IngesterStatus`. Readers take the
    published reference without locking, so they never wait on writers or on
    each other. Log output produced by a write is deferred until the lock has
    been released.
    """

    def __init__(self, recent_capacity: int = DEFAULT_RECENT_EVENTS, started_at: datetime | None = None) -> None:
        if recent_capacity < 1:
            raise ValueError("recent_capacity must be at least 1")
        self._lock = threading.RLock()
        self._depth = 0
        self._deferred: list[Callable[[], None]] = []
        self._started_at = ensure_utc(started_at) if started_at is not None else utc_now()
        self._connected = False
        self._cursor: int | None = None
        self._counters: dict[str, int] = {name: 0 for name in COUNTER_NAMES}
        self._recent: deque[RecentEvent] = deque(maxlen=recent_capacity)
        self._last_processed: CommitTiming | None = None
        self._published = self._build_status()

    @property
    def started_at(self) -> datetime:
        return self._started_at

    @property
    def recent_capacity(self) -> int:
        return self._recent.maxlen or DEFAULT_RECENT_EVENTS

    @contextmanager
    def atomic(self) -> Iterator["StatsStore"]:
        """Group several mutations so snapshots see all of them or none."""
        with self._writing():
            yield self

    @contextmanager
    def _writing(self) -> Iterator[None]:
        pending: list[Callable[[], None]] = []
        try:
            with self._lock:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                    if self._depth == 0:
                        self._published = self._build_status()
                        pending, self._deferred = self._deferred, []
        finally:
            for emit in pending:
                emit()

    def _build_status(self) -> IngesterStatus:
        return IngesterStatus(
            connected=self._connected,
            cursor=self._cursor,
            started_at=self._started_at,
            stats=IngesterStats(**self._counters),
            recent_events=tuple(self._recent),
            last_processed=self._last_processed,
        )

    def set_connected(self, connected: bool) -> None:
        with self._writing():
            self._connected = bool(connected)

    def set_cursor(self, cursor: int) -> None:
        with self._writing():
            previous = self._cursor
            self._cursor = int(cursor)
            if previous is not None and cursor < previous:
                self._deferred.append(
                    partial(
                        logger.warning,
                        "Cursor moved backwards from %s to %s",
                        previous,
                        cursor,
                        extra={"ctx_previous_cursor": previous, "ctx_cursor": cursor},
                    )
                )

    def record_event(self, event: RecentEvent) -> None:
        """Insert at the front; the deque drops the oldest entry when full."""
        with self._writing():
            self._recent.appendleft(event)

    def increment(self, counter: str, amount: int = 1) -> None:
        if counter not in self._counters:
            raise ValueError(f"Unknown counter: {counter}")
        if amount < 0:
            raise ValueError("Counters can only be incremented")
        with self._writing():
            self._counters[counter] += amount

    def set_last_processed(self, timing: CommitTiming) -> None:
        with self._writing():
            self._last_processed = timing

    def record_error(self, error: IngesterError) -> None:
        """Count a classified pipeline failure and log it."""
        kind = error.kind.value
        with self._writing():
            self._counters["errors"] += 1
            self._deferred.append(ERRORS_BY_KIND.labels(kind=kind).inc)
            self._deferred.append(partial(logger.error, str(error), extra={"ctx_error_kind": kind}))

    def snapshot(self) -> IngesterStatus:
        return self._published


__all__ = ["StatsStore", "DEFAULT_RECENT_EVENTS"]
