"""Adapter the ingestion pipeline uses to push status updates."""

from __future__ import annotations

from datetime import datetime

from biosky_ingester.core.errors import IngesterError
from biosky_ingester.models.entities import CommitTiming, RecentEvent
from biosky_ingester.status.store import StatsStore
from biosky_ingester.utils.time import ensure_utc, utc_now


class StatusReporter:
    """Translate pipeline callbacks into store mutations."""

    def __init__(self, store: StatsStore) -> None:
        self.store = store

    def connected(self) -> None:
        self.store.set_connected(True)

    def disconnected(self) -> None:
        self.store.set_connected(False)

    def cursor(self, seq: int) -> None:
        self.store.set_cursor(seq)

    def occurrence(self, event_type: str, action: str, uri: str, time: datetime | None = None) -> None:
        self._record("occurrences", event_type, action, uri, time)

    def identification(self, event_type: str, action: str, uri: str, time: datetime | None = None) -> None:
        self._record("identifications", event_type, action, uri, time)

    def committed(self, seq: int, time: datetime) -> None:
        """Mark ``seq`` as fully processed and advance the cursor with it."""
        with self.store.atomic():
            self.store.set_last_processed(CommitTiming(seq=seq, time=ensure_utc(time)))
            self.store.set_cursor(seq)

    def failed(self, error: IngesterError) -> None:
        self.store.record_error(error)

    def _record(self, counter: str, event_type: str, action: str, uri: str, time: datetime | None) -> None:
        event = RecentEvent(
            time=ensure_utc(time) if time is not None else utc_now(),
            event_type=event_type,
            action=action,
            uri=uri,
        )
        with self.store.atomic():
            self.store.record_event(event)
            self.store.increment(counter)


__all__ = ["StatusReporter"]
