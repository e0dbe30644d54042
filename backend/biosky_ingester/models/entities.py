"""Internal dataclasses describing ingester status."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

COUNTER_NAMES = ("occurrences", "identifications", "errors")


@dataclass(slots=True, frozen=True)
class RecentEvent:
    time: datetime
    event_type: str
    action: str
    uri: str


@dataclass(slots=True, frozen=True)
class CommitTiming:
    """Sequence and timestamp of the last fully processed upstream record."""

    seq: int
    time: datetime


@dataclass(slots=True, frozen=True)
class IngesterStats:
    occurrences: int = 0
    identifications: int = 0
    errors: int = 0


@dataclass(slots=True, frozen=True)
class IngesterStatus:
    """Point-in-time copy of the store, safe to hand to any reader."""

    connected: bool
    cursor: int | None
    started_at: datetime
    stats: IngesterStats
    recent_events: tuple[RecentEvent, ...] = field(default_factory=tuple)
    last_processed: CommitTiming | None = None


__all__ = [
    "COUNTER_NAMES",
    "RecentEvent",
    "CommitTiming",
    "IngesterStats",
    "IngesterStatus",
]
