"""Pydantic DTOs exposed via API.

Field aliases carry the wire names; internal attribute names follow the
dataclasses in :mod:`biosky_ingester.models.entities`.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from biosky_ingester.models.entities import CommitTiming, IngesterStatus, RecentEvent
from biosky_ingester.utils.time import elapsed_seconds, to_rfc3339


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    connected: bool
    cursor: int | None


class CountersResponse(BaseModel):
    occurrences: int
    identifications: int
    errors: int


class RecentEventResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    time: str
    event_type: str = Field(alias="type")
    action: str
    uri: str

    @classmethod
    def from_entity(cls, event: RecentEvent) -> "RecentEventResponse":
        return cls(time=to_rfc3339(event.time), event_type=event.event_type, action=event.action, uri=event.uri)


class LastProcessedResponse(BaseModel):
    seq: int
    time: str

    @classmethod
    def from_entity(cls, timing: CommitTiming) -> "LastProcessedResponse":
        return cls(seq=timing.seq, time=to_rfc3339(timing.time))


class StatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    connected: bool
    cursor: int | None
    uptime: int = Field(description="Whole seconds since the ingester started")
    stats: CountersResponse
    recent_events: list[RecentEventResponse] = Field(alias="recentEvents")
    last_processed: LastProcessedResponse | None = Field(alias="lastProcessed")

    @classmethod
    def from_status(cls, status: IngesterStatus) -> "StatsResponse":
        last = status.last_processed
        return cls(
            connected=status.connected,
            cursor=status.cursor,
            uptime=elapsed_seconds(status.started_at),
            stats=CountersResponse(
                occurrences=status.stats.occurrences,
                identifications=status.stats.identifications,
                errors=status.stats.errors,
            ),
            recent_events=[RecentEventResponse.from_entity(event) for event in status.recent_events],
            last_processed=LastProcessedResponse.from_entity(last) if last is not None else None,
        )


__all__ = [
    "HealthResponse",
    "CountersResponse",
    "RecentEventResponse",
    "LastProcessedResponse",
    "StatsResponse",
]
