"""Prometheus metrics instrumentation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterator

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily
from prometheus_client.registry import Collector

from biosky_ingester.utils.time import elapsed_seconds

if TYPE_CHECKING:  # pragma: no cover
    from biosky_ingester.status.store import StatsStore

REGISTRY = CollectorRegistry()

REQUEST_COUNT = Counter(
    "biosky_ingester_http_requests_total",
    "Total HTTP requests served by the status service",
    labelnames=("endpoint", "method", "status"),
    registry=REGISTRY,
)

REQUEST_LATENCY = Histogram(
    "biosky_ingester_http_request_latency_seconds",
    "Latency of status service HTTP requests",
    labelnames=("endpoint", "method"),
    registry=REGISTRY,
)

ERRORS_BY_KIND = Counter(
    "biosky_ingester_errors_by_kind_total",
    "Classified pipeline failures",
    labelnames=("kind",),
    registry=REGISTRY,
)


class StatusCollector(Collector):
    """Expose the live store snapshot at scrape time."""

    def __init__(self, get_store: Callable[[], "StatsStore"]) -> None:
        self._get_store = get_store

    def collect(self) -> Iterator[GaugeMetricFamily | CounterMetricFamily]:
        status = self._get_store().snapshot()
        yield GaugeMetricFamily(
            "biosky_ingester_connected",
            "1 when the upstream feed is connected",
            value=1 if status.connected else 0,
        )
        if status.cursor is not None:
            yield GaugeMetricFamily(
                "biosky_ingester_cursor",
                "Last seen feed cursor",
                value=status.cursor,
            )
        yield GaugeMetricFamily(
            "biosky_ingester_uptime_seconds",
            "Seconds since the ingester started",
            value=elapsed_seconds(status.started_at),
        )
        events = CounterMetricFamily(
            "biosky_ingester_events",
            "Records handled by the ingester",
            labels=("kind",),
        )
        events.add_metric(["occurrences"], status.stats.occurrences)
        events.add_metric(["identifications"], status.stats.identifications)
        events.add_metric(["errors"], status.stats.errors)
        yield events
        if status.last_processed is not None:
            yield GaugeMetricFamily(
                "biosky_ingester_last_processed_seq",
                "Sequence of the last fully processed record",
                value=status.last_processed.seq,
            )


def status_registry(get_store: Callable[[], "StatsStore"]) -> CollectorRegistry:
    """Registry exposing one store; each app gets its own."""
    registry = CollectorRegistry()
    registry.register(StatusCollector(get_store))
    return registry


def metrics_response(*registries: CollectorRegistry) -> Response:
    """Return process-wide metrics plus the given registries as an HTTP response."""
    payload = b"".join(generate_latest(registry) for registry in (REGISTRY, *registries))
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "ERRORS_BY_KIND",
    "StatusCollector",
    "status_registry",
    "metrics_response",
]
