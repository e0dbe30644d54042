"""Status API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from biosky_ingester.api.dependencies import get_stats_store
from biosky_ingester.core.metrics import metrics_response
from biosky_ingester.models.dto import HealthResponse, StatsResponse
from biosky_ingester.status.store import StatsStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
def health(store: StatsStore = Depends(get_stats_store)) -> HealthResponse:
    # Reports ok while disconnected: a reconnecting ingester is still alive.
    status = store.snapshot()
    return HealthResponse(connected=status.connected, cursor=status.cursor)


@router.get("/api/stats", response_model=StatsResponse, summary="Current ingester status")
def stats(store: StatsStore = Depends(get_stats_store)) -> StatsResponse:
    return StatsResponse.from_status(store.snapshot())


@router.get("/metrics", summary="Prometheus metrics")
def get_metrics(request: Request):
    return metrics_response(request.app.state.status_registry)


__all__ = ["router"]
