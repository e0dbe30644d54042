"""FastAPI application setup for the ingester status service."""

from __future__ import annotations

import time
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from biosky_ingester.api.dependencies import get_app_settings, get_stats_store
from biosky_ingester.api.routes_dashboard import router as dashboard_router
from biosky_ingester.api.routes_status import router as status_router
from biosky_ingester.core.logging import configure_logging, get_logger
from biosky_ingester.core.metrics import REQUEST_COUNT, REQUEST_LATENCY, status_registry
from biosky_ingester.status.store import StatsStore

logger = get_logger(__name__)


def create_app(store: StatsStore | None = None) -> FastAPI:
    """Build the status service.

    With ``store`` the app is bound to it for its whole life; without one it
    serves the process-wide store from :func:`get_stats_store`.
    """
    get_store: Callable[[], StatsStore] = get_stats_store if store is None else (lambda: store)

    app = FastAPI(
        title="BioSky Ingester",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    if store is not None:
        app.dependency_overrides[get_stats_store] = get_store
    app.state.status_registry = status_registry(get_store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def record_request_metrics(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        route = request.scope.get("route")
        endpoint = getattr(route, "path", "unmatched")
        REQUEST_LATENCY.labels(endpoint=endpoint, method=request.method).observe(time.perf_counter() - started)
        REQUEST_COUNT.labels(endpoint=endpoint, method=request.method, status=str(response.status_code)).inc()
        return response

    app.include_router(status_router, prefix="", tags=["status"])
    app.include_router(dashboard_router, prefix="", tags=["dashboard"])

    @app.on_event("startup")
    async def startup() -> None:
        """Warm up core singletons on startup."""
        settings = get_app_settings()
        status = get_store().snapshot()
        logger.info(
            "Status service ready",
            extra={"ctx_started_at": status.started_at.isoformat(), "ctx_port": settings.http_port},
        )

    return app


configure_logging(get_app_settings().log_level, use_json=get_app_settings().log_json)

app = create_app()
