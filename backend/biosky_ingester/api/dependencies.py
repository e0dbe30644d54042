"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from biosky_ingester.core.config import Settings, get_settings
from biosky_ingester.status.store import StatsStore

_STORE: StatsStore | None = None


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_stats_store() -> StatsStore:
    global _STORE
    if _STORE is None:
        _STORE = StatsStore(recent_capacity=get_app_settings().recent_events_capacity)
    return _STORE


def set_stats_store(store: StatsStore) -> None:
    """Install the store owned by the running pipeline."""
    global _STORE
    _STORE = store


__all__ = [
    "get_app_settings",
    "get_stats_store",
    "set_stats_store",
]
