"""Test fixtures for the BioSky ingester status service."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("BIOSKY_CONFIG", raising=False)
    for key in ("BIOSKY_HTTP_HOST", "BIOSKY_HTTP_PORT", "BIOSKY_RECENT_EVENTS_CAPACITY", "BIOSKY_LOG_LEVEL", "BIOSKY_LOG_JSON"):
        monkeypatch.delenv(key, raising=False)

    from biosky_ingester.api import dependencies as deps
    from biosky_ingester.core.config import get_settings

    get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    deps._STORE = None
    yield
    get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    deps._STORE = None


@pytest.fixture
def store():
    from biosky_ingester.api.dependencies import set_stats_store
    from biosky_ingester.status.store import StatsStore

    fresh = StatsStore()
    set_stats_store(fresh)
    return fresh
