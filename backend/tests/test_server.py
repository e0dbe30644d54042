"""Tests for the embedded status server wiring."""

from __future__ import annotations

from fastapi.testclient import TestClient

from biosky_ingester.core.config import Settings
from biosky_ingester.server import StatusServer
from biosky_ingester.status.store import StatsStore


def test_server_binds_to_settings_and_store() -> None:
    store = StatsStore()
    store.set_cursor(99)
    server = StatusServer(store, Settings(http_host="127.0.0.1", http_port=9123))
    uv = server.build_server()
    assert uv.config.host == "127.0.0.1"
    assert uv.config.port == 9123
    assert server.is_running is False

    with TestClient(uv.config.app) as client:
        assert client.get("/health").json()["cursor"] == 99


def test_stop_without_start_is_noop() -> None:
    server = StatusServer(StatsStore(), Settings())
    server.stop()
    assert server.is_running is False


def test_each_server_keeps_its_own_store() -> None:
    first = StatsStore()
    first.set_cursor(1)
    second = StatsStore()
    second.set_cursor(2)
    first_app = StatusServer(first, Settings()).build_server().config.app
    second_app = StatusServer(second, Settings()).build_server().config.app

    with TestClient(first_app) as client:
        assert client.get("/health").json()["cursor"] == 1
        assert client.get("/api/stats").json()["cursor"] == 1
        assert "biosky_ingester_cursor 1.0" in client.get("/metrics").text
    with TestClient(second_app) as client:
        assert client.get("/health").json()["cursor"] == 2
        assert "biosky_ingester_cursor 2.0" in client.get("/metrics").text


def test_bound_app_leaves_default_store_alone() -> None:
    from biosky_ingester.api.dependencies import get_stats_store
    from biosky_ingester.app import app as default_app

    bound = StatsStore()
    bound.set_cursor(77)
    StatusServer(bound, Settings()).build_server()
    assert get_stats_store() is not bound
    with TestClient(default_app) as client:
        assert client.get("/health").json()["cursor"] is None
