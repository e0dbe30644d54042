"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from biosky_ingester.core.config import Settings
from biosky_ingester.core.errors import ConfigError


def test_defaults_without_any_file() -> None:
    settings = Settings.load()
    assert settings.http_host == "0.0.0.0"
    assert settings.http_port == 8080
    assert settings.recent_events_capacity == 10
    assert settings.log_level == "INFO"
    assert settings.log_json is True


def test_user_default_file_is_picked_up(tmp_path: Path) -> None:
    config = tmp_path / ".config" / "biosky-ingester" / "config.yaml"
    config.parent.mkdir(parents=True)
    config.write_text("http:\n  port: 9300\n")
    assert Settings.load().http_port == 9300


def test_yaml_sections_and_env_overlay(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "config.yaml"
    config.write_text(
        "http:\n  host: 127.0.0.1\n  port: 9100\nstatus:\n  recent_events: 25\nlogging:\n  level: debug\n  json: false\n"
    )
    monkeypatch.setenv("BIOSKY_HTTP_PORT", "9200")
    settings = Settings.load(config)
    assert settings.http_host == "127.0.0.1"
    assert settings.http_port == 9200
    assert settings.recent_events_capacity == 25
    assert settings.log_level == "DEBUG"
    assert settings.log_json is False


def test_config_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "status.yaml"
    config.write_text("status:\n  recent_events: 3\n")
    monkeypatch.setenv("BIOSKY_CONFIG", str(config))
    assert Settings.load().recent_events_capacity == 3


def test_missing_explicit_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="config file not found"):
        Settings.load(tmp_path / "absent.yaml")


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("http:\n  prot: 9100\nmetrics:\n  enabled: true\n")
    with pytest.raises(ConfigError) as excinfo:
        Settings.load(config)
    assert "http.prot" in str(excinfo.value)
    assert "metrics" in str(excinfo.value)


def test_flat_top_level_keys_are_rejected(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("http_port: 9100\n")
    with pytest.raises(ConfigError):
        Settings.load(config)


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("")
    assert Settings.load(config).http_port == 8080


def test_invalid_port_raises_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIOSKY_HTTP_PORT", "70000")
    with pytest.raises(ConfigError):
        Settings.load()


def test_blank_env_value_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIOSKY_HTTP_PORT", "")
    assert Settings.load().http_port == 8080


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("http: [unterminated\n")
    with pytest.raises(ConfigError):
        Settings.load(config)


def test_store_capacity_follows_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    from biosky_ingester.api.dependencies import get_stats_store

    monkeypatch.setenv("BIOSKY_RECENT_EVENTS_CAPACITY", "4")
    assert get_stats_store().recent_capacity == 4
