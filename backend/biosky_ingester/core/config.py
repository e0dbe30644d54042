"""Application configuration handling.

Settings come from an optional YAML file with ``http``, ``status`` and
``logging`` sections, overlaid with ``BIOSKY_*`` environment variables.
Unknown sections or keys are rejected so a typo cannot silently leave the
service on its defaults.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from biosky_ingester.core.errors import ConfigError

ENV_PREFIX = "BIOSKY_"
DEFAULT_CONFIG_PATH = Path("~/.config/biosky-ingester/config.yaml")

SECTIONS: Mapping[str, Mapping[str, str]] = {
    "http": {"host": "http_host", "port": "http_port"},
    "status": {"recent_events": "recent_events_capacity"},
    "logging": {"level": "log_level", "json": "log_json"},
}


class Settings(BaseModel):
    """Runtime configuration for the status service."""

    http_host: str = "0.0.0.0"
    http_port: int = Field(default=8080, ge=1, le=65535)
    recent_events_capacity: int = Field(default=10, ge=1)
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {
        "validate_assignment": True,
        "extra": "forbid",
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            return value.strip().upper()
        raise TypeError("log_level must be a level name or number")

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Build settings from file and environment, raising ConfigError on bad input."""
        data: dict[str, Any] = {}
        config_path = _config_path(path)
        if config_path is not None:
            data.update(_section_values(_read_yaml(config_path), config_path))
        data.update(_env_values())
        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def _config_path(path: Path | None) -> Path | None:
    """Explicit paths must exist; the per-user default is optional."""
    explicit = path if path is not None else os.environ.get(f"{ENV_PREFIX}CONFIG")
    if explicit:
        resolved = Path(explicit).expanduser()
        if not resolved.is_file():
            raise ConfigError(f"config file not found: {resolved}")
        return resolved
    default = DEFAULT_CONFIG_PATH.expanduser()
    return default if default.is_file() else None


def _read_yaml(path: Path) -> Mapping[str, Any]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{path} must contain a mapping")
    return raw


def _section_values(raw: Mapping[str, Any], path: Path) -> dict[str, Any]:
    values: dict[str, Any] = {}
    unknown: list[str] = []
    for section, body in raw.items():
        fields = SECTIONS.get(section)
        if fields is None:
            unknown.append(str(section))
            continue
        if not isinstance(body, Mapping):
            raise ConfigError(f"section '{section}' in {path} must be a mapping")
        for key, value in body.items():
            if key in fields:
                values[fields[key]] = value
            else:
                unknown.append(f"{section}.{key}")
    if unknown:
        raise ConfigError(f"unknown keys in {path}: {', '.join(sorted(unknown))}")
    return values


def _env_values() -> dict[str, Any]:
    """BIOSKY_HTTP_PORT style variables; CONFIG and STATUS_HOST belong to other readers."""
    values: dict[str, Any] = {}
    for name in Settings.model_fields:
        raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip() != "":
            values[name] = raw.strip()
    return values


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings accessor for dependency injection."""
    return Settings.load()


__all__ = ["Settings", "SECTIONS", "get_settings"]
