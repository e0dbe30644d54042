"""CLI entrypoint for the ingester status service."""

from __future__ import annotations

import json
import os
from typing import Optional

import requests
import typer

app = typer.Typer(name="biosky-status", help="BioSky ingester status command-line interface")

DEFAULT_HOST = "http://127.0.0.1:8080"


def _resolve_host(override: Optional[str]) -> str:
    if override:
        return override.rstrip('/')
    env_host = os.environ.get("BIOSKY_STATUS_HOST")
    if env_host:
        return env_host.rstrip('/')
    return DEFAULT_HOST


def _request(method: str, path: str, host: Optional[str] = None, **kwargs) -> requests.Response:
    base = _resolve_host(host)
    url = f"{base}{path}"
    try:
        resp = requests.request(method, url, timeout=10, **kwargs)
    except requests.RequestException as exc:
        typer.echo(f"Request failed: {exc}", err=True)
        raise typer.Exit(code=1)
    if not resp.ok:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text
        typer.echo(f"Request failed ({resp.status_code}): {detail}", err=True)
        raise typer.Exit(code=1)
    return resp


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port"),
) -> None:
    """Run the status service in the foreground with a fresh store."""
    from pydantic import ValidationError

    from biosky_ingester.api.dependencies import get_app_settings, get_stats_store
    from biosky_ingester.core.config import Settings
    from biosky_ingester.server import StatusServer

    settings = get_app_settings()
    overrides: dict[str, object] = {}
    if host is not None:
        overrides["http_host"] = host
    if port is not None:
        overrides["http_port"] = port
    try:
        settings = Settings.model_validate({**settings.model_dump(), **overrides})
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    StatusServer(get_stats_store(), settings).serve_forever()


@app.command()
def health(
    host: Optional[str] = typer.Option(None, "--host", help="Override status service URL"),
) -> None:
    """Print the liveness response."""
    resp = _request("GET", "/health", host=host)
    typer.echo(json.dumps(resp.json(), indent=2))


@app.command()
def stats(
    host: Optional[str] = typer.Option(None, "--host", help="Override status service URL"),
) -> None:
    """Print the full status snapshot."""
    resp = _request("GET", "/api/stats", host=host)
    typer.echo(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    app()
