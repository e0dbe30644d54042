"""Run the status service next to the ingestion loop."""

from __future__ import annotations

import threading

import uvicorn

from biosky_ingester.app import create_app
from biosky_ingester.core.config import Settings
from biosky_ingester.core.logging import get_logger
from biosky_ingester.status.store import StatsStore

logger = get_logger(__name__)


class StatusServer:
    """uvicorn server on a daemon thread, bound to one :class:`StatsStore`."""

    def __init__(self, store: StatsStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def build_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            create_app(self.store),
            host=self.settings.http_host,
            port=self.settings.http_port,
            log_config=None,
            access_log=False,
        )
        return uvicorn.Server(config)

    def start(self) -> None:
        if self.is_running:
            return
        self._server = self.build_server()
        self._thread = threading.Thread(target=self._server.run, name="status-server", daemon=True)
        self._thread.start()
        logger.info("Starting HTTP server on %s:%s", self.settings.http_host, self.settings.http_port)

    def stop(self, timeout: float = 5.0) -> None:
        if self._server is None or self._thread is None:
            return
        self._server.should_exit = True
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning("Status server did not stop within %.1fs", timeout)
        self._server = None
        self._thread = None

    def serve_forever(self) -> None:
        """Run in the calling thread until interrupted."""
        logger.info("Starting HTTP server on %s:%s", self.settings.http_host, self.settings.http_port)
        self.build_server().run()


__all__ = ["StatusServer"]
