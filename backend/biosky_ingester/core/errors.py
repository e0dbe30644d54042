"""Error taxonomy for the ingestion pipeline."""

from __future__ import annotations

from enum import Enum


class IngesterErrorKind(str, Enum):
    """Classification of pipeline failures, used for logs and metric labels."""

    WEBSOCKET = "websocket"
    DATABASE = "database"
    CBOR_DECODE = "cbor_decode"
    INVALID_FRAME = "invalid_frame"
    CONNECTION_CLOSED = "connection_closed"
    MAX_RECONNECT_ATTEMPTS = "max_reconnect_attempts"
    CONFIG = "config"
    PARSE = "parse"


class IngesterError(Exception):
    """Base class for classified pipeline failures."""

    kind: IngesterErrorKind
    template = "{detail}"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(self.template.format(detail=detail))

    @property
    def message(self) -> str:
        return str(self)


class TransportError(IngesterError):
    kind = IngesterErrorKind.WEBSOCKET
    template = "WebSocket error: {detail}"


class DatabaseError(IngesterError):
    kind = IngesterErrorKind.DATABASE
    template = "Database error: {detail}"


class DecodeError(IngesterError):
    kind = IngesterErrorKind.CBOR_DECODE
    template = "CBOR decode error: {detail}"


class InvalidFrameError(IngesterError):
    kind = IngesterErrorKind.INVALID_FRAME
    template = "Invalid frame: {detail}"


class ConnectionClosedError(IngesterError):
    kind = IngesterErrorKind.CONNECTION_CLOSED
    template = "Connection closed"


class MaxReconnectAttemptsError(IngesterError):
    kind = IngesterErrorKind.MAX_RECONNECT_ATTEMPTS
    template = "Max reconnection attempts reached"


class ConfigError(IngesterError):
    kind = IngesterErrorKind.CONFIG
    template = "Configuration error: {detail}"


class ParseError(IngesterError):
    kind = IngesterErrorKind.PARSE
    template = "Parse error: {detail}"


__all__ = [
    "IngesterErrorKind",
    "IngesterError",
    "TransportError",
    "DatabaseError",
    "DecodeError",
    "InvalidFrameError",
    "ConnectionClosedError",
    "MaxReconnectAttemptsError",
    "ConfigError",
    "ParseError",
]
