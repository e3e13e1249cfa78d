"""
Structured logging utilities for the Cosmos validators exporter.

Centralizes logging configuration so the CLI, HTTP server, fetch tasks and
derivation share one format. Standard library logging with a human-readable
formatter by default and an optional JSON formatter for log shippers.

Every scrape binds a request id through `bind_request`, so all records emitted
while serving one request can be correlated.

Usage:
    from cosmos_exporter.utils.logging import bind_request, configure_logging

    configure_logging(level="INFO", json_logs=False)
    log = bind_request(get_logger(__name__))
    log.info("Finished querying validators", extra={"request_time": 0.12})
"""

from __future__ import annotations

import json
import logging
import logging.config
import uuid
from typing import Any, Dict, MutableMapping, Optional, Tuple

# Attributes every LogRecord carries; anything else was passed via `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as JSON string."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    for key, value in vars(record).items():
        if key not in _RESERVED_ATTRS and not key.startswith("_"):
            payload[key] = value
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    if hasattr(record, "extra") and isinstance(record.extra, dict):
        payload.update(record.extra)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


class RequestLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that stamps a request id on every record.

    Per-call `extra` is merged with the bound context instead of replacing it.
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def bind_request(
    logger: logging.Logger, request_id: Optional[str] = None
) -> RequestLoggerAdapter:
    """Return an adapter bound to `request_id` (a fresh UUID4 when omitted)."""
    return RequestLoggerAdapter(logger, {"request_id": request_id or str(uuid.uuid4())})


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    force: bool = True,
) -> None:
    """
    Configure root logging.

    Parameters
    ----------
    level : str
        Logging level name (e.g., "DEBUG", "INFO", "WARNING").
    json_logs : bool
        Whether to emit logs as JSON. If False, uses a concise human formatter.
    force : bool
        Whether to drop handlers configured by other libraries (uvicorn, httpx).
    """
    formatter_name = "json" if json_logs else "console"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": not force,
            "formatters": {
                "console": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "level": level.upper(),
                }
            },
            "root": {
                "handlers": ["default"],
                "level": level.upper(),
            },
            "loggers": {
                "httpx": {"level": "WARNING"},
                "httpcore": {"level": "WARNING"},
            },
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the given name. If name is None, returns the root logger.
    """
    return logging.getLogger(name)


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_request",
    "JsonFormatter",
    "RequestLoggerAdapter",
]
