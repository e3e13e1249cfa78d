"""
HTTP surface of the exporter.

`create_app` builds a FastAPI application whose lifespan owns the shared
httpx connection handle. `GET /metrics` runs the scrape pipeline and always
answers 200 with whatever could be collected.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from fastapi import FastAPI, Request, Response

from cosmos_exporter import __version__
from cosmos_exporter.config import Settings, get_settings
from cosmos_exporter.infrastructure.lcd_client import LcdClient, create_http_client
from cosmos_exporter.orchestrator import collect_snapshot
from cosmos_exporter.snapshot import CONTENT_TYPE_LATEST
from cosmos_exporter.utils.logging import bind_request, get_logger
from cosmos_exporter.utils.profiler import profile_block

log = get_logger(__name__)

METRICS_PATH = "/metrics"


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the exporter application.

    Parameters
    ----------
    settings : Settings | None
        Defaults to the cached process settings.
    transport : httpx.AsyncBaseTransport | None
        Upstream transport override, used by tests.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with create_http_client(settings, transport=transport) as http:
            app.state.lcd = LcdClient(http)
            log.info("Exporter ready", extra={"node_endpoint": settings.node_endpoint})
            yield

    app = FastAPI(title="Cosmos validators exporter", version=__version__, lifespan=lifespan)

    @app.get("/healthz")
    def healthz() -> dict:
        return {"ok": True}

    @app.get(METRICS_PATH)
    async def validators_metrics(request: Request) -> Response:
        request_log = bind_request(log)
        with profile_block("scrape") as stats:
            snapshot = await collect_snapshot(request.app.state.lcd, settings, request_log)
            body = snapshot.encode()

        request_log.info(
            "Request processed",
            extra={
                "method": "GET",
                "endpoint": METRICS_PATH,
                "series": len(snapshot),
                "request_time": stats.duration_seconds,
            },
        )
        return Response(content=body, media_type=CONTENT_TYPE_LATEST)

    return app


__all__ = ["create_app", "METRICS_PATH"]
