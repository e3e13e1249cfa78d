from __future__ import annotations

import asyncio
import sys
from typing import Optional

import typer
import uvicorn

from cosmos_exporter.config import Settings, get_settings
from cosmos_exporter.infrastructure.lcd_client import LcdClient, create_http_client
from cosmos_exporter.orchestrator import collect_snapshot
from cosmos_exporter.reporter import print_snapshot
from cosmos_exporter.server import create_app
from cosmos_exporter.snapshot import Snapshot
from cosmos_exporter.utils.logging import configure_logging

app = typer.Typer(help="Prometheus exporter for Cosmos SDK validator sets.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"node={settings.node_endpoint} limit={settings.query_limit} "
        f"timeout={settings.request_timeout_seconds}s | "
        f"denom={settings.denom} coefficient={settings.denom_coefficient} "
        f"prefix={settings.bech32_prefix} | "
        f"listen={settings.listen_host}:{settings.listen_port}"
    )


@app.command()
def serve(
    host: Optional[str] = typer.Option(
        None, "--host", help="Listen address (default from settings)."
    ),
    port: Optional[int] = typer.Option(
        None, "--port", "-p", help="Listen port (default from settings)."
    ),
) -> None:
    """
    Serve /metrics over HTTP.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    uvicorn.run(
        create_app(settings),
        host=host or settings.listen_host,
        port=port or settings.listen_port,
        log_config=None,
    )


async def _snapshot_once(settings: Settings) -> Snapshot:
    async with create_http_client(settings) as http:
        return await collect_snapshot(LcdClient(http), settings)


@app.command()
def snapshot(
    table: bool = typer.Option(
        False, "--table", "-t", help="Render as a table instead of exposition text."
    ),
) -> None:
    """
    Collect one snapshot and print it.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    result = asyncio.run(_snapshot_once(settings))
    if table:
        print_snapshot(result)
    else:
        typer.echo(result.encode().decode("utf-8"), nl=False)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
