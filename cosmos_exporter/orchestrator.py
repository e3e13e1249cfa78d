"""
Per-scrape orchestration: concurrent fetch, join, derivation and assembly.

Usage (example from the HTTP handler):
    from cosmos_exporter.orchestrator import collect_snapshot

    snapshot = await collect_snapshot(LcdClient(http), settings)
    body = snapshot.encode()

One call spawns one task per upstream capability inside an
`asyncio.TaskGroup` and waits for all of them. A failed capability is logged
and leaves its slot empty; it never cancels the other tasks and never fails
the scrape.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

from cosmos_exporter.config import Settings, get_settings
from cosmos_exporter.derive import derive_validator_series
from cosmos_exporter.domain.models import (
    IBCChannelRecord,
    IBCClientRecord,
    IBCConnectionRecord,
    SigningInfoRecord,
    StakingParams,
    ValidatorRecord,
)
from cosmos_exporter.errors import QueryError
from cosmos_exporter.fetchers import (
    FetchTask,
    IbcChannelsTask,
    IbcClientsTask,
    IbcConnectionsTask,
    SigningInfosTask,
    StakingParamsTask,
    ValidatorsTask,
)
from cosmos_exporter.ibc import map_channels, map_clients, map_connections
from cosmos_exporter.infrastructure.lcd_client import LcdClient
from cosmos_exporter.snapshot import Snapshot
from cosmos_exporter.utils.logging import bind_request, get_logger
from cosmos_exporter.utils.profiler import profile_block

log = get_logger(__name__)

Logger = Union[logging.Logger, logging.LoggerAdapter]


@dataclass(frozen=True)
class FetchResults:
    """
    Joined fetch results, one slot per capability.

    A slot is None when its fetch failed.
    """

    validators: Optional[List[ValidatorRecord]] = None
    signing_infos: Optional[List[SigningInfoRecord]] = None
    staking_params: Optional[StakingParams] = None
    ibc_channels: Optional[List[IBCChannelRecord]] = None
    ibc_connections: Optional[List[IBCConnectionRecord]] = None
    ibc_clients: Optional[List[IBCClientRecord]] = None

    @property
    def failed(self) -> List[str]:
        return [name for name, value in vars(self).items() if value is None]


def default_tasks() -> Sequence[FetchTask]:
    """Registry of the capabilities fetched on every scrape."""
    return (
        ValidatorsTask(),
        SigningInfosTask(),
        StakingParamsTask(),
        IbcChannelsTask(),
        IbcConnectionsTask(),
        IbcClientsTask(),
    )


async def _run_task(task: FetchTask, client: LcdClient, limit: int, task_log: Logger) -> Any:
    task_log.debug(f"Started querying {task.description}", extra={"capability": task.name})
    with profile_block(task.name) as stats:
        try:
            result = await task.fetch(client, limit, task_log)
        except QueryError as exc:
            task_log.error(
                f"Could not get {task.description}",
                extra={"capability": task.name, "error": exc.reason},
            )
            return None

    task_log.debug(
        f"Finished querying {task.description}",
        extra={"capability": stats.label, "request_time": stats.duration_seconds},
    )
    return result


async def fetch_all(
    client: LcdClient,
    limit: int,
    tasks: Optional[Sequence[FetchTask]] = None,
    request_log: Optional[Logger] = None,
) -> FetchResults:
    """
    Run every fetch task concurrently and wait for all of them.

    Parameters
    ----------
    client : LcdClient
        Query client shared by the tasks.
    limit : int
        Page-size limit passed to list queries.
    tasks : sequence[FetchTask] | None
        Defaults to `default_tasks()`; task names must be FetchResults fields.
    request_log : Logger | None
        Request-bound logger.

    Returns
    -------
    FetchResults
        One slot per task; failed capabilities are None.
    """
    task_log = request_log or log
    tasks = default_tasks() if tasks is None else tasks

    async with asyncio.TaskGroup() as group:
        running = {
            task.name: group.create_task(_run_task(task, client, limit, task_log))
            for task in tasks
        }

    return FetchResults(**{name: handle.result() for name, handle in running.items()})


def assemble_snapshot(
    results: FetchResults, settings: Settings, request_log: Optional[Logger] = None
) -> Snapshot:
    """Derive every series from joined fetch results and wrap them in a Snapshot."""
    series = derive_validator_series(
        results.validators,
        results.signing_infos,
        results.staking_params,
        denom=settings.denom,
        denom_coefficient=settings.denom_coefficient,
        bech32_prefix=settings.bech32_prefix,
        log=request_log or log,
    )
    series.extend(map_channels(results.ibc_channels))
    series.extend(map_connections(results.ibc_connections))
    series.extend(map_clients(results.ibc_clients))
    return Snapshot(series, const_labels=settings.const_labels)


async def collect_snapshot(
    client: LcdClient,
    settings: Optional[Settings] = None,
    request_log: Optional[Logger] = None,
) -> Snapshot:
    """
    Run the whole scrape pipeline once and return its snapshot.

    Never raises for upstream or parsing failures; the snapshot simply lacks
    the series those failures made underivable.
    """
    settings = settings or get_settings()
    request_log = request_log or bind_request(log)

    results = await fetch_all(client, settings.query_limit, request_log=request_log)
    if results.failed:
        request_log.warning(
            "Serving partial snapshot", extra={"failed_capabilities": results.failed}
        )
    return assemble_snapshot(results, settings, request_log)


__all__ = [
    "FetchResults",
    "assemble_snapshot",
    "collect_snapshot",
    "default_tasks",
    "fetch_all",
]
