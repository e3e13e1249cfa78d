"""
IBC core fetch tasks: channels, connections and light clients.

Clients need a second round trip per client to learn their status. Those
lookups run sequentially inside the clients task; a failed lookup drops only
that client.
"""

from __future__ import annotations

from typing import List

from cosmos_exporter.domain.models import IBCChannelRecord, IBCClientRecord, IBCConnectionRecord
from cosmos_exporter.errors import QueryError
from cosmos_exporter.fetchers.abstract import AbstractFetchTask, TaskLogger
from cosmos_exporter.infrastructure.lcd_client import LcdClient


class IbcChannelsTask(AbstractFetchTask):
    name: str = "ibc_channels"
    description: str = "IBC channels"

    async def fetch(self, client: LcdClient, limit: int, log: TaskLogger) -> List[IBCChannelRecord]:
        return await client.ibc_channels(limit)


class IbcConnectionsTask(AbstractFetchTask):
    name: str = "ibc_connections"
    description: str = "IBC connections"

    async def fetch(
        self, client: LcdClient, limit: int, log: TaskLogger
    ) -> List[IBCConnectionRecord]:
        return await client.ibc_connections(limit)


class IbcClientsTask(AbstractFetchTask):
    name: str = "ibc_clients"
    description: str = "IBC clients"

    async def fetch(self, client: LcdClient, limit: int, log: TaskLogger) -> List[IBCClientRecord]:
        client_ids = await client.ibc_client_ids(limit)

        clients: List[IBCClientRecord] = []
        for client_id in client_ids:
            try:
                status = await client.ibc_client_status(client_id)
            except QueryError as exc:
                log.error(
                    "Could not get IBC client status",
                    extra={"client_id": client_id, "error": exc.reason},
                )
                continue
            clients.append(IBCClientRecord(client_id=client_id, status=status))
        return clients


__all__ = ["IbcChannelsTask", "IbcConnectionsTask", "IbcClientsTask"]
