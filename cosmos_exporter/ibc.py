"""
IBC state mappers.

Each channel, connection and client becomes one presence series (value 1)
labelled by its identifiers and state. These passes are independent of the
validator data and of each other.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from cosmos_exporter import metrics
from cosmos_exporter.domain.models import (
    IBCChannelRecord,
    IBCClientRecord,
    IBCConnectionRecord,
    MetricSeries,
)


def map_channels(channels: Optional[Iterable[IBCChannelRecord]]) -> List[MetricSeries]:
    return [
        MetricSeries(
            name=metrics.IBC_CHANNELS.name,
            labels=(
                ("channel_id", channel.channel_id),
                ("counterparty_channel_id", channel.counterparty_channel_id),
                ("status", channel.state),
            ),
            value=1.0,
        )
        for channel in channels or ()
    ]


def map_connections(
    connections: Optional[Iterable[IBCConnectionRecord]],
) -> List[MetricSeries]:
    return [
        MetricSeries(
            name=metrics.IBC_CONNECTIONS.name,
            labels=(
                ("connection_id", connection.connection_id),
                ("client_id", connection.client_id),
                ("counterparty_client_id", connection.counterparty_client_id),
                ("counterparty_connection_id", connection.counterparty_connection_id),
                ("state", connection.state),
            ),
            value=1.0,
        )
        for connection in connections or ()
    ]


def map_clients(clients: Optional[Iterable[IBCClientRecord]]) -> List[MetricSeries]:
    return [
        MetricSeries(
            name=metrics.IBC_CLIENTS.name,
            labels=(("client_id", client.client_id), ("status", client.status)),
            value=1.0,
        )
        for client in clients or ()
    ]


__all__ = ["map_channels", "map_connections", "map_clients"]
