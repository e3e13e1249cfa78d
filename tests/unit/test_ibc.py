from __future__ import annotations

from cosmos_exporter.domain.models import IBCChannelRecord, IBCClientRecord, IBCConnectionRecord
from cosmos_exporter.ibc import map_channels, map_clients, map_connections


def test_channels_become_presence_series():
    series = map_channels(
        [
            IBCChannelRecord(
                channel_id="channel-0", counterparty_channel_id="channel-9", state="STATE_OPEN"
            ),
            IBCChannelRecord(channel_id="channel-1", state="STATE_CLOSED"),
        ]
    )

    assert [s.value for s in series] == [1.0, 1.0]
    assert series[0].name == "cosmos_ibc_channels"
    assert series[0].label_dict == {
        "channel_id": "channel-0",
        "counterparty_channel_id": "channel-9",
        "status": "STATE_OPEN",
    }
    assert series[1].label_dict["counterparty_channel_id"] == ""


def test_connections_carry_both_sides():
    (series,) = map_connections(
        [
            IBCConnectionRecord(
                connection_id="connection-0",
                client_id="07-tendermint-0",
                counterparty_client_id="07-tendermint-5",
                counterparty_connection_id="connection-3",
                state="STATE_INIT",
            )
        ]
    )

    assert series.name == "cosmos_ibc_connections"
    assert [key for key, _ in series.labels] == [
        "connection_id",
        "client_id",
        "counterparty_client_id",
        "counterparty_connection_id",
        "state",
    ]
    assert series.label_dict["state"] == "STATE_INIT"


def test_clients_labelled_by_status():
    (series,) = map_clients([IBCClientRecord(client_id="07-tendermint-0", status="Frozen")])

    assert series.name == "cosmos_ibc_clients"
    assert series.label_dict == {"client_id": "07-tendermint-0", "status": "Frozen"}


def test_failed_fetches_map_to_nothing():
    assert map_channels(None) == []
    assert map_connections(None) == []
    assert map_clients(None) == []
