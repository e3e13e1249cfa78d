from __future__ import annotations

import pytest
from pydantic import ValidationError

from cosmos_exporter.domain.models import (
    IBCChannelRecord,
    IBCConnectionRecord,
    SigningInfoRecord,
    ValidatorRecord,
    ValidatorStatus,
)
from tests.fakes import pubkey_b64, scenario_a_routes, signing_info_payload, validator_payload


def test_validator_record_from_lcd_payload():
    payload = validator_payload(
        "cosmosvaloper1abc",
        "1500.250000000000000000",
        seed=9,
        moniker="Stake Co",
        status="BOND_STATUS_UNBONDING",
        jailed=True,
        tokens="1500",
    )

    record = ValidatorRecord.from_lcd(payload)

    assert record.operator_address == "cosmosvaloper1abc"
    assert record.moniker == "Stake Co"
    assert record.status is ValidatorStatus.UNBONDING
    assert record.jailed is True
    assert record.commission_rate == "0.050000000000000000"
    assert record.tokens == "1500"
    assert record.delegator_shares == "1500.250000000000000000"
    assert record.min_self_delegation == "1"
    assert record.consensus_pubkey is not None
    assert record.consensus_pubkey.key == pubkey_b64(9)


def test_validator_record_tolerates_missing_pubkey():
    payload = validator_payload("cosmosvaloper1abc", "1", seed=1)
    payload["consensus_pubkey"] = None

    assert ValidatorRecord.from_lcd(payload).consensus_pubkey is None


def test_validator_record_is_frozen():
    record = ValidatorRecord.from_lcd(validator_payload("cosmosvaloper1abc", "1", seed=1))
    with pytest.raises(ValidationError):
        record.jailed = True


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("BOND_STATUS_BONDED", ValidatorStatus.BONDED),
        ("BOND_STATUS_UNBONDED", ValidatorStatus.UNBONDED),
        ("unbonding", ValidatorStatus.UNBONDING),
        (3, ValidatorStatus.BONDED),
        ("2", ValidatorStatus.UNBONDING),
        ("BOND_STATUS_UNSPECIFIED", ValidatorStatus.UNSPECIFIED),
    ],
)
def test_validator_status_parse(raw, expected):
    assert ValidatorStatus.parse(raw) is expected


def test_validator_status_maps_unknown_values_to_unspecified():
    assert ValidatorStatus.parse("BOND_STATUS_SLASHED") is ValidatorStatus.UNSPECIFIED
    assert ValidatorStatus.parse(7) is ValidatorStatus.UNSPECIFIED


def test_validator_record_keeps_non_string_amounts_as_text():
    payload = validator_payload("cosmosvaloper1abc", "1", seed=1)
    payload["tokens"] = 1500
    payload["min_self_delegation"] = None
    del payload["commission"]

    record = ValidatorRecord.from_lcd(payload)

    assert record.tokens == "1500"
    assert record.min_self_delegation == ""
    assert record.commission_rate == ""
    assert record.delegator_shares == "1"


def test_signing_info_coerces_counter_text():
    info = SigningInfoRecord.from_lcd(signing_info_payload("cosmosvalcons1xyz", 42))
    assert info.missed_blocks_counter == 42


def test_ibc_records_from_lcd_payloads():
    routes = scenario_a_routes()
    channel = IBCChannelRecord.from_lcd(routes["/ibc/core/channel/v1/channels"]["channels"][0])
    connection = IBCConnectionRecord.from_lcd(
        routes["/ibc/core/connection/v1/connections"]["connections"][0]
    )

    assert (channel.channel_id, channel.counterparty_channel_id, channel.state) == (
        "channel-0",
        "channel-141",
        "STATE_OPEN",
    )
    assert connection.connection_id == "connection-0"
    assert connection.client_id == "07-tendermint-0"
    assert connection.counterparty_client_id == "07-tendermint-259"
    assert connection.counterparty_connection_id == "connection-257"
    assert connection.state == "STATE_OPEN"
