"""
Catalog of the metric families the exporter emits.

The catalog order is the exposition order; label keys are listed without the
constant labels, which are prepended at assembly time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class MetricSpec:
    name: str
    help: str
    label_keys: Tuple[str, ...]


VALIDATOR_LABELS = ("address", "moniker")
VALIDATOR_DENOM_LABELS = ("address", "moniker", "denom")

COMMISSION = MetricSpec(
    "cosmos_validators_commission",
    "Commission of the Cosmos-based blockchain validator",
    VALIDATOR_LABELS,
)
STATUS = MetricSpec(
    "cosmos_validators_status",
    "Status of the Cosmos-based blockchain validator",
    VALIDATOR_LABELS,
)
JAILED = MetricSpec(
    "cosmos_validators_jailed",
    "Jailed status of the Cosmos-based blockchain validator",
    VALIDATOR_LABELS,
)
TOKENS = MetricSpec(
    "cosmos_validators_tokens",
    "Tokens of the Cosmos-based blockchain validator",
    VALIDATOR_DENOM_LABELS,
)
DELEGATOR_SHARES = MetricSpec(
    "cosmos_validators_delegator_shares",
    "Delegator shares of the Cosmos-based blockchain validator",
    VALIDATOR_DENOM_LABELS,
)
MIN_SELF_DELEGATION = MetricSpec(
    "cosmos_validators_min_self_delegation",
    "Self declared minimum self delegation shares of the Cosmos-based blockchain validator",
    VALIDATOR_DENOM_LABELS,
)
MISSED_BLOCKS = MetricSpec(
    "cosmos_validators_missed_blocks",
    "Missed blocks of the Cosmos-based blockchain validator",
    VALIDATOR_LABELS,
)
RANK = MetricSpec(
    "cosmos_validators_rank",
    "Rank of the Cosmos-based blockchain validator",
    VALIDATOR_LABELS,
)
ACTIVE = MetricSpec(
    "cosmos_validators_active",
    "1 if the Cosmos-based blockchain validator is in active set, 0 if no",
    VALIDATOR_LABELS,
)
IBC_CHANNELS = MetricSpec(
    "cosmos_ibc_channels",
    "IBC channels opened by the validator",
    ("channel_id", "counterparty_channel_id", "status"),
)
IBC_CONNECTIONS = MetricSpec(
    "cosmos_ibc_connections",
    "IBC connections opened by the validator",
    ("connection_id", "client_id", "counterparty_client_id", "counterparty_connection_id", "state"),
)
IBC_CLIENTS = MetricSpec(
    "cosmos_ibc_clients",
    "IBC clients created by the validator",
    ("client_id", "status"),
)

CATALOG: Tuple[MetricSpec, ...] = (
    COMMISSION,
    STATUS,
    JAILED,
    TOKENS,
    DELEGATOR_SHARES,
    MIN_SELF_DELEGATION,
    MISSED_BLOCKS,
    RANK,
    ACTIVE,
    IBC_CHANNELS,
    IBC_CONNECTIONS,
    IBC_CLIENTS,
)


__all__ = ["MetricSpec", "CATALOG"]
