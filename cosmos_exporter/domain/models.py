"""
Domain models for the Cosmos validators exporter.

Typed, immutable records built from the node's REST responses. Amounts and
rates stay as the decimal text the chain serializes; conversion to float is
deferred to derivation so one malformed field cannot reject a whole record.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Annotated, Any, Dict, Optional, Tuple

from pydantic import BaseModel, BeforeValidator, Field

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}


def _decimal_text(value: Any) -> str:
    # Any JSON scalar is kept as text; whether it parses is decided per series.
    return "" if value is None else str(value)


DecimalText = Annotated[str, BeforeValidator(_decimal_text)]


class ValidatorStatus(IntEnum):
    """Bond status, numbered as in the staking module's protobuf enum."""

    UNSPECIFIED = 0
    UNBONDED = 1
    UNBONDING = 2
    BONDED = 3

    @classmethod
    def parse(cls, raw: Any) -> "ValidatorStatus":
        """
        Accept `BOND_STATUS_BONDED`, `BONDED` or the integer value.

        Statuses this release does not know map to UNSPECIFIED.
        """
        if isinstance(raw, int) and not isinstance(raw, bool):
            try:
                return cls(raw)
            except ValueError:
                return cls.UNSPECIFIED
        name = str(raw).upper()
        if name.startswith("BOND_STATUS_"):
            name = name[len("BOND_STATUS_") :]
        if name.isdigit():
            return cls.parse(int(name))
        return cls.__members__.get(name, cls.UNSPECIFIED)


class ConsensusPubKey(BaseModel):
    """Any-encoded consensus public key: protobuf type URL plus base64 key bytes."""

    type_url: str = Field(..., description="Protobuf type URL, e.g. /cosmos.crypto.ed25519.PubKey.")
    key: str = Field(..., description="Base64-encoded public key bytes.")

    model_config = _FROZEN


class ValidatorRecord(BaseModel):
    """
    One validator of the queried set.
    """

    operator_address: str = Field(..., description="Operator (valoper) address.")
    moniker: str = Field("", description="Human-readable validator name.")
    status: ValidatorStatus = Field(ValidatorStatus.UNSPECIFIED)
    jailed: bool = Field(False)
    commission_rate: DecimalText = Field("0", description="Commission rate as decimal text.")
    tokens: DecimalText = Field("0", description="Bonded tokens as decimal text.")
    delegator_shares: DecimalText = Field("0", description="Delegator shares as decimal text.")
    min_self_delegation: DecimalText = Field(
        "0", description="Minimum self delegation as decimal text."
    )
    consensus_pubkey: Optional[ConsensusPubKey] = Field(None)

    model_config = _FROZEN

    @classmethod
    def from_lcd(cls, payload: Dict[str, Any]) -> "ValidatorRecord":
        pubkey = payload.get("consensus_pubkey") or None
        rates = ((payload.get("commission") or {}).get("commission_rates")) or {}
        return cls(
            operator_address=payload["operator_address"],
            moniker=(payload.get("description") or {}).get("moniker", ""),
            status=ValidatorStatus.parse(payload.get("status", 0)),
            jailed=payload.get("jailed", False),
            commission_rate=rates.get("rate"),
            tokens=payload.get("tokens"),
            delegator_shares=payload.get("delegator_shares"),
            min_self_delegation=payload.get("min_self_delegation"),
            consensus_pubkey=(
                ConsensusPubKey(type_url=pubkey.get("@type", ""), key=pubkey.get("key", ""))
                if pubkey
                else None
            ),
        )


class SigningInfoRecord(BaseModel):
    """Liveness record of one validator, keyed by its consensus address."""

    address: str = Field(..., description="Bech32 consensus (valcons) address.")
    missed_blocks_counter: int = Field(0, ge=0)

    model_config = _FROZEN

    @classmethod
    def from_lcd(cls, payload: Dict[str, Any]) -> "SigningInfoRecord":
        return cls(
            address=payload["address"],
            missed_blocks_counter=payload.get("missed_blocks_counter", 0),
        )


class StakingParams(BaseModel):
    """Staking module parameters relevant to the active set."""

    max_validators: int = Field(0, ge=0)

    model_config = _FROZEN


class IBCChannelRecord(BaseModel):
    channel_id: str
    counterparty_channel_id: str = ""
    state: str

    model_config = _FROZEN

    @classmethod
    def from_lcd(cls, payload: Dict[str, Any]) -> "IBCChannelRecord":
        return cls(
            channel_id=payload["channel_id"],
            counterparty_channel_id=(payload.get("counterparty") or {}).get("channel_id", ""),
            state=payload["state"],
        )


class IBCConnectionRecord(BaseModel):
    connection_id: str
    client_id: str
    counterparty_client_id: str = ""
    counterparty_connection_id: str = ""
    state: str

    model_config = _FROZEN

    @classmethod
    def from_lcd(cls, payload: Dict[str, Any]) -> "IBCConnectionRecord":
        counterparty = payload.get("counterparty") or {}
        return cls(
            connection_id=payload["id"],
            client_id=payload["client_id"],
            counterparty_client_id=counterparty.get("client_id", ""),
            counterparty_connection_id=counterparty.get("connection_id", ""),
            state=payload["state"],
        )


class IBCClientRecord(BaseModel):
    """An IBC light client together with its looked-up status."""

    client_id: str
    status: str

    model_config = _FROZEN


class MetricSeries(BaseModel):
    """
    One sample of the snapshot: metric name, ordered labels and value.
    """

    name: str
    labels: Tuple[Tuple[str, str], ...] = ()
    value: float

    model_config = _FROZEN

    @property
    def label_dict(self) -> Dict[str, str]:
        return dict(self.labels)


__all__ = [
    "ValidatorStatus",
    "ConsensusPubKey",
    "ValidatorRecord",
    "SigningInfoRecord",
    "StakingParams",
    "IBCChannelRecord",
    "IBCConnectionRecord",
    "IBCClientRecord",
    "MetricSeries",
]
