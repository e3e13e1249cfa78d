"""
Validator join and derivation.

Turns the (possibly partial) validator, signing-info and staking-params fetch
results into validator series. Every step degrades by omission: a malformed
decimal drops one series, a missing signing info drops missed blocks, absent
params drop the active-set series. Nothing here raises.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from cosmos_exporter import metrics
from cosmos_exporter.domain.keys import consensus_address
from cosmos_exporter.domain.models import (
    MetricSeries,
    SigningInfoRecord,
    StakingParams,
    ValidatorRecord,
    ValidatorStatus,
)
from cosmos_exporter.errors import ConsensusAddressError, DecimalConversionError
from cosmos_exporter.utils.decimals import parse_decimal, to_float
from cosmos_exporter.utils.logging import get_logger

Logger = Union[logging.Logger, logging.LoggerAdapter]

_module_log = get_logger(__name__)


def _shares_key(validator: ValidatorRecord) -> Tuple[int, Decimal]:
    try:
        return (1, parse_decimal(validator.delegator_shares))
    except DecimalConversionError:
        return (0, Decimal(0))


def rank_validators(validators: Iterable[ValidatorRecord]) -> List[ValidatorRecord]:
    """
    Order validators by descending delegator shares.

    The sort is stable: equal shares keep fetch order. Validators whose shares
    cannot be parsed go last, also in fetch order.
    """
    return sorted(validators, key=_shares_key, reverse=True)


def index_signing_infos(
    signing_infos: Optional[Iterable[SigningInfoRecord]],
) -> Dict[str, SigningInfoRecord]:
    """Map consensus address to signing info; the first record per address wins."""
    index: Dict[str, SigningInfoRecord] = {}
    for info in signing_infos or ():
        index.setdefault(info.address, info)
    return index


def derive_validator_series(
    validators: Optional[Sequence[ValidatorRecord]],
    signing_infos: Optional[Sequence[SigningInfoRecord]],
    staking_params: Optional[StakingParams],
    *,
    denom: str,
    denom_coefficient: float,
    bech32_prefix: str,
    log: Optional[Logger] = None,
) -> List[MetricSeries]:
    """
    Correlate validators with signing infos and emit their series.

    Parameters
    ----------
    validators : sequence | None
        Validator fetch result; None when the fetch failed.
    signing_infos : sequence | None
        Signing-info fetch result; None when the fetch failed.
    staking_params : StakingParams | None
        Staking params fetch result; None when the fetch failed.
    denom : str
        Display denomination put in the `denom` label.
    denom_coefficient : float
        Divisor applied to token, share and self-delegation amounts.
    bech32_prefix : str
        Account prefix of the chain (`cosmos` gives `cosmosvalcons1...`).
    log : Logger | None
        Request-bound logger.

    Returns
    -------
    list[MetricSeries]
        Series grouped per validator, validators in rank order.
    """
    log = log or _module_log
    if not validators:
        return []

    ranked = rank_validators(validators)
    infos = index_signing_infos(signing_infos)
    max_validators = staking_params.max_validators if staking_params is not None else 0

    log.debug(
        "Validators info",
        extra={"validators_length": len(ranked), "signing_length": len(infos)},
    )

    series: List[MetricSeries] = []
    for position, validator in enumerate(ranked):
        rank = position + 1
        labels = (("address", validator.operator_address), ("moniker", validator.moniker))
        denom_labels = labels + (("denom", denom),)

        amounts = (
            (metrics.COMMISSION, validator.commission_rate, 1, labels, "commission"),
            (metrics.TOKENS, validator.tokens, denom_coefficient, denom_labels, "tokens"),
            (
                metrics.DELEGATOR_SHARES,
                validator.delegator_shares,
                denom_coefficient,
                denom_labels,
                "delegator shares",
            ),
            (
                metrics.MIN_SELF_DELEGATION,
                validator.min_self_delegation,
                denom_coefficient,
                denom_labels,
                "min self delegation",
            ),
        )
        for spec, text, coefficient, spec_labels, field in amounts:
            try:
                value = to_float(text, coefficient)
            except DecimalConversionError as exc:
                log.error(
                    f"Could not parse validator {field}",
                    extra={"address": validator.operator_address, "error": str(exc)},
                )
                continue
            series.append(_series(spec, spec_labels, value))

        series.append(_series(metrics.JAILED, labels, float(validator.jailed)))
        series.append(_series(metrics.STATUS, labels, float(validator.status)))

        signing_info = _match_signing_info(validator, infos, bech32_prefix, log)
        if signing_info is not None:
            if validator.status == ValidatorStatus.BONDED:
                series.append(
                    _series(metrics.MISSED_BLOCKS, labels, signing_info.missed_blocks_counter)
                )
            else:
                log.debug(
                    "Validator is not active, not returning missed blocks amount",
                    extra={"address": validator.operator_address},
                )

        series.append(_series(metrics.RANK, labels, rank))

        if max_validators > 0:
            series.append(_series(metrics.ACTIVE, labels, 1 if rank <= max_validators else 0))

    return series


def _series(
    spec: metrics.MetricSpec, labels: Tuple[Tuple[str, str], ...], value: float
) -> MetricSeries:
    return MetricSeries(name=spec.name, labels=labels, value=value)


def _match_signing_info(
    validator: ValidatorRecord,
    infos: Dict[str, SigningInfoRecord],
    bech32_prefix: str,
    log: Logger,
) -> Optional[SigningInfoRecord]:
    try:
        address = consensus_address(validator.consensus_pubkey, bech32_prefix)
    except ConsensusAddressError as exc:
        log.error(
            "Could not get validator consensus address",
            extra={"address": validator.operator_address, "error": str(exc)},
        )
        return None

    signing_info = infos.get(address)
    if signing_info is None:
        log.debug(
            "Could not get signing info for validator",
            extra={"address": validator.operator_address, "consensus_address": address},
        )
    return signing_info


__all__ = ["rank_validators", "index_signing_infos", "derive_validator_series"]
