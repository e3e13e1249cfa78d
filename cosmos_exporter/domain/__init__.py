"""
Domain package for the Cosmos validators exporter.

Exports the records built from upstream query results and the consensus
address derivation used to correlate them.
"""

from cosmos_exporter.domain.keys import consensus_address
from cosmos_exporter.domain.models import (
    ConsensusPubKey,
    IBCChannelRecord,
    IBCClientRecord,
    IBCConnectionRecord,
    MetricSeries,
    SigningInfoRecord,
    StakingParams,
    ValidatorRecord,
    ValidatorStatus,
)

__all__ = [
    "ConsensusPubKey",
    "IBCChannelRecord",
    "IBCClientRecord",
    "IBCConnectionRecord",
    "MetricSeries",
    "SigningInfoRecord",
    "StakingParams",
    "ValidatorRecord",
    "ValidatorStatus",
    "consensus_address",
]
