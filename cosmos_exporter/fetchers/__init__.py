"""
Fetch tasks package for the Cosmos validators exporter.

Re-exports the task interface and the six concrete tasks so the orchestrator
can import from `cosmos_exporter.fetchers` directly.
"""

from cosmos_exporter.fetchers.abstract import AbstractFetchTask, FetchTask, TaskLogger
from cosmos_exporter.fetchers.ibc import IbcChannelsTask, IbcClientsTask, IbcConnectionsTask
from cosmos_exporter.fetchers.slashing import SigningInfosTask
from cosmos_exporter.fetchers.staking import StakingParamsTask, ValidatorsTask

__all__ = [
    # Abstracts
    "AbstractFetchTask",
    "FetchTask",
    "TaskLogger",
    # Concrete tasks
    "IbcChannelsTask",
    "IbcClientsTask",
    "IbcConnectionsTask",
    "SigningInfosTask",
    "StakingParamsTask",
    "ValidatorsTask",
]
