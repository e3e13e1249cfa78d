"""
Staking module fetch tasks: the validator set and the staking parameters.
"""

from __future__ import annotations

from typing import List

from cosmos_exporter.domain.models import StakingParams, ValidatorRecord
from cosmos_exporter.fetchers.abstract import AbstractFetchTask, TaskLogger
from cosmos_exporter.infrastructure.lcd_client import LcdClient


class ValidatorsTask(AbstractFetchTask):
    name: str = "validators"
    description: str = "validators"

    async def fetch(self, client: LcdClient, limit: int, log: TaskLogger) -> List[ValidatorRecord]:
        return await client.validators(limit)


class StakingParamsTask(AbstractFetchTask):
    name: str = "staking_params"
    description: str = "staking params"

    async def fetch(self, client: LcdClient, limit: int, log: TaskLogger) -> StakingParams:
        return await client.staking_params()


__all__ = ["ValidatorsTask", "StakingParamsTask"]
