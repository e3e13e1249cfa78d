"""
Slashing module fetch task: validator signing infos.
"""

from __future__ import annotations

from typing import List

from cosmos_exporter.domain.models import SigningInfoRecord
from cosmos_exporter.fetchers.abstract import AbstractFetchTask, TaskLogger
from cosmos_exporter.infrastructure.lcd_client import LcdClient


class SigningInfosTask(AbstractFetchTask):
    name: str = "signing_infos"
    description: str = "validators signing infos"

    async def fetch(
        self, client: LcdClient, limit: int, log: TaskLogger
    ) -> List[SigningInfoRecord]:
        return await client.signing_infos(limit)


__all__ = ["SigningInfosTask"]
