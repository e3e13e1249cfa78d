"""
Timing utilities for the Cosmos validators exporter.

Wall-clock measurement of upstream queries and whole scrape requests, so log
records can carry a `request_time` in seconds.

Usage examples:
    from cosmos_exporter.utils.profiler import profile_block

    with profile_block("validators") as stats:
        await client.validators(limit)

    print(stats.duration_seconds)
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Generator


@dataclass
class ProfileStats:
    """
    Container for timing measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)


@contextlib.contextmanager
def profile_block(label: str) -> Generator[ProfileStats, None, None]:
    """
    Context manager measuring the wall-clock duration of a block.

    The stats are filled in on exit, including when the block raises, so a
    failed query still reports how long it took to fail.
    """
    stats = ProfileStats(label=label)
    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts


__all__ = ["ProfileStats", "profile_block"]
