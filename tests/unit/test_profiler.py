from __future__ import annotations

from time import sleep

import pytest

from cosmos_exporter.utils import profiler


def test_profile_block_measures_time():
    with profiler.profile_block("sleep") as stats:
        sleep(0.05)
    assert stats.label == "sleep"
    assert stats.duration_seconds >= 0.05
    assert stats.end_ts >= stats.start_ts


def test_profile_block_fills_stats_when_the_block_raises():
    with pytest.raises(RuntimeError):
        with profiler.profile_block("failing") as stats:
            raise RuntimeError("boom")
    assert stats.duration_seconds >= 0.0
    assert stats.end_ts > 0.0
