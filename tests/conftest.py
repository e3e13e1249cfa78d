"""
Pytest configuration for the Cosmos validators exporter.

Provides fixtures for:
- Settings with test-specific values (no environment or .env lookups)
- A fake node serving the two-validator reference scenario
"""

from __future__ import annotations

import pytest

from cosmos_exporter.config import Settings
from tests.fakes import BASE_URL, FakeNode, scenario_a_routes


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(
        node_endpoint=BASE_URL,
        query_limit=100,
        denom="uatom",
        denom_coefficient=1.0,
        bech32_prefix="cosmos",
        const_labels={},
        log_level="DEBUG",
        _env_file=None,
    )


@pytest.fixture
def fake_node() -> FakeNode:
    return FakeNode(scenario_a_routes())
