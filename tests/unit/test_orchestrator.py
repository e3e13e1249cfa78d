from __future__ import annotations

import asyncio
import logging
from typing import Any, List

import pytest

from cosmos_exporter import orchestrator
from cosmos_exporter.errors import QueryError
from cosmos_exporter.orchestrator import FetchResults, collect_snapshot, default_tasks, fetch_all
from tests.fakes import FakeNode, scenario_a_routes

CLIENT_STATUS = "/ibc/core/client/v1/client_status/{}"


class _GatedTask:
    """Task that only finishes once every sibling has started."""

    def __init__(self, name: str, started: List[str], gate: asyncio.Event, expected: int) -> None:
        self.name = name
        self.description = name
        self._started = started
        self._gate = gate
        self._expected = expected

    async def fetch(self, client: Any, limit: int, log: Any) -> Any:
        self._started.append(self.name)
        if len(self._started) == self._expected:
            self._gate.set()
        await asyncio.wait_for(self._gate.wait(), timeout=1)
        if self.name == "staking_params":
            raise QueryError(self.name, "boom")
        return [self.name]


@pytest.mark.asyncio
async def test_fetch_all_runs_tasks_concurrently_and_joins_all():
    names = [task.name for task in default_tasks()]
    started: List[str] = []
    gate = asyncio.Event()
    tasks = [_GatedTask(name, started, gate, len(names)) for name in names]

    results = await fetch_all(client=None, limit=1, tasks=tasks)  # type: ignore[arg-type]

    assert sorted(started) == sorted(names)
    assert results.staking_params is None
    assert results.validators == ["validators"]
    assert results.ibc_clients == ["ibc_clients"]
    assert results.failed == ["staking_params"]


def test_default_tasks_cover_every_result_slot():
    assert sorted(task.name for task in default_tasks()) == sorted(vars(FetchResults()).keys())


@pytest.mark.asyncio
async def test_fetch_all_against_healthy_node(fake_node: FakeNode, test_settings):
    async with fake_node.client() as client:
        results = await fetch_all(client, test_settings.query_limit)

    assert results.failed == []
    assert len(results.validators) == 2
    assert [(c.client_id, c.status) for c in results.ibc_clients] == [
        ("07-tendermint-0", "Active"),
        ("07-tendermint-1", "Expired"),
    ]


@pytest.mark.asyncio
async def test_failed_fetch_is_logged_with_capability(caplog, test_settings):
    routes = scenario_a_routes()
    routes["/cosmos/slashing/v1beta1/signing_infos"] = 500
    node = FakeNode(routes)

    with caplog.at_level(logging.ERROR, logger=orchestrator.__name__):
        async with node.client() as client:
            results = await fetch_all(client, test_settings.query_limit)

    assert results.signing_infos is None
    assert results.validators is not None
    (record,) = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert record.capability == "signing_infos"
    assert "500" in record.error


@pytest.mark.asyncio
async def test_scenario_staking_params_failure_only_drops_active_set(test_settings):
    routes = scenario_a_routes()
    routes["/cosmos/staking/v1beta1/params"] = 500
    node = FakeNode(routes)

    async with node.client() as client:
        snapshot = await collect_snapshot(client, test_settings)

    assert snapshot.find("cosmos_validators_active") == []
    assert snapshot.value("cosmos_validators_rank", address="cosmosvaloper1first") == 1
    assert snapshot.value("cosmos_validators_missed_blocks", address="cosmosvaloper1second") == 7
    assert len(snapshot.find("cosmos_ibc_channels")) == 1


@pytest.mark.asyncio
async def test_scenario_client_status_failure_drops_only_that_client(test_settings):
    routes = scenario_a_routes()
    routes[CLIENT_STATUS.format("07-tendermint-0")] = 500
    node = FakeNode(routes)

    async with node.client() as client:
        snapshot = await collect_snapshot(client, test_settings)

    clients = snapshot.find("cosmos_ibc_clients")
    assert [c.label_dict["client_id"] for c in clients] == ["07-tendermint-1"]
    assert len(snapshot.find("cosmos_ibc_channels")) == 1
    assert len(snapshot.find("cosmos_ibc_connections")) == 1


@pytest.mark.asyncio
async def test_full_snapshot_for_reference_scenario(fake_node: FakeNode, test_settings):
    async with fake_node.client() as client:
        snapshot = await collect_snapshot(client, test_settings)

    first, second = "cosmosvaloper1first", "cosmosvaloper1second"
    assert snapshot.value("cosmos_validators_rank", address=first) == 1
    assert snapshot.value("cosmos_validators_missed_blocks", address=first) == 3
    assert snapshot.value("cosmos_validators_active", address=first) == 1
    assert snapshot.value("cosmos_validators_rank", address=second) == 2
    assert snapshot.value("cosmos_validators_missed_blocks", address=second) == 7
    assert snapshot.value("cosmos_validators_active", address=second) == 0
    assert snapshot.value("cosmos_ibc_connections", state="STATE_OPEN") == 1


@pytest.mark.asyncio
async def test_every_fetch_failing_still_yields_a_snapshot(test_settings):
    node = FakeNode({})

    async with node.client() as client:
        snapshot = await collect_snapshot(client, test_settings)

    assert len(snapshot) == 0
    assert snapshot.encode() == b""


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("field", "raw", "tokens", "status"),
    [
        ("tokens", None, None, 3),
        ("tokens", 50, 50, 3),
        ("status", "BOND_STATUS_FROZEN", 50, 0),
    ],
)
async def test_odd_validator_field_leaves_the_rest_of_the_set(
    test_settings, field, raw, tokens, status
):
    routes = scenario_a_routes()
    routes["/cosmos/staking/v1beta1/validators"]["validators"][0][field] = raw
    node = FakeNode(routes)

    async with node.client() as client:
        snapshot = await collect_snapshot(client, test_settings)

    first, second = "cosmosvaloper1first", "cosmosvaloper1second"
    assert snapshot.value("cosmos_validators_rank", address=first) == 1
    assert snapshot.value("cosmos_validators_missed_blocks", address=first) == 3
    assert snapshot.value("cosmos_validators_rank", address=second) == 2
    assert snapshot.value("cosmos_validators_tokens", address=second) == tokens
    assert snapshot.value("cosmos_validators_status", address=second) == status
    assert snapshot.value("cosmos_validators_delegator_shares", address=second) == 50


@pytest.mark.asyncio
async def test_malformed_validator_record_drops_only_that_validator(caplog, test_settings):
    routes = scenario_a_routes()
    routes["/cosmos/staking/v1beta1/validators"]["validators"].append({"moniker": "no address"})
    node = FakeNode(routes)

    with caplog.at_level(logging.WARNING):
        async with node.client() as client:
            snapshot = await collect_snapshot(client, test_settings)

    assert snapshot.value("cosmos_validators_rank", address="cosmosvaloper1first") == 1
    assert snapshot.value("cosmos_validators_rank", address="cosmosvaloper1second") == 2
    assert len(snapshot.find("cosmos_validators_rank")) == 2
    (record,) = [r for r in caplog.records if r.getMessage() == "Skipping malformed record"]
    assert record.capability == "validators"
    assert record.position == 2


@pytest.mark.asyncio
async def test_finished_task_log_carries_capability_and_timing(
    caplog, fake_node: FakeNode, test_settings
):
    with caplog.at_level(logging.DEBUG, logger=orchestrator.__name__):
        async with fake_node.client() as client:
            await fetch_all(client, test_settings.query_limit)

    finished = [r for r in caplog.records if r.getMessage().startswith("Finished querying")]
    assert sorted(r.capability for r in finished) == sorted(t.name for t in default_tasks())
    assert all(r.request_time >= 0 for r in finished)
