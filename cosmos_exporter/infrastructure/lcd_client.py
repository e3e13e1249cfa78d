"""
Async client for the Cosmos SDK REST (LCD / gRPC-gateway) API.

Wraps a shared `httpx.AsyncClient` and turns every failure mode (transport
error, non-2xx status, undecodable JSON, unexpected payload shape) into a
`QueryError` naming the capability. The client never retries; the call-level
timeout is the one configured on the underlying httpx client.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, TypeVar
from urllib.parse import quote

import httpx

from cosmos_exporter.config import Settings, get_settings
from cosmos_exporter.domain.models import (
    IBCChannelRecord,
    IBCConnectionRecord,
    SigningInfoRecord,
    StakingParams,
    ValidatorRecord,
)
from cosmos_exporter.errors import QueryError
from cosmos_exporter.utils.logging import get_logger

T = TypeVar("T")

VALIDATORS_PATH = "/cosmos/staking/v1beta1/validators"
SIGNING_INFOS_PATH = "/cosmos/slashing/v1beta1/signing_infos"
STAKING_PARAMS_PATH = "/cosmos/staking/v1beta1/params"
IBC_CHANNELS_PATH = "/ibc/core/channel/v1/channels"
IBC_CONNECTIONS_PATH = "/ibc/core/connection/v1/connections"
IBC_CLIENT_STATES_PATH = "/ibc/core/client/v1/client_states"
IBC_CLIENT_STATUS_PATH = "/ibc/core/client/v1/client_status/{client_id}"

# Exceptions raised while mapping a decoded payload onto domain records.
# pydantic.ValidationError is a ValueError subclass.
_PAYLOAD_ERRORS = (KeyError, TypeError, ValueError, AttributeError)

_log = get_logger(__name__)


def create_http_client(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Build the shared connection handle for the configured node.

    Parameters
    ----------
    settings : Settings | None
        Defaults to the cached process settings.
    transport : httpx.AsyncBaseTransport | None
        Override for tests (e.g. `httpx.MockTransport`).
    """
    settings = settings or get_settings()
    return httpx.AsyncClient(
        base_url=settings.node_endpoint,
        timeout=settings.request_timeout_seconds,
        headers={"Accept": "application/json"},
        transport=transport,
    )


class LcdClient:
    """
    Typed query surface over the node's REST API.

    Each method maps to one upstream query and returns domain records or
    raises `QueryError`.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def _get(
        self, capability: str, path: str, params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        try:
            response = await self._http.get(path, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise QueryError(
                capability, f"HTTP {exc.response.status_code} from {exc.request.url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise QueryError(capability, f"{type(exc).__name__}: {exc}") from exc
        except ValueError as exc:
            raise QueryError(capability, f"invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise QueryError(capability, "expected a JSON object")
        return payload

    @staticmethod
    def _build(capability: str, factory: Callable[[], T]) -> T:
        try:
            return factory()
        except _PAYLOAD_ERRORS as exc:
            raise QueryError(capability, f"unexpected payload: {exc!r}") from exc

    @staticmethod
    def _build_each(
        capability: str, items: Any, factory: Callable[[Dict[str, Any]], T]
    ) -> List[T]:
        """
        Map a list of payload entries one at a time.

        A malformed entry is logged and skipped; only a payload that is not a
        list at all fails the capability.
        """
        if not isinstance(items, list):
            raise QueryError(capability, f"unexpected payload: expected a list, got {items!r}")
        records: List[T] = []
        for position, item in enumerate(items):
            try:
                records.append(factory(item))
            except _PAYLOAD_ERRORS as exc:
                _log.warning(
                    "Skipping malformed record",
                    extra={"capability": capability, "position": position, "error": repr(exc)},
                )
        return records

    @staticmethod
    def _page(limit: int) -> Dict[str, Any]:
        return {"pagination.limit": limit}

    async def validators(self, limit: int) -> List[ValidatorRecord]:
        payload = await self._get("validators", VALIDATORS_PATH, self._page(limit))
        return self._build_each(
            "validators", payload.get("validators"), ValidatorRecord.from_lcd
        )

    async def signing_infos(self, limit: int) -> List[SigningInfoRecord]:
        payload = await self._get("signing_infos", SIGNING_INFOS_PATH, self._page(limit))
        return self._build_each("signing_infos", payload.get("info"), SigningInfoRecord.from_lcd)

    async def staking_params(self) -> StakingParams:
        payload = await self._get("staking_params", STAKING_PARAMS_PATH)
        return self._build(
            "staking_params",
            lambda: StakingParams(max_validators=payload["params"]["max_validators"]),
        )

    async def ibc_channels(self, limit: int) -> List[IBCChannelRecord]:
        payload = await self._get("ibc_channels", IBC_CHANNELS_PATH, self._page(limit))
        return self._build(
            "ibc_channels",
            lambda: [IBCChannelRecord.from_lcd(item) for item in payload["channels"]],
        )

    async def ibc_connections(self, limit: int) -> List[IBCConnectionRecord]:
        payload = await self._get("ibc_connections", IBC_CONNECTIONS_PATH, self._page(limit))
        return self._build(
            "ibc_connections",
            lambda: [IBCConnectionRecord.from_lcd(item) for item in payload["connections"]],
        )

    async def ibc_client_ids(self, limit: int) -> List[str]:
        """List the ids of all IBC light clients (client states are not decoded)."""
        payload = await self._get("ibc_clients", IBC_CLIENT_STATES_PATH, self._page(limit))
        return self._build(
            "ibc_clients",
            lambda: [str(item["client_id"]) for item in payload["client_states"]],
        )

    async def ibc_client_status(self, client_id: str) -> str:
        path = IBC_CLIENT_STATUS_PATH.format(client_id=quote(client_id, safe=""))
        payload = await self._get("ibc_client_status", path)
        return self._build("ibc_client_status", lambda: str(payload["status"]))


__all__ = ["LcdClient", "create_http_client"]
