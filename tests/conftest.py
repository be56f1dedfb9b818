"""Shared fixtures: a node API client wired to an in-process mock node."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from infrastructure.http_client import NodeAPIClient


BASE_URL = "http://node.test:14265/api/v1"

Handler = Callable[[httpx.Request], httpx.Response]


def ok(data: object, status: int = 200) -> httpx.Response:
    return httpx.Response(status, json={"data": data})


def api_error(status: int, message: str, code: int | None = None) -> httpx.Response:
    return httpx.Response(
        status, json={"error": {"code": status if code is None else code, "message": message}}
    )


@pytest.fixture
def make_client() -> Callable[[Handler], NodeAPIClient]:
    """Return a factory building a client whose transport calls `handler`."""

    def _make(handler: Handler) -> NodeAPIClient:
        transport = httpx.MockTransport(handler)
        return NodeAPIClient(base_url=BASE_URL, http_client=httpx.Client(transport=transport))

    return _make


@pytest.fixture
def node_info_payload() -> dict:
    return {
        "name": "HORNET",
        "version": "0.6.0-alpha",
        "isHealthy": True,
        "operatingNetwork": "alphanet1",
        "peers": 4,
        "coordinatorAddress": "a" * 64,
        "isSynced": True,
        "latestMilestoneHash": "b" * 64,
        "latestMilestoneIndex": 1337,
        "latestSolidMilestoneHash": "c" * 64,
        "latestSolidMilestoneIndex": 1335,
        "pruningIndex": 10,
        "time": 1601000000,
        "features": ["PoW", "Faucet"],
    }
