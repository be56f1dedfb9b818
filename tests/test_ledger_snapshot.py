from __future__ import annotations

from typing import List

import httpx
import pytest

from conftest import api_error, ok
from application.ledger_snapshot import OUTPUT_COLUMNS, REFERENCED_COLUMNS, LedgerSnapshotService
from domain.config import ClientConfig
from domain.errors import HTTPErrorKind, NodeHTTPError
from infrastructure.http_client import NodeAPIClient


def test_node_summary(make_client, node_info_payload):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/info"):
            return ok(node_info_payload)
        if request.url.path.endswith("/tips"):
            return ok({"tip1": "01" * 32, "tip2": "02" * 32})
        return api_error(404, "no such route")

    summary = LedgerSnapshotService(client=make_client(handler)).node_summary()

    assert summary["name"] == "HORNET"
    assert summary["network"] == "alphanet1"
    assert summary["milestone_lag"] == 2
    assert summary["features"] == ["PoW", "Faucet"]
    assert summary["tips"] == ["01" * 32, "02" * 32]


def test_referenced_status_df_rows_follow_input(make_client):
    hashes = [b"\x0a" * 32, b"\x0b" * 32]

    def handler(request: httpx.Request) -> httpx.Response:
        return ok(
            [
                {"isReferencedByMilestone": True, "milestoneIndex": 12, "milestoneTimestamp": 1000},
                {"isReferencedByMilestone": False},
            ]
        )

    df = LedgerSnapshotService(client=make_client(handler)).referenced_status_df(hashes)

    assert list(df.columns) == REFERENCED_COLUMNS
    assert df["hash"].tolist() == [h.hex() for h in hashes]
    assert df["is_referenced_by_milestone"].tolist() == [True, False]
    assert df["milestone_index"].tolist() == [12, 0]


def test_referenced_status_df_for_transactions(make_client):
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return ok([{"isReferencedByMilestone": True, "milestoneIndex": 1, "milestoneTimestamp": 2}])

    service = LedgerSnapshotService(client=make_client(handler))
    df = service.referenced_status_df(["ee" * 32], transactions=True)

    assert paths[0].endswith("/transaction-messages/is-confirmed")
    assert len(df) == 1


def test_referenced_status_df_rejects_misaligned_response(make_client):
    client = make_client(lambda request: ok([{"isReferencedByMilestone": True}]))

    with pytest.raises(ValueError):
        LedgerSnapshotService(client=client).referenced_status_df([b"\x01" * 32, b"\x02" * 32])


def test_empty_inputs_skip_the_node(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    service = LedgerSnapshotService(client=make_client(handler))

    assert service.referenced_status_df([]).empty
    assert list(service.outputs_df([]).columns) == OUTPUT_COLUMNS


def test_outputs_df(make_client):
    utxo_id = b"\x05" * 34

    client = make_client(lambda request: ok([{"address": "aa" * 32, "amount": 42, "spent": True}]))
    df = LedgerSnapshotService(client=client).outputs_df([utxo_id])

    assert df.to_dict("records") == [
        {"output_id": utxo_id.hex(), "address": "aa" * 32, "amount": 42, "spent": True}
    ]


def test_node_errors_surface_through_service(make_client):
    client = make_client(lambda request: api_error(401, "missing token"))

    with pytest.raises(NodeHTTPError) as excinfo:
        LedgerSnapshotService(client=client).node_summary()

    assert excinfo.value.kind is HTTPErrorKind.UNAUTHORIZED


def test_client_from_config_uses_config_values():
    cfg = ClientConfig(base_url="http://node.test", timeout=2.5, headers={"X-Api-Key": "k"})

    with NodeAPIClient.from_config(cfg) as client:
        assert client.base_url == "http://node.test"
        assert client.http_client.timeout.read == 2.5
        assert client.http_client.headers["X-Api-Key"] == "k"

    assert client.http_client.is_closed
