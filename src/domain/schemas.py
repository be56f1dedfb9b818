from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class NodeSchema(BaseModel):
    """
    Base for node API records.

    The node speaks camelCase JSON; fields are snake_case in Python and
    can be populated either way.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessEnvelope(NodeSchema, Generic[T]):
    """`{"data": <T>}` wrapper used for 200/201 responses."""

    data: T


class ErrorBody(NodeSchema):
    code: int = 0
    message: str = ""


class ErrorEnvelope(NodeSchema):
    """`{"error": {"code": ..., "message": ...}}` wrapper for every other status."""

    # Missing keys decode to empty values; only non-JSON or non-object
    # bodies fail.
    error: ErrorBody = Field(default_factory=ErrorBody)


class NodeInfo(NodeSchema):
    """
    Response of `GET /info`.
    """

    # Name and semver version of the node software.
    name: str
    version: str
    is_healthy: bool
    # The network in which the node operates.
    operating_network: str = ""
    # Currently connected peers.
    peers: int = 0
    coordinator_address: str = ""
    is_synced: bool = False
    latest_milestone_hash: str = ""
    latest_milestone_index: int = Field(default=0, ge=0)
    latest_solid_milestone_hash: str = ""
    latest_solid_milestone_index: int = Field(default=0, ge=0)
    # Milestone index at which the last pruning commenced.
    pruning_index: int = Field(default=0, ge=0)
    # Current time from the point of view of the node.
    time: int = Field(default=0, ge=0)
    features: List[str] = Field(default_factory=list)


class Tips(NodeSchema):
    """Hex encoded hashes of the two tip messages returned by `GET /tips`."""

    tip1: str
    tip2: str


class ReferencedStatus(NodeSchema):
    """
    Whether a message or transaction is referenced by a milestone.

    `milestone_index` and `milestone_timestamp` are only meaningful when
    `is_referenced_by_milestone` is true.
    """

    is_referenced_by_milestone: bool
    milestone_index: int = Field(default=0, ge=0)
    milestone_timestamp: int = Field(default=0, ge=0)


class Output(NodeSchema):
    """A UTXO as returned by `GET /outputs/by-hash`."""

    # Address to which this output deposits.
    address: str
    amount: int = Field(ge=0)
    spent: bool


class Message(NodeSchema):
    """
    JSON representation of a message as served by the node.

    Only the envelope fields are typed; the payload stays raw JSON and any
    additional keys a node sends are preserved.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    version: int
    parent1: str
    parent2: str
    payload: Optional[Dict[str, Any]] = None
    nonce: int = 0


_MESSAGES_ADAPTER = TypeAdapter(List[Message])


def to_messages(raw: Any) -> List[Message]:
    """
    Convert the raw JSON message list returned by the node into `Message`
    objects, keeping the order in which they were decoded.
    """
    if raw is None:
        return []
    return _MESSAGES_ADAPTER.validate_python(raw)
