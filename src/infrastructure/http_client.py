from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from domain.config import ClientConfig
from domain.errors import (
    ErrorBodyDecodeError,
    HTTPErrorKind,
    NodeHTTPError,
    RequestEncodeError,
    ResponseDecodeError,
    ResponseReadError,
)
from domain.hashes import HashLike, hashes_to_hex, utxo_input_ids_to_hex
from domain.schemas import (
    ErrorEnvelope,
    Message,
    NodeInfo,
    Output,
    ReferencedStatus,
    SuccessEnvelope,
    Tips,
    to_messages,
)


logger = logging.getLogger(__name__)

CONTENT_TYPE_JSON = "application/json"
SUCCESS_STATUSES = (200, 201)

T = TypeVar("T")


def _encode_json(req_obj: Any) -> bytes:
    try:
        if isinstance(req_obj, BaseModel):
            req_obj = req_obj.model_dump(mode="json", by_alias=True)
        return json.dumps(req_obj).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise RequestEncodeError(f"unable to encode request body: {exc}") from exc


def _hashes_route(path: str, encoded: List[str]) -> str:
    # An empty list still sends the parameter, with an empty value.
    return f"{path}?hashes={','.join(encoded)}"


def _interpret_body(response: httpx.Response, body: bytes, res_type: Type[T]) -> T:
    """
    Decode a response body into `res_type` (200/201) or raise the error the
    node reported (any other status).
    """
    if response.status_code in SUCCESS_STATUSES:
        try:
            envelope = SuccessEnvelope[res_type].model_validate_json(body)  # type: ignore[valid-type]
        except ValidationError as exc:
            raise ResponseDecodeError(f"unable to decode response body: {exc}") from exc
        return envelope.data

    url = str(response.request.url)
    try:
        err = ErrorEnvelope.model_validate_json(body)
    except ValidationError as exc:
        raise ErrorBodyDecodeError(response.status_code, url, body) from exc

    kind = HTTPErrorKind.from_status(response.status_code)
    logger.warning("Node API error %s (%s) for %s: %s", response.status_code, kind, url, err.error.message)
    raise NodeHTTPError(
        kind=kind,
        url=url,
        message=err.error.message,
        status_code=response.status_code,
        code=err.error.code,
    )


@dataclass
class NodeAPIClient:
    """
    Client for a node's HTTP REST API.

    Every method is a single blocking request/response round trip. The
    underlying `httpx.Client` may be injected (e.g. to share a connection
    pool or to mock the node); otherwise a default one is created and
    owned by this client.
    """

    base_url: str
    http_client: Optional[httpx.Client] = None
    _owns_http_client: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.http_client is None:
            self.http_client = httpx.Client()
            self._owns_http_client = True
        self._http: httpx.Client = self.http_client

    @classmethod
    def from_config(
        cls, config: ClientConfig, http_client: Optional[httpx.Client] = None
    ) -> "NodeAPIClient":
        """Build a client from `ClientConfig`, creating a transport from it if none is given."""
        if http_client is not None:
            return cls(base_url=config.base_url, http_client=http_client)
        client = cls(
            base_url=config.base_url,
            http_client=httpx.Client(
                timeout=httpx.Timeout(config.timeout),
                headers=config.headers,
            ),
        )
        client._owns_http_client = True
        return client

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> "NodeAPIClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def do(
        self,
        method: str,
        route: str,
        req_obj: Any = None,
        res_type: Any = None,
    ) -> Any:
        """
        Issue one request against `base_url + route`.

        `req_obj`, if given, is sent as a JSON body. If `res_type` is None
        the response is discarded unread and None is returned; otherwise
        the body is decoded into `res_type` or the node's error is raised.

        Transport failures (`httpx.TransportError`) propagate unchanged.
        """
        content: Optional[bytes] = None
        headers = {}
        if req_obj is not None:
            content = _encode_json(req_obj)
            headers["Content-Type"] = CONTENT_TYPE_JSON

        request = self._http.build_request(
            method, f"{self.base_url}{route}", content=content, headers=headers
        )
        response = self._http.send(request, stream=True)
        try:
            logger.debug("%s %s -> %s", method, request.url, response.status_code)
            if res_type is None:
                return None

            try:
                body = response.read()
            except (httpx.TransportError, httpx.DecodingError) as exc:
                raise ResponseReadError(f"unable to read response body: {exc}") from exc

            return _interpret_body(response, body, res_type)
        finally:
            response.close()

    def info(self) -> NodeInfo:
        """Get the info of the node."""
        return self.do("GET", "/info", res_type=NodeInfo)

    def tips(self) -> Tips:
        """Get the two tips from the node."""
        return self.do("GET", "/tips", res_type=Tips)

    def messages_by_hash(self, hashes: Iterable[HashLike]) -> List[Message]:
        """
        Get messages by their hashes. Messages come back in the order the
        node returned them, which is not necessarily the input order.
        """
        route = _hashes_route("/messages/by-hash", hashes_to_hex(hashes))
        raw = self.do("GET", route, res_type=Any)
        try:
            return to_messages(raw)
        except ValidationError as exc:
            raise ResponseDecodeError(f"unable to decode messages: {exc}") from exc

    def are_messages_referenced_by_milestone(
        self, hashes: Iterable[HashLike]
    ) -> List[ReferencedStatus]:
        """
        Tell whether the given messages are referenced by milestones.
        The result is ordered like the input hashes.
        """
        route = _hashes_route(
            "/messages/by-hash/is-referenced-by-milestone", hashes_to_hex(hashes)
        )
        return self.do("GET", route, res_type=List[ReferencedStatus])

    def are_transactions_referenced_by_milestone(
        self, hashes: Iterable[HashLike]
    ) -> List[ReferencedStatus]:
        """
        Tell whether the given transactions are referenced by milestones.
        The result is ordered like the input hashes.
        """
        route = _hashes_route("/transaction-messages/is-confirmed", hashes_to_hex(hashes))
        return self.do("GET", route, res_type=List[ReferencedStatus])

    def outputs_by_hash(self, utxo_ids: Iterable[HashLike]) -> List[Output]:
        """Get outputs by their UTXO input IDs."""
        route = _hashes_route("/outputs/by-hash", utxo_input_ids_to_hex(utxo_ids))
        return self.do("GET", route, res_type=List[Output])
