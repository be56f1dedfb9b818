from __future__ import annotations

from enum import Enum


class HTTPErrorKind(Enum):
    """
    Closed set of error kinds derived from the node's HTTP status code.

    Each member carries the status it maps from (None for the catch-all)
    and the text used when rendering the error.
    """

    BAD_REQUEST = (400, "bad request")
    UNAUTHORIZED = (401, "unauthorized")
    NOT_FOUND = (404, "not found")
    INTERNAL_SERVER_ERROR = (500, "internal server error")
    NOT_IMPLEMENTED = (501, "operation not implemented/supported/available")
    UNKNOWN = (None, "unknown error")

    def __init__(self, status: int | None, text: str) -> None:
        self.status = status
        self.text = text

    @classmethod
    def from_status(cls, status: int) -> "HTTPErrorKind":
        for kind in cls:
            if kind.status == status:
                return kind
        return cls.UNKNOWN

    def __str__(self) -> str:
        return self.text


class NodeAPIError(Exception):
    """Base class for every error raised by the node API client."""


class RequestEncodeError(NodeAPIError):
    """The request payload could not be serialized to JSON."""


class ResponseReadError(NodeAPIError):
    """The response body could not be read in full."""


class ResponseDecodeError(NodeAPIError):
    """A 200/201 response body did not match the expected shape."""


class ErrorBodyDecodeError(NodeAPIError):
    """
    A non-success response whose body is not an error envelope.

    Kept apart from `NodeHTTPError` so callers can tell a misbehaving
    node (or proxy) from a well-formed API error.
    """

    def __init__(self, status_code: int, url: str, body: bytes) -> None:
        self.status_code = status_code
        self.url = url
        self.body = body
        super().__init__(
            f"unable to read error from response body: status {status_code}, url {url}"
        )


class NodeHTTPError(NodeAPIError):
    """Error envelope returned by the node, mapped to an `HTTPErrorKind`."""

    def __init__(
        self,
        kind: HTTPErrorKind,
        url: str,
        message: str,
        status_code: int,
        code: int | None = None,
    ) -> None:
        self.kind = kind
        self.url = url
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(f"{kind.text}: url {url}, error message: {message}")
