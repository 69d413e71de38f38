"""
Gateway Protocol: transport contract and error hierarchy.

Defines:
- TransportResponse data structure
- Transport Protocol with runtime_checkable decorator
- Exceptions raised across the gateway layer

Error kinds:
- ValidationError: bad request parameters, raised before any network call
- TransportError: HTTP failure or non-2xx response
- FormatError / DecodeError: malformed response body (no partial result)
- QueryStatusError: body decoded but the server reported a failed query
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import msgspec


if TYPE_CHECKING:
    from tdchains.gateways.tdameritrade.models import OptionChain


# =============================================================================
# Transport
# =============================================================================


class TransportResponse(msgspec.Struct, frozen=True):
    """
    Raw HTTP response handed from the transport to a fetcher.

    Examples:
        response = TransportResponse(
            status_code=200,
            content=b'{"symbol": "AAPL", "status": "SUCCESS"}',
            url="https://api.tdameritrade.com/v1/marketdata/chains?symbol=AAPL",
        )
    """

    status_code: int
    content: bytes
    url: str = ""
    headers: dict[str, str] = msgspec.field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True for 2xx responses."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """Body decoded as UTF-8 (lossy)."""
        return self.content.decode("utf-8", errors="replace")


@runtime_checkable
class Transport(Protocol):
    """
    Transport Protocol - anything that can issue a request against the API.

    Implementations own authentication, base URL and timeouts. A transport
    raises TransportError for network failures and non-2xx statuses, so a
    returned response is always a successful one.

    Note: @runtime_checkable only checks method existence, not signatures.
    """

    async def send(
        self,
        method: str,
        path: str,
        params: Mapping[str, str] | None = None,
        json: Any = None,
    ) -> TransportResponse:
        """Send a request and return the raw response."""
        ...


# =============================================================================
# Exceptions
# =============================================================================


class GatewayError(Exception):
    """Base exception for gateway errors."""


class ValidationError(GatewayError, ValueError):
    """
    Request parameter rejected before any network call.

    Attributes:
        field: Name of the offending parameter
        value: The rejected value
        allowed: Accepted values (empty when the field is not enumerated)
    """

    def __init__(
        self,
        field: str,
        value: Any,
        allowed: Iterable[str] = (),
        message: str | None = None,
    ) -> None:
        self.field = field
        self.value = value
        self.allowed = tuple(sorted(allowed))
        if message is None:
            message = (
                f"invalid {field} {value!r}, must have the value of one of "
                f"the following {list(self.allowed)}"
            )
        super().__init__(message)


class TransportError(GatewayError):
    """
    Transport-level failure (connection error, timeout, non-2xx status).

    Attributes:
        status_code: HTTP status when a response was received, else None
        body: Response body text when available
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class ResponseError(GatewayError):
    """Base for errors decoding a response body."""


class FormatError(ResponseError):
    """
    Response structure violates the expected layout.

    Raised for malformed composite expiration keys, strike entries that do
    not wrap exactly one record, and unparsable dates or day counts.

    Attributes:
        key: The offending map key (or key path) when known
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


class DecodeError(ResponseError):
    """
    Response body could not be decoded into the wire schema.

    Raised for malformed JSON, type mismatches, and numeric fields holding
    neither a number nor the "NaN" sentinel.

    Attributes:
        field: Field name or msgspec path of the offending value when known
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class QueryStatusError(GatewayError):
    """
    Response decoded cleanly but its status is not SUCCESS.

    The decoded chain and raw response stay attached for diagnostics.

    Attributes:
        status: Status string reported by the server
        chain: The decoded (possibly empty) option chain
        response: Raw transport response, when available
    """

    def __init__(
        self,
        status: str,
        chain: OptionChain | None = None,
        response: TransportResponse | None = None,
    ) -> None:
        self.status = status
        self.chain = chain
        self.response = response
        super().__init__(f"error: {status}")
