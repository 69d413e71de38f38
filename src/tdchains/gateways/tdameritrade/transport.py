"""
HTTP transport for the TD Ameritrade REST API.

Thin wrapper around httpx.AsyncClient that applies authentication, maps
failures to TransportError and hands raw bodies to the fetchers. No retries:
retry policy belongs to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from tdchains.gateways.protocol import TransportError, TransportResponse
from tdchains.gateways.tdameritrade.config import TDAmeritradeConfig


logger = logging.getLogger(__name__)


class HttpxTransport:
    """
    Transport backed by httpx.AsyncClient.

    Example:
        async with HttpxTransport(config) as transport:
            response = await transport.send(
                "GET", "marketdata/chains", params={"symbol": "AAPL"}
            )

    Args:
        config: Gateway configuration
        client: Pre-built client (tests inject one with httpx.MockTransport)
    """

    def __init__(
        self,
        config: TDAmeritradeConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._owns_client = client is None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def open(self) -> None:
        """Create the HTTP client (no-op if already open)."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
            headers=self._get_default_headers(),
        )
        self._owns_client = True

    async def close(self) -> None:
        """Close the HTTP client if this transport created it.

        An injected client stays attached and open; its owner closes it.
        """
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpxTransport:
        await self.open()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def send(
        self,
        method: str,
        path: str,
        params: Mapping[str, str] | None = None,
        json: Any = None,
    ) -> TransportResponse:
        """
        Make an HTTP request.

        Args:
            method: HTTP method
            path: Path relative to the configured base URL
            params: Query parameters
            json: JSON body

        Returns:
            Raw response (always 2xx)

        Raises:
            TransportError: On connection failures, timeouts and non-2xx responses
        """
        if self._client is None:
            raise RuntimeError("Transport not open. Call open() first.")

        query = dict(params or {})
        api_key = self._config.credentials.api_key
        if not self._config.credentials.is_authenticated and api_key:
            query["apikey"] = api_key

        logger.debug(f"{method} {path} params={sorted(query)}")
        try:
            response = await self._client.request(
                method,
                path,
                params=query,
                json=json,
                headers=self._get_auth_headers(),
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"{method} {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            url=str(response.url),
            headers=dict(response.headers),
        )

    def _get_default_headers(self) -> dict[str, str]:
        """Get default HTTP headers."""
        return {
            "Accept": "application/json",
            "User-Agent": self._config.user_agent,
            **self._config.extra_headers,
        }

    def _get_auth_headers(self) -> dict[str, str]:
        token = self._config.credentials.access_token
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}
