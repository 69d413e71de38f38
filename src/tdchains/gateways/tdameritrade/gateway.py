"""
TD Ameritrade Data Gateway.

High-level gateway class over the option-chain fetcher. This is a DATA-ONLY
gateway; it places no orders.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from tdchains.gateways.protocol import Transport
from tdchains.gateways.tdameritrade.config import TDAmeritradeConfig
from tdchains.gateways.tdameritrade.fetchers import (
    TDAmeritradeOptionChainFetcher,
    build_option_chain_request,
)
from tdchains.gateways.tdameritrade.models import OptionChain
from tdchains.gateways.tdameritrade.queries import OptionChainQuery
from tdchains.gateways.tdameritrade.transport import HttpxTransport


logger = logging.getLogger(__name__)


@dataclass
class TDAmeritradeGateway:
    """
    TD Ameritrade Data Gateway.

    Example:
        config = TDAmeritradeConfig.from_env()
        async with TDAmeritradeGateway(config) as gateway:
            chain = await gateway.fetch_option_chain(
                "AAPL",
                OptionChainQuery(contract_type="PUT", strike_count=8),
            )

        for group in chain.puts:
            print(group.expiration_date, group.strike_prices)

    Calls are independent and may run concurrently on one connected gateway.
    """

    config: TDAmeritradeConfig
    transport: Transport | None = None

    # Internal state
    _connected: bool = field(default=False, init=False)
    _owns_transport: bool = field(default=False, init=False)
    _opened_transport: bool = field(default=False, init=False)
    _chain_fetcher: TDAmeritradeOptionChainFetcher | None = field(
        default=None, init=False
    )

    async def connect(self) -> None:
        """Open the transport and initialize fetchers."""
        if self._connected:
            return
        if self.transport is None:
            transport = HttpxTransport(self.config)
            await transport.open()
            self.transport = transport
            self._owns_transport = True
        elif isinstance(self.transport, HttpxTransport) and not self.transport.is_open:
            await self.transport.open()
            self._opened_transport = True

        self._chain_fetcher = TDAmeritradeOptionChainFetcher(self.transport)
        self._connected = True
        mode = "authenticated" if self.config.credentials.is_authenticated else "delayed"
        logger.info(f"TD Ameritrade gateway connected ({mode})")

    async def disconnect(self) -> None:
        """Close a transport opened by connect() and drop fetchers."""
        if self._owns_transport and isinstance(self.transport, HttpxTransport):
            await self.transport.close()
            self.transport = None
            self._owns_transport = False
        elif self._opened_transport and isinstance(self.transport, HttpxTransport):
            await self.transport.close()
        self._opened_transport = False
        self._chain_fetcher = None
        self._connected = False
        logger.info("TD Ameritrade gateway disconnected")

    async def __aenter__(self) -> TDAmeritradeGateway:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()

    @property
    def is_connected(self) -> bool:
        """Check if gateway is connected."""
        return self._connected

    def _ensure_connected(self) -> None:
        """Ensure gateway is connected."""
        if not self._connected:
            raise RuntimeError("TD Ameritrade gateway not connected. Call connect() first.")

    # =========================================================================
    # Option Chains
    # =========================================================================

    async def fetch_option_chain(
        self, symbol: str, query: OptionChainQuery | None = None
    ) -> OptionChain:
        """
        Fetch the option chain for a symbol.

        Args:
            symbol: Underlying ticker (e.g., "AAPL")
            query: Chain parameters; None uses the defaults. Validated and
                defaulted in place before the request is sent.

        Returns:
            Normalized OptionChain with status SUCCESS

        Raises:
            ValidationError: Bad query, raised before any network call
            TransportError: Request failed
            DecodeError / FormatError: Malformed response body
            QueryStatusError: Non-SUCCESS status; the decoded chain is attached
        """
        request = build_option_chain_request(symbol, query)

        self._ensure_connected()
        assert self._chain_fetcher is not None
        return await self._chain_fetcher.fetch_with_query(request)
