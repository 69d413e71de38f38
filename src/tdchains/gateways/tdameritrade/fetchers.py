"""
TD Ameritrade Data Fetchers.

Implements the GatewayFetcher TET pipeline for the option-chain endpoint:
validate the query, GET marketdata/chains, normalize the body.
"""

from __future__ import annotations

import logging
from typing import Any

from tdchains.gateways.fetcher import GatewayFetcher, fetcher_registry
from tdchains.gateways.protocol import (
    QueryStatusError,
    Transport,
    TransportResponse,
    ValidationError,
)
from tdchains.gateways.tdameritrade.models import OptionChain
from tdchains.gateways.tdameritrade.normalize import decode_option_chain
from tdchains.gateways.tdameritrade.queries import OptionChainQuery, OptionChainRequest


logger = logging.getLogger(__name__)

GATEWAY_NAME = "tdameritrade"
OPTION_CHAIN_PATH = "marketdata/chains"


def build_option_chain_request(
    symbol: Any, query: OptionChainQuery | None = None
) -> OptionChainRequest:
    """
    Validate a symbol and query into a fetcher request.

    The query is validated and defaulted in place; None means all defaults.

    Raises:
        ValidationError: Empty symbol or invalid enumerated query field
    """
    if not isinstance(symbol, str) or not symbol.strip():
        raise ValidationError(
            "symbol", symbol, message="symbol must be a non-empty string"
        )
    if query is None:
        query = OptionChainQuery()
    return OptionChainRequest(symbol=symbol.strip().upper(), options=query.validate())


# =============================================================================
# Option Chain Fetcher
# =============================================================================


class TDAmeritradeOptionChainFetcher(
    GatewayFetcher[OptionChainRequest, OptionChain]
):
    """
    Fetches and normalizes an option chain.

    Example:
        fetcher = TDAmeritradeOptionChainFetcher(transport)
        chain = await fetcher.fetch(
            symbol="AAPL",
            contract_type="CALL",
            strike_count=10,
        )

    Raises (from fetch):
        ValidationError: Bad parameters, before any request is made
        TransportError: Request failed
        DecodeError / FormatError: Malformed response body
        QueryStatusError: Server reported a non-SUCCESS status
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def transform_query(self, params: dict[str, Any]) -> OptionChainRequest:
        """Transform params dict to a validated request."""
        options = dict(params)
        symbol = options.pop("symbol", None)
        return build_option_chain_request(symbol, OptionChainQuery.from_params(options))

    async def extract_data(
        self, query: OptionChainRequest, **kwargs: Any
    ) -> TransportResponse:
        """GET the chain from the API."""
        return await self._transport.send(
            "GET", OPTION_CHAIN_PATH, params=query.to_params()
        )

    def transform_data(
        self, query: OptionChainRequest, raw: TransportResponse
    ) -> OptionChain:
        """Normalize the body and reject non-SUCCESS statuses."""
        chain = decode_option_chain(raw.content)
        if not chain.is_success:
            logger.warning(f"Option chain query for {query.symbol} returned status {chain.status}")
            raise QueryStatusError(chain.status, chain=chain, response=raw)
        logger.debug(
            f"Fetched {query.symbol} option chain: "
            f"{len(chain.calls)} call / {len(chain.puts)} put expirations"
        )
        return chain


# =============================================================================
# Registration
# =============================================================================


def register_tdameritrade_fetchers() -> None:
    """Register TD Ameritrade fetchers with the global registry."""
    fetcher_registry.register(GATEWAY_NAME, "option_chain", TDAmeritradeOptionChainFetcher)
