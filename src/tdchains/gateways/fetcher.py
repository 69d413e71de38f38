"""
Fetcher pipeline shared by gateway endpoints.

Each endpoint runs transform_query -> extract_data -> transform_data:
validate parameters, send the request, decode the body.

Usage:
    class MyChainFetcher(GatewayFetcher[MyQuery, OptionChain]):
        def transform_query(self, params: dict) -> MyQuery:
            return MyQuery(**params)

        async def extract_data(self, query: MyQuery, **kwargs) -> Any:
            return await self._transport.send("GET", "marketdata/chains")

        def transform_data(self, query: MyQuery, raw: Any) -> OptionChain:
            return decode_option_chain(raw.content)

    # Use the fetcher
    fetcher = MyChainFetcher(transport)
    chain = await fetcher.fetch(symbol="AAPL")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar


# =============================================================================
# Type Variables
# =============================================================================

Q = TypeVar("Q", bound="BaseQuery")  # Query type
R = TypeVar("R")  # Response type


# =============================================================================
# Query Types (Input)
# =============================================================================


@dataclass(frozen=True)
class BaseQuery:
    """Base class for all query types."""

    pass


# =============================================================================
# Fetcher Abstract Base Class
# =============================================================================


class GatewayFetcher(ABC, Generic[Q, R]):
    """
    One endpoint binding, split into three stages.

    transform_query is synchronous and runs before any I/O, so a bad
    parameter never reaches the network. extract_data is the only await.
    transform_data turns the raw response into the public model.
    """

    @abstractmethod
    def transform_query(self, params: dict[str, Any]) -> Q:
        """
        Build a typed query from keyword parameters.

        Raises:
            ValidationError: Unknown, missing or out-of-range parameter
        """
        ...

    @abstractmethod
    async def extract_data(self, query: Q, **kwargs: Any) -> Any:
        """
        Send the query and return the raw response.

        Raises:
            TransportError: Request failed or returned a non-2xx status
        """
        ...

    @abstractmethod
    def transform_data(self, query: Q, raw: Any) -> R:
        """
        Decode the raw response for the given query.

        Raises:
            ResponseError: Body is malformed
        """
        ...

    async def fetch(self, **params: Any) -> R:
        """Run all three stages from keyword parameters."""
        query = self.transform_query(params)
        raw = await self.extract_data(query)
        return self.transform_data(query, raw)

    async def fetch_with_query(self, query: Q, **kwargs: Any) -> R:
        """Run extract and transform for an already validated query."""
        raw = await self.extract_data(query, **kwargs)
        return self.transform_data(query, raw)


# =============================================================================
# Fetcher Registry
# =============================================================================


@dataclass
class FetcherRegistry:
    """
    Fetcher classes keyed by (gateway name, data type).

    Example:
        fetcher_registry.register("tdameritrade", "option_chain", TDAmeritradeOptionChainFetcher)
        fetcher = fetcher_registry.get("tdameritrade", "option_chain")(transport)
    """

    _fetchers: dict[tuple[str, str], type[GatewayFetcher[Any, Any]]] = field(
        default_factory=dict
    )

    def register(
        self,
        gateway_name: str,
        data_type: str,
        fetcher_class: type[GatewayFetcher[Any, Any]],
    ) -> None:
        """Register (or replace) the fetcher class for a gateway and data type."""
        self._fetchers[(gateway_name, data_type)] = fetcher_class

    def get(
        self, gateway_name: str, data_type: str
    ) -> type[GatewayFetcher[Any, Any]] | None:
        """Registered fetcher class, or None."""
        return self._fetchers.get((gateway_name, data_type))




# Global registry instance
fetcher_registry = FetcherRegistry()


# =============================================================================
# Utility Functions
# =============================================================================


def ms_to_datetime(ms: int) -> datetime:
    """
    Convert epoch milliseconds to an aware UTC datetime.

    Examples:
        >>> ms_to_datetime(1704067200_000)
        datetime.datetime(2024, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    return datetime.fromtimestamp(ms / 1_000, tz=timezone.utc)
