"""
tdchains Gateways: broker market-data connectors.

- Fetcher pipeline: transform query, extract, transform data
- Protocol: transport contract and error hierarchy
- TD Ameritrade: option chains

Usage:
    from tdchains.gateways import GatewayError, fetcher_registry
    from tdchains.gateways.tdameritrade import TDAmeritradeGateway
"""

from tdchains.gateways.fetcher import (
    BaseQuery,
    FetcherRegistry,
    GatewayFetcher,
    fetcher_registry,
)
from tdchains.gateways.protocol import (
    DecodeError,
    FormatError,
    GatewayError,
    QueryStatusError,
    ResponseError,
    Transport,
    TransportError,
    TransportResponse,
    ValidationError,
)


__all__ = [
    # Fetcher protocol
    "BaseQuery",
    "FetcherRegistry",
    "GatewayFetcher",
    "fetcher_registry",
    # Transport
    "Transport",
    "TransportResponse",
    # Exceptions
    "GatewayError",
    "ValidationError",
    "TransportError",
    "ResponseError",
    "FormatError",
    "DecodeError",
    "QueryStatusError",
]
