"""
tdchains: TD Ameritrade option chains as typed, immutable data.

Quick Start:
    from tdchains import OptionChainQuery, TDAmeritradeConfig, TDAmeritradeGateway

    config = TDAmeritradeConfig.from_env()
    async with TDAmeritradeGateway(config) as gateway:
        chain = await gateway.fetch_option_chain("AAPL", OptionChainQuery(range="NTM"))

    for group in chain.calls:
        print(group.expiration_date, group.days_to_expiration, len(group.strikes))
"""

__version__ = "0.1.0"
__author__ = "tdchains Team"

from tdchains.gateways import (
    DecodeError,
    FormatError,
    GatewayError,
    QueryStatusError,
    TransportError,
    ValidationError,
)
from tdchains.gateways.tdameritrade import (
    ExpirationGroup,
    OptionChain,
    OptionChainQuery,
    OptionContract,
    TDAmeritradeConfig,
    TDAmeritradeCredentials,
    TDAmeritradeGateway,
    decode_option_chain,
)


__all__ = [
    # Gateway
    "TDAmeritradeGateway",
    "TDAmeritradeConfig",
    "TDAmeritradeCredentials",
    "OptionChainQuery",
    # Models
    "OptionChain",
    "ExpirationGroup",
    "OptionContract",
    "decode_option_chain",
    # Exceptions
    "GatewayError",
    "ValidationError",
    "TransportError",
    "FormatError",
    "DecodeError",
    "QueryStatusError",
    "__author__",
    "__version__",
]
