"""
TD Ameritrade Data Gateway.

Option chains from the TD Ameritrade market-data API, normalized into
immutable, strongly typed structures:
- Queries validated against the endpoint's enumerations
- Composite "YYYY-MM-DD:<days>" expiration keys split into date and days
- "NaN" greeks decoded to float NaN
- Strikes and expirations deterministically ordered

Usage:
    from tdchains.gateways.tdameritrade import (
        OptionChainQuery,
        TDAmeritradeConfig,
        TDAmeritradeGateway,
    )

    async with TDAmeritradeGateway(TDAmeritradeConfig.from_env()) as gateway:
        chain = await gateway.fetch_option_chain(
            "AAPL", OptionChainQuery(contract_type="CALL", strike_count=10)
        )

    # Decode a stored response body
    chain = decode_option_chain(body)
"""

from tdchains.gateways.tdameritrade.config import (
    TDAmeritradeConfig,
    TDAmeritradeCredentials,
)
from tdchains.gateways.tdameritrade.fetchers import (
    TDAmeritradeOptionChainFetcher,
    build_option_chain_request,
    register_tdameritrade_fetchers,
)
from tdchains.gateways.tdameritrade.gateway import TDAmeritradeGateway
from tdchains.gateways.tdameritrade.models import (
    ExpirationGroup,
    OptionChain,
    OptionContract,
    OptionDeliverable,
    UnderlyingQuote,
)
from tdchains.gateways.tdameritrade.normalize import (
    decode_nan_float,
    decode_option_chain,
    parse_expiration_key,
)
from tdchains.gateways.tdameritrade.queries import (
    VALID_CONTRACT_TYPES,
    VALID_EXP_MONTHS,
    VALID_OPTION_TYPES,
    VALID_RANGES,
    VALID_STRATEGIES,
    OptionChainQuery,
    OptionChainRequest,
)
from tdchains.gateways.tdameritrade.transport import HttpxTransport

__all__ = [
    # Gateway
    "TDAmeritradeGateway",
    "TDAmeritradeConfig",
    "TDAmeritradeCredentials",
    "HttpxTransport",
    # Queries
    "OptionChainQuery",
    "OptionChainRequest",
    "VALID_CONTRACT_TYPES",
    "VALID_STRATEGIES",
    "VALID_RANGES",
    "VALID_EXP_MONTHS",
    "VALID_OPTION_TYPES",
    # Models
    "OptionChain",
    "ExpirationGroup",
    "OptionContract",
    "OptionDeliverable",
    "UnderlyingQuote",
    # Decoding
    "decode_option_chain",
    "decode_nan_float",
    "parse_expiration_key",
    # Fetchers
    "TDAmeritradeOptionChainFetcher",
    "build_option_chain_request",
    "register_tdameritrade_fetchers",
]
