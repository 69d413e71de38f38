"""
Query types for the TD Ameritrade option-chain endpoint.

OptionChainQuery mirrors the endpoint's query parameters. It is validated and
defaulted in place, turned into request parameters once, then discarded.
OptionChainRequest pairs it with the underlying symbol and is the typed query
of the fetcher pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any

from tdchains.gateways.fetcher import BaseQuery
from tdchains.gateways.protocol import ValidationError


# =============================================================================
# Enumerations
# =============================================================================

VALID_CONTRACT_TYPES = frozenset({"CALL", "PUT", "ALL"})
VALID_STRATEGIES = frozenset({
    "SINGLE",
    "ANALYTICAL",
    "COVERED",
    "VERTICAL",
    "CALENDAR",
    "STRANGLE",
    "STRADDLE",
    "BUTTERFLY",
    "CONDOR",
    "DIAGONAL",
    "COLLAR",
    "ROLL",
})
VALID_RANGES = frozenset({"ITM", "NTM", "OTM", "SAK", "SBK", "SNK", "ALL"})
VALID_EXP_MONTHS = frozenset({
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC", "ALL",
})
VALID_OPTION_TYPES = frozenset({"S", "NS", "ALL"})

DEFAULT_CONTRACT_TYPE = "ALL"
DEFAULT_STRATEGY = "SINGLE"
DEFAULT_EXP_MONTH = "ALL"
DEFAULT_OPTION_TYPE = "ALL"

# attribute -> (allowed values, default)
_ENUMERATED_FIELDS: dict[str, tuple[frozenset[str], str]] = {
    "contract_type": (VALID_CONTRACT_TYPES, DEFAULT_CONTRACT_TYPE),
    "strategy": (VALID_STRATEGIES, DEFAULT_STRATEGY),
    "exp_month": (VALID_EXP_MONTHS, DEFAULT_EXP_MONTH),
    "option_type": (VALID_OPTION_TYPES, DEFAULT_OPTION_TYPE),
}

# attribute -> wire parameter name
_PARAM_NAMES: dict[str, str] = {
    "contract_type": "contractType",
    "strike_count": "strikeCount",
    "include_quotes": "includeQuotes",
    "strategy": "strategy",
    "interval": "interval",
    "strike": "strike",
    "range": "range",
    "from_date": "fromDate",
    "to_date": "toDate",
    "volatility": "volatility",
    "underlying_price": "underlyingPrice",
    "interest_rate": "interestRate",
    "days_to_expiration": "daysToExpiration",
    "exp_month": "expMonth",
    "option_type": "optionType",
}


# =============================================================================
# Option Chain Queries
# =============================================================================


@dataclass
class OptionChainQuery:
    """
    Option-chain query parameters.

    Unset fields are left out of the request so the server default applies.
    The four enumerated fields are filled with their defaults by validate().

    Examples:
        # Everything, server defaults
        query = OptionChainQuery()

        # Near-the-money calls for March, 10 strikes
        query = OptionChainQuery(
            contract_type="CALL",
            strike_count=10,
            range="NTM",
            exp_month="MAR",
        )

        # Analytical chain with custom inputs
        query = OptionChainQuery(
            strategy="ANALYTICAL",
            volatility=30.0,
            underlying_price=150.0,
            interest_rate=4.5,
            days_to_expiration=30,
        )
    """

    contract_type: str | None = None  # CALL, PUT, ALL
    strike_count: int | None = None
    include_quotes: bool | None = None  # None = server default
    strategy: str | None = None  # SINGLE, ANALYTICAL, VERTICAL, ...
    interval: float | None = None  # strike interval for spread strategies
    strike: float | None = None
    range: str | None = None  # ITM, NTM, OTM, SAK, SBK, SNK, ALL
    from_date: date | None = None
    to_date: date | None = None
    volatility: float | None = None  # ANALYTICAL only
    underlying_price: float | None = None  # ANALYTICAL only
    interest_rate: float | None = None  # ANALYTICAL only
    days_to_expiration: int | None = None  # ANALYTICAL only
    exp_month: str | None = None  # JAN..DEC, ALL
    option_type: str | None = None  # S (standard), NS (non-standard), ALL

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> OptionChainQuery:
        """
        Build a query from a parameter dict keyed by attribute name.

        Raises:
            ValidationError: If a key is not a query parameter
        """
        known = {f.name for f in fields(cls)}
        for key in params:
            if key not in known:
                raise ValidationError(key, params[key], known, f"unknown option-chain parameter {key!r}")
        return cls(**params)

    def validate(self) -> OptionChainQuery:
        """
        Validate enumerated fields and fill in defaults, in place.

        contract_type, strategy, exp_month and option_type default when empty
        and must otherwise belong to their enumeration. ``range`` is passed
        through unchecked, as are numeric and date fields; VALID_RANGES is
        exported for callers that check it themselves.

        Returns:
            self, for chaining

        Raises:
            ValidationError: Naming the field and its allowed values
        """
        for name, (allowed, default) in _ENUMERATED_FIELDS.items():
            value = getattr(self, name)
            if not value:
                setattr(self, name, default)
            elif value not in allowed:
                raise ValidationError(name, value, allowed)
        return self

    def to_params(self) -> dict[str, str]:
        """
        Encode as request query parameters.

        Unset (None or empty) fields are omitted; booleans are sent as
        "true"/"false" and dates as YYYY-MM-DD.
        """
        params: dict[str, str] = {}
        for name, param in _PARAM_NAMES.items():
            value = getattr(self, name)
            if value is None or value == "":
                continue
            if isinstance(value, bool):
                params[param] = "true" if value else "false"
            elif isinstance(value, date):
                params[param] = value.isoformat()
            else:
                params[param] = str(value)
        return params


@dataclass(frozen=True)
class OptionChainRequest(BaseQuery):
    """
    Typed query for the option-chain fetcher.

    Examples:
        request = OptionChainRequest(symbol="AAPL")

        request = OptionChainRequest(
            symbol="SPY",
            options=OptionChainQuery(contract_type="PUT", strike_count=5),
        )
    """

    symbol: str
    options: OptionChainQuery = field(default_factory=OptionChainQuery)

    def to_params(self) -> dict[str, str]:
        """Request parameters including the symbol."""
        return {"symbol": self.symbol, **self.options.to_params()}
