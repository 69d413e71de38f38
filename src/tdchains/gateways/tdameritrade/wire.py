"""
Wire format of the option-chain endpoint.

These structs describe the JSON exactly as the server sends it: camelCase
names, expiration maps keyed by "YYYY-MM-DD:<days>", one-element lists per
strike, and greek fields that may hold the string "NaN" instead of a number.
They never leave the gateway; normalize.py turns them into the public models.

Missing scalar fields take zero values, as the endpoint omits fields it has
no data for. Missing sentinel-capable fields default to "NaN" so the public
model never has an absent greek.
"""

from __future__ import annotations

import msgspec


NAN_SENTINEL = "NaN"


class RawDeliverable(msgspec.Struct, rename="camel"):
    """Entry of optionDeliverablesList."""

    symbol: str | None = None
    asset_type: str | None = None
    deliverable_units: str | None = None
    currency_type: str | None = None


class RawOptionContract(msgspec.Struct, rename="camel"):
    """One option record inside an expiration map."""

    put_call: str = ""
    symbol: str = ""
    description: str = ""
    exchange_name: str = ""
    bid_price: float = 0.0
    ask_price: float = 0.0
    mark_price: float = 0.0
    bid_size: int = 0
    ask_size: int = 0
    last_size: int = 0
    high_price: float = 0.0
    low_price: float = 0.0
    open_price: float = 0.0
    close_price: float = 0.0
    total_volume: int = 0
    quote_time_in_long: int = 0
    trade_time_in_long: int = 0
    net_change: float = 0.0
    # Sentinel-capable
    volatility: float | str = NAN_SENTINEL
    delta: float | str = NAN_SENTINEL
    gamma: float | str = NAN_SENTINEL
    theta: float | str = NAN_SENTINEL
    vega: float | str = NAN_SENTINEL
    rho: float | str = NAN_SENTINEL
    theoretical_option_value: float | str = NAN_SENTINEL
    theoretical_volatility: float | str = NAN_SENTINEL
    # Plain numerics
    time_value: float = 0.0
    open_interest: float = 0.0
    is_in_the_money: bool = False
    is_mini: bool = False
    is_non_standard: bool = False
    option_deliverables_list: list[RawDeliverable] | None = None
    strike_price: float = 0.0
    expiration_date: int = 0
    expiration_type: str = ""
    multiplier: float = 0.0
    settlement_type: str = ""
    deliverable_note: str = ""
    is_index_option: bool | None = None  # null for equity options
    percent_change: float = 0.0
    mark_change: float = 0.0
    mark_percent_change: float = 0.0


class RawUnderlying(msgspec.Struct, rename="camel"):
    """Underlying quote block."""

    symbol: str = ""
    description: str = ""
    exchange_name: str = ""
    ask: float = 0.0
    ask_size: int = 0
    bid: float = 0.0
    bid_size: int = 0
    change: float = 0.0
    close: float = 0.0
    delayed: bool = False
    fifty_two_week_high: float = 0.0
    fifty_two_week_low: float = 0.0
    high_price: float = 0.0
    last: float = 0.0
    low_price: float = 0.0
    mark: float = 0.0
    mark_change: float = 0.0
    mark_percent_change: float = 0.0
    open_price: float = 0.0
    percent_change: float = 0.0
    quote_time: int = 0
    total_volume: int = 0
    trade_time: int = 0


# expiration key -> strike key -> one-element record list
RawExpDateMap = dict[str, dict[str, list[RawOptionContract]]]


class RawOptionChain(msgspec.Struct, rename="camel"):
    """Top-level response object."""

    status: str
    symbol: str = ""
    underlying: RawUnderlying | None = None
    strategy: str = ""
    interval: float = 0.0
    is_delayed: bool = False
    is_index: bool = False
    days_to_expiration: float = 0.0
    interest_rate: float = 0.0
    underlying_price: float = 0.0
    volatility: float | str = NAN_SENTINEL
    call_exp_date_map: RawExpDateMap = msgspec.field(default_factory=dict)
    put_exp_date_map: RawExpDateMap = msgspec.field(default_factory=dict)
