"""
Option chain data model.

Immutable, strongly typed view of one option-chain response. Built only by
normalize.py; wire quirks (sentinel strings, composite keys, wrapped strike
lists) never appear here.

Hierarchy:
    OptionChain
    ├── underlying: UnderlyingQuote | None
    ├── calls: tuple[ExpirationGroup, ...]  (ascending days_to_expiration)
    └── puts:  tuple[ExpirationGroup, ...]
            └── strikes: tuple[OptionContract, ...]  (ascending strike_price)
"""

from __future__ import annotations

import math
from datetime import date, datetime

import msgspec

from tdchains.gateways.fetcher import ms_to_datetime


SUCCESS_STATUS = "SUCCESS"


class OptionDeliverable(msgspec.Struct, frozen=True, gc=False):
    """Asset delivered on exercise."""

    symbol: str
    asset_type: str
    deliverable_units: str
    currency_type: str


class OptionContract(msgspec.Struct, frozen=True):
    """
    One option at one strike and expiration.

    Greek and theoretical fields are always present; they hold NaN when the
    server's pricing model could not compute a value.

    Examples:
        contract.strike_price        # 150.0
        contract.delta               # 0.52, or nan
        contract.has_greeks          # False if any greek is NaN
    """

    # Identification
    symbol: str
    put_call: str  # "CALL" or "PUT"
    description: str
    exchange_name: str
    # Pricing
    bid_price: float
    ask_price: float
    mark_price: float
    last_size: int
    high_price: float
    low_price: float
    open_price: float
    close_price: float
    net_change: float
    percent_change: float
    mark_change: float
    mark_percent_change: float
    # Sizing / volume
    bid_size: int
    ask_size: int
    total_volume: int
    # Timestamps (epoch ms)
    quote_time_in_long: int
    trade_time_in_long: int
    # Greeks / theoretical (float or NaN)
    volatility: float
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float
    theoretical_option_value: float
    theoretical_volatility: float
    # Contract economics
    strike_price: float
    expiration_date: int  # epoch ms
    expiration_type: str
    multiplier: float
    settlement_type: str
    deliverable_note: str
    is_index_option: bool
    is_mini: bool
    is_non_standard: bool
    is_in_the_money: bool
    open_interest: float
    time_value: float
    deliverables: tuple[OptionDeliverable, ...] = ()

    @property
    def is_call(self) -> bool:
        return self.put_call == "CALL"

    @property
    def is_put(self) -> bool:
        return self.put_call == "PUT"

    @property
    def quote_time(self) -> datetime:
        """Quote timestamp as UTC datetime."""
        return ms_to_datetime(self.quote_time_in_long)

    @property
    def trade_time(self) -> datetime:
        """Last trade timestamp as UTC datetime."""
        return ms_to_datetime(self.trade_time_in_long)

    @property
    def expiration(self) -> datetime:
        """Expiration timestamp as UTC datetime."""
        return ms_to_datetime(self.expiration_date)

    @property
    def has_greeks(self) -> bool:
        """True when all five greeks are finite."""
        return all(
            math.isfinite(g)
            for g in (self.delta, self.gamma, self.theta, self.vega, self.rho)
        )

    @property
    def mid_price(self) -> float:
        """Midpoint of bid and ask."""
        return (self.bid_price + self.ask_price) / 2

    @property
    def spread(self) -> float:
        """Bid-ask spread."""
        return self.ask_price - self.bid_price


class ExpirationGroup(msgspec.Struct, frozen=True):
    """
    Contracts of one side (calls or puts) expiring on one date.

    Strikes are sorted ascending by strike_price, one contract per strike.
    """

    expiration_date: date
    days_to_expiration: int
    strikes: tuple[OptionContract, ...] = ()

    @property
    def strike_prices(self) -> list[float]:
        """Strike prices in ascending order."""
        return [c.strike_price for c in self.strikes]

    def contract_at(self, strike: float) -> OptionContract | None:
        """Contract at the given strike, or None."""
        for contract in self.strikes:
            if contract.strike_price == strike:
                return contract
        return None


class UnderlyingQuote(msgspec.Struct, frozen=True, gc=False):
    """Quote snapshot of the underlying instrument."""

    symbol: str
    description: str
    exchange_name: str
    ask: float
    ask_size: int
    bid: float
    bid_size: int
    last: float
    mark: float
    high_price: float
    low_price: float
    open_price: float
    close: float
    change: float
    percent_change: float
    mark_change: float
    mark_percent_change: float
    fifty_two_week_high: float
    fifty_two_week_low: float
    total_volume: int
    quote_time: int  # epoch ms
    trade_time: int  # epoch ms
    delayed: bool


class OptionChain(msgspec.Struct, frozen=True):
    """
    One response to one option-chain query.

    Only usable for trading decisions when status is SUCCESS; the fetcher
    raises QueryStatusError otherwise.

    Examples:
        for group in chain.calls:
            for contract in group.strikes:
                print(group.expiration_date, contract.strike_price, contract.delta)
    """

    symbol: str
    status: str
    underlying: UnderlyingQuote | None
    strategy: str
    interval: float
    is_delayed: bool
    is_index: bool
    days_to_expiration: float
    interest_rate: float
    underlying_price: float
    volatility: float
    calls: tuple[ExpirationGroup, ...] = ()
    puts: tuple[ExpirationGroup, ...] = ()

    @property
    def is_success(self) -> bool:
        return self.status == SUCCESS_STATUS

    @property
    def expirations(self) -> list[date]:
        """All expiration dates across calls and puts, ascending."""
        return sorted({g.expiration_date for g in (*self.calls, *self.puts)})

    def calls_for(self, expiration: date) -> ExpirationGroup | None:
        """Call group for an expiration date, or None."""
        return _group_for(self.calls, expiration)

    def puts_for(self, expiration: date) -> ExpirationGroup | None:
        """Put group for an expiration date, or None."""
        return _group_for(self.puts, expiration)


def _group_for(
    groups: tuple[ExpirationGroup, ...], expiration: date
) -> ExpirationGroup | None:
    for group in groups:
        if group.expiration_date == expiration:
            return group
    return None
