"""
Option chain normalization.

Turns an option-chain response body into an OptionChain in two stages:

1. Wire decode - msgspec decodes the body into the structs of wire.py.
   Malformed JSON and type mismatches raise DecodeError with the msgspec
   path of the offending value.
2. Normalize - composite expiration keys are split into (date, days),
   single-record strike lists are unwrapped, "NaN" sentinels become float
   NaN, strikes are sorted by price and expirations by days to expiration.

Any failure aborts the whole decode; no partial chain is ever returned.

Ordering:
    strikes      ascending strike_price, stable (ties keep map order)
    expirations  ascending days_to_expiration, ties by expiration_date
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

import msgspec

from tdchains.gateways.protocol import DecodeError, FormatError
from tdchains.gateways.tdameritrade.models import (
    ExpirationGroup,
    OptionChain,
    OptionContract,
    OptionDeliverable,
    UnderlyingQuote,
)
from tdchains.gateways.tdameritrade.wire import (
    NAN_SENTINEL,
    RawExpDateMap,
    RawOptionChain,
    RawOptionContract,
    RawUnderlying,
)


logger = logging.getLogger(__name__)

EXPIRATION_KEY_SEPARATOR = ":"

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_DAYS_RE = re.compile(r"\d+", re.ASCII)

_decoder = msgspec.json.Decoder(RawOptionChain)


# =============================================================================
# Numeric Sentinel Decoder
# =============================================================================


def decode_nan_float(token: Any, field: str | None = None) -> float:
    """
    Decode a JSON scalar that is a number or the "NaN" sentinel.

    Args:
        token: Decoded JSON value
        field: Field name for error messages

    Returns:
        float value, or float("nan") for the sentinel

    Raises:
        DecodeError: If token is neither a number nor "NaN"

    Examples:
        >>> decode_nan_float(0.52)
        0.52
        >>> decode_nan_float(3)
        3.0
        >>> math.isnan(decode_nan_float("NaN"))
        True
    """
    if isinstance(token, str):
        if token == NAN_SENTINEL:
            return math.nan
    elif isinstance(token, (int, float)) and not isinstance(token, bool):
        return float(token)
    where = f" in {field}" if field else ""
    raise DecodeError(
        f"expected a number or {NAN_SENTINEL!r}{where}, got {token!r}",
        field=field,
    )


# =============================================================================
# Composite Keys & Strike Lists
# =============================================================================


def parse_expiration_key(key: str) -> tuple[date, int]:
    """
    Split a composite expiration key into (expiration date, days to expiration).

    Raises:
        FormatError: If the key is not exactly "YYYY-MM-DD:<non-negative int>"

    Examples:
        >>> parse_expiration_key("2024-01-19:5")
        (datetime.date(2024, 1, 19), 5)
    """
    parts = key.split(EXPIRATION_KEY_SEPARATOR)
    if len(parts) != 2:
        raise FormatError(
            f"expiration key {key!r} must have the form YYYY-MM-DD:<days>",
            key=key,
        )
    date_part, days_part = parts

    if not _DATE_RE.fullmatch(date_part):
        raise FormatError(
            f"expiration key {key!r} has malformed date {date_part!r}", key=key
        )
    try:
        expiration = datetime.strptime(date_part, "%Y-%m-%d").date()
    except ValueError as e:
        raise FormatError(
            f"expiration key {key!r} has invalid date {date_part!r}: {e}", key=key
        ) from e

    if not _DAYS_RE.fullmatch(days_part):
        raise FormatError(
            f"expiration key {key!r} has malformed days to expiration {days_part!r}",
            key=key,
        )
    return expiration, int(days_part)


def unwrap_strike_records(
    records: list[RawOptionContract], exp_key: str, strike_key: str
) -> RawOptionContract:
    """
    Return the single record of a strike entry.

    Raises:
        FormatError: If the entry holds zero or several records
    """
    if len(records) != 1:
        raise FormatError(
            f"strike {strike_key!r} of expiration {exp_key!r} has "
            f"{len(records)} records, expected exactly 1",
            key=f"{exp_key}/{strike_key}",
        )
    return records[0]


# =============================================================================
# Field Conversion
# =============================================================================


def _convert_contract(raw: RawOptionContract, context: str) -> OptionContract:
    def greek(name: str, value: float | str) -> float:
        return decode_nan_float(value, field=f"{context}.{name}")

    return OptionContract(
        symbol=raw.symbol,
        put_call=raw.put_call,
        description=raw.description,
        exchange_name=raw.exchange_name,
        bid_price=raw.bid_price,
        ask_price=raw.ask_price,
        mark_price=raw.mark_price,
        last_size=raw.last_size,
        high_price=raw.high_price,
        low_price=raw.low_price,
        open_price=raw.open_price,
        close_price=raw.close_price,
        net_change=raw.net_change,
        percent_change=raw.percent_change,
        mark_change=raw.mark_change,
        mark_percent_change=raw.mark_percent_change,
        bid_size=raw.bid_size,
        ask_size=raw.ask_size,
        total_volume=raw.total_volume,
        quote_time_in_long=raw.quote_time_in_long,
        trade_time_in_long=raw.trade_time_in_long,
        volatility=greek("volatility", raw.volatility),
        delta=greek("delta", raw.delta),
        gamma=greek("gamma", raw.gamma),
        theta=greek("theta", raw.theta),
        vega=greek("vega", raw.vega),
        rho=greek("rho", raw.rho),
        theoretical_option_value=greek(
            "theoreticalOptionValue", raw.theoretical_option_value
        ),
        theoretical_volatility=greek(
            "theoreticalVolatility", raw.theoretical_volatility
        ),
        strike_price=raw.strike_price,
        expiration_date=raw.expiration_date,
        expiration_type=raw.expiration_type,
        multiplier=raw.multiplier,
        settlement_type=raw.settlement_type,
        deliverable_note=raw.deliverable_note,
        is_index_option=bool(raw.is_index_option),
        is_mini=raw.is_mini,
        is_non_standard=raw.is_non_standard,
        is_in_the_money=raw.is_in_the_money,
        open_interest=raw.open_interest,
        time_value=raw.time_value,
        deliverables=tuple(
            OptionDeliverable(
                symbol=d.symbol or "",
                asset_type=d.asset_type or "",
                deliverable_units=d.deliverable_units or "",
                currency_type=d.currency_type or "",
            )
            for d in raw.option_deliverables_list or ()
        ),
    )


def _convert_underlying(raw: RawUnderlying | None) -> UnderlyingQuote | None:
    if raw is None:
        return None
    return UnderlyingQuote(
        symbol=raw.symbol,
        description=raw.description,
        exchange_name=raw.exchange_name,
        ask=raw.ask,
        ask_size=raw.ask_size,
        bid=raw.bid,
        bid_size=raw.bid_size,
        last=raw.last,
        mark=raw.mark,
        high_price=raw.high_price,
        low_price=raw.low_price,
        open_price=raw.open_price,
        close=raw.close,
        change=raw.change,
        percent_change=raw.percent_change,
        mark_change=raw.mark_change,
        mark_percent_change=raw.mark_percent_change,
        fifty_two_week_high=raw.fifty_two_week_high,
        fifty_two_week_low=raw.fifty_two_week_low,
        total_volume=raw.total_volume,
        quote_time=raw.quote_time,
        trade_time=raw.trade_time,
        delayed=raw.delayed,
    )


# =============================================================================
# Chain Normalizer
# =============================================================================


def normalize_exp_date_map(
    exp_map: RawExpDateMap, side: str
) -> tuple[ExpirationGroup, ...]:
    """
    Normalize one expiration map (calls or puts) into ordered groups.

    Args:
        exp_map: Wire map of "YYYY-MM-DD:<days>" -> strike -> [record]
        side: Map name for error context ("callExpDateMap", "putExpDateMap")

    Returns:
        Groups ascending by days_to_expiration, then expiration_date;
        each group's strikes ascending by strike_price.
    """
    groups = []
    for exp_key, strike_map in exp_map.items():
        expiration, days = parse_expiration_key(exp_key)
        contracts = [
            _convert_contract(
                unwrap_strike_records(records, exp_key, strike_key),
                context=f"{side}[{exp_key!r}][{strike_key!r}]",
            )
            for strike_key, records in strike_map.items()
        ]
        contracts.sort(key=lambda c: c.strike_price)
        groups.append(
            ExpirationGroup(
                expiration_date=expiration,
                days_to_expiration=days,
                strikes=tuple(contracts),
            )
        )
    groups.sort(key=lambda g: (g.days_to_expiration, g.expiration_date))
    return tuple(groups)


def normalize_chain(raw: RawOptionChain) -> OptionChain:
    """Build the public OptionChain from a decoded wire chain."""
    chain = OptionChain(
        symbol=raw.symbol,
        status=raw.status,
        underlying=_convert_underlying(raw.underlying),
        strategy=raw.strategy,
        interval=raw.interval,
        is_delayed=raw.is_delayed,
        is_index=raw.is_index,
        days_to_expiration=raw.days_to_expiration,
        interest_rate=raw.interest_rate,
        underlying_price=raw.underlying_price,
        volatility=decode_nan_float(raw.volatility, field="volatility"),
        calls=normalize_exp_date_map(raw.call_exp_date_map, "callExpDateMap"),
        puts=normalize_exp_date_map(raw.put_exp_date_map, "putExpDateMap"),
    )
    logger.debug(
        f"Normalized {chain.symbol} chain: status={chain.status}, "
        f"{len(chain.calls)} call / {len(chain.puts)} put expirations"
    )
    return chain


def decode_wire(payload: bytes | str | Mapping[str, Any]) -> RawOptionChain:
    """
    Decode a response body into the wire structs.

    Args:
        payload: JSON bytes/str, or an already-decoded JSON object

    Raises:
        DecodeError: On malformed JSON or a schema mismatch
    """
    if not isinstance(payload, (bytes, bytearray, memoryview, str, Mapping)):
        raise DecodeError(
            f"option chain must be a JSON object, got {type(payload).__name__}"
        )
    try:
        if isinstance(payload, Mapping):
            return msgspec.convert(dict(payload), RawOptionChain)
        return _decoder.decode(payload)
    except msgspec.ValidationError as e:
        raise DecodeError(
            f"option chain does not match the wire schema: {e}",
            field=_error_path(e),
        ) from e
    except msgspec.DecodeError as e:
        raise DecodeError(f"option chain is not valid JSON: {e}") from e


def decode_option_chain(payload: bytes | str | Mapping[str, Any]) -> OptionChain:
    """
    Decode and normalize an option-chain response body.

    The status is not checked here; see OptionChain.is_success.

    Args:
        payload: JSON bytes/str, or an already-decoded JSON object

    Returns:
        Fully populated OptionChain

    Raises:
        DecodeError: Malformed JSON, schema mismatch, bad numeric token
        FormatError: Malformed expiration key or strike record list
    """
    return normalize_chain(decode_wire(payload))


def _error_path(error: msgspec.ValidationError) -> str | None:
    # msgspec messages end with " - at `$.path`"
    message = str(error)
    marker = " - at `"
    if marker not in message:
        return None
    return message.rsplit(marker, 1)[1].rstrip("`")
