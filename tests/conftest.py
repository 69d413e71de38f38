"""
Pytest configuration and shared fixtures for tdchains tests.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest


OptionFactory = Callable[..., dict[str, Any]]
ChainFactory = Callable[..., dict[str, Any]]


# =============================================================================
# Option chain payload fixtures
# =============================================================================


def _option_record(strike: float, put_call: str = "CALL", **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "putCall": put_call,
        "symbol": f"AAPL_011924{put_call[0]}{strike:g}",
        "description": f"AAPL Jan 19 2024 {strike:g} {put_call.title()}",
        "exchangeName": "OPR",
        "bidPrice": 1.25,
        "askPrice": 1.35,
        "markPrice": 1.3,
        "bidSize": 10,
        "askSize": 12,
        "lastSize": 1,
        "highPrice": 1.5,
        "lowPrice": 1.1,
        "openPrice": 0.0,
        "closePrice": 1.2,
        "totalVolume": 345,
        "quoteTimeInLong": 1705093200000,
        "tradeTimeInLong": 1705093100000,
        "netChange": 0.1,
        "volatility": 24.5,
        "delta": 0.52,
        "gamma": 0.04,
        "theta": -0.12,
        "vega": 0.15,
        "rho": 0.02,
        "timeValue": 1.3,
        "openInterest": 1200,
        "isInTheMoney": False,
        "theoreticalOptionValue": 1.31,
        "theoreticalVolatility": 29.0,
        "isMini": False,
        "isNonStandard": False,
        "optionDeliverablesList": None,
        "strikePrice": strike,
        "expirationDate": 1705698000000,
        "expirationType": "R",
        "multiplier": 100.0,
        "settlementType": " ",
        "deliverableNote": "",
        "isIndexOption": None,
        "percentChange": 8.33,
        "markChange": 0.1,
        "markPercentChange": 8.33,
    }
    record.update(overrides)
    return record


def _chain_payload(
    calls: dict[str, Any] | None = None,
    puts: dict[str, Any] | None = None,
    status: str = "SUCCESS",
    **overrides: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "symbol": "AAPL",
        "status": status,
        "underlying": {
            "symbol": "AAPL",
            "description": "Apple Inc - Common Stock",
            "exchangeName": "NASDAQ",
            "ask": 185.6,
            "askSize": 300,
            "bid": 185.55,
            "bidSize": 200,
            "change": 1.2,
            "close": 184.4,
            "delayed": True,
            "fiftyTwoWeekHigh": 199.62,
            "fiftyTwoWeekLow": 124.17,
            "highPrice": 186.4,
            "last": 185.59,
            "lowPrice": 183.43,
            "mark": 185.59,
            "markChange": 1.19,
            "markPercentChange": 0.65,
            "openPrice": 184.35,
            "percentChange": 0.65,
            "quoteTime": 1705093199000,
            "totalVolume": 40444432,
            "tradeTime": 1705093199000,
        },
        "strategy": "SINGLE",
        "interval": 0.0,
        "isDelayed": True,
        "isIndex": False,
        "daysToExpiration": 0.0,
        "interestRate": 5.25,
        "underlyingPrice": 185.575,
        "volatility": 29.0,
        "numberOfContracts": 0,
        "callExpDateMap": calls if calls is not None else {},
        "putExpDateMap": puts if puts is not None else {},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def option_record() -> OptionFactory:
    """Factory for one wire-format option record."""
    return _option_record


@pytest.fixture
def chain_payload() -> ChainFactory:
    """Factory for a wire-format option chain response object."""
    return _chain_payload


@pytest.fixture
def sample_chain_payload() -> dict[str, Any]:
    """Response with two call and two put expirations, keys out of order."""
    return _chain_payload(
        calls={
            "2024-03-15:63": {
                "190.0": [_option_record(190.0)],
                "180.0": [_option_record(180.0)],
            },
            "2024-01-19:5": {
                "185.0": [_option_record(185.0, delta="NaN", gamma="NaN")],
                "175.0": [_option_record(175.0)],
                "180.0": [_option_record(180.0)],
            },
        },
        puts={
            "2024-03-15:63": {"180.0": [_option_record(180.0, "PUT", delta=-0.4)]},
            "2024-01-19:5": {"180.0": [_option_record(180.0, "PUT", delta=-0.3)]},
        },
    )


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")
