"""Tests for option-chain query validation and encoding."""

from __future__ import annotations

from datetime import date

import pytest

from tdchains.gateways.protocol import ValidationError
from tdchains.gateways.tdameritrade.queries import (
    VALID_CONTRACT_TYPES,
    VALID_EXP_MONTHS,
    VALID_OPTION_TYPES,
    VALID_RANGES,
    VALID_STRATEGIES,
    OptionChainQuery,
    OptionChainRequest,
)


class TestEnumerations:
    """Tests for the exported value sets."""

    def test_contract_types(self) -> None:
        assert VALID_CONTRACT_TYPES == {"CALL", "PUT", "ALL"}

    def test_strategies(self) -> None:
        assert len(VALID_STRATEGIES) == 12
        assert {"SINGLE", "ANALYTICAL", "ROLL"} <= VALID_STRATEGIES

    def test_ranges(self) -> None:
        assert VALID_RANGES == {"ITM", "NTM", "OTM", "SAK", "SBK", "SNK", "ALL"}

    def test_exp_months(self) -> None:
        assert len(VALID_EXP_MONTHS) == 13
        assert "ALL" in VALID_EXP_MONTHS

    def test_option_types(self) -> None:
        assert VALID_OPTION_TYPES == {"S", "NS", "ALL"}


class TestValidate:
    """Tests for OptionChainQuery.validate."""

    def test_empty_query_gets_defaults(self) -> None:
        """Test every enumerated field defaults."""
        query = OptionChainQuery().validate()

        assert query.contract_type == "ALL"
        assert query.strategy == "SINGLE"
        assert query.exp_month == "ALL"
        assert query.option_type == "ALL"
        assert query.range is None

    def test_empty_strings_get_defaults(self) -> None:
        """Test empty strings count as unset."""
        query = OptionChainQuery(contract_type="", strategy="", exp_month="", option_type="")
        query.validate()

        assert (query.contract_type, query.strategy, query.exp_month, query.option_type) == (
            "ALL",
            "SINGLE",
            "ALL",
            "ALL",
        )

    def test_validates_in_place(self) -> None:
        """Test validate mutates and returns the same query."""
        query = OptionChainQuery()
        assert query.validate() is query
        assert query.contract_type == "ALL"

    def test_valid_values_kept(self) -> None:
        """Test valid values are not replaced."""
        query = OptionChainQuery(
            contract_type="PUT", strategy="VERTICAL", exp_month="MAR", option_type="NS"
        ).validate()

        assert query.contract_type == "PUT"
        assert query.strategy == "VERTICAL"
        assert query.exp_month == "MAR"
        assert query.option_type == "NS"

    def test_idempotent(self) -> None:
        """Test validating twice changes nothing."""
        query = OptionChainQuery(strategy="COVERED").validate()
        before = OptionChainQuery(**vars(query))

        assert query.validate() == before

    def test_bad_contract_type(self) -> None:
        """Test invalid contract type names field and allowed values."""
        with pytest.raises(ValidationError) as exc_info:
            OptionChainQuery(contract_type="BOTH").validate()

        error = exc_info.value
        assert error.field == "contract_type"
        assert error.value == "BOTH"
        assert error.allowed == ("ALL", "CALL", "PUT")
        assert "BOTH" in str(error)
        assert "CALL" in str(error)

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("strategy", "IRON_CONDOR"),
            ("exp_month", "JANUARY"),
            ("option_type", "X"),
            ("contract_type", "call"),  # case-sensitive
        ],
    )
    def test_bad_enumerated_value(self, field: str, value: str) -> None:
        """Test each enumerated field rejects unknown values."""
        with pytest.raises(ValidationError) as exc_info:
            OptionChainQuery(**{field: value}).validate()
        assert exc_info.value.field == field

    def test_range_not_enforced(self) -> None:
        """Test range passes through unchecked."""
        query = OptionChainQuery(range="WIDE").validate()
        assert query.range == "WIDE"

    def test_numeric_fields_not_checked(self) -> None:
        """Test numeric fields are passed through."""
        query = OptionChainQuery(strike_count=-3, volatility=0.0).validate()

        assert query.strike_count == -3
        assert query.volatility == 0.0


class TestFromParams:
    """Tests for OptionChainQuery.from_params."""

    def test_known_params(self) -> None:
        query = OptionChainQuery.from_params({"contract_type": "CALL", "strike_count": 5})

        assert query.contract_type == "CALL"
        assert query.strike_count == 5

    def test_unknown_param(self) -> None:
        with pytest.raises(ValidationError, match="unknown option-chain parameter 'strikes'"):
            OptionChainQuery.from_params({"strikes": 5})


class TestToParams:
    """Tests for request parameter encoding."""

    def test_defaults_only(self) -> None:
        """Test a validated empty query sends only the enumerated defaults."""
        params = OptionChainQuery().validate().to_params()

        assert params == {
            "contractType": "ALL",
            "strategy": "SINGLE",
            "expMonth": "ALL",
            "optionType": "ALL",
        }

    def test_unvalidated_empty_query(self) -> None:
        assert OptionChainQuery().to_params() == {}

    def test_full_query(self) -> None:
        """Test every field's wire name and encoding."""
        query = OptionChainQuery(
            contract_type="CALL",
            strike_count=10,
            include_quotes=True,
            strategy="ANALYTICAL",
            interval=2.5,
            strike=150.0,
            range="NTM",
            from_date=date(2024, 1, 1),
            to_date=date(2024, 3, 31),
            volatility=30.0,
            underlying_price=150.0,
            interest_rate=4.5,
            days_to_expiration=30,
            exp_month="MAR",
            option_type="S",
        )

        assert query.to_params() == {
            "contractType": "CALL",
            "strikeCount": "10",
            "includeQuotes": "true",
            "strategy": "ANALYTICAL",
            "interval": "2.5",
            "strike": "150.0",
            "range": "NTM",
            "fromDate": "2024-01-01",
            "toDate": "2024-03-31",
            "volatility": "30.0",
            "underlyingPrice": "150.0",
            "interestRate": "4.5",
            "daysToExpiration": "30",
            "expMonth": "MAR",
            "optionType": "S",
        }

    def test_false_and_zero_are_sent(self) -> None:
        """Test falsy but set values are not dropped."""
        params = OptionChainQuery(include_quotes=False, strike_count=0).to_params()

        assert params["includeQuotes"] == "false"
        assert params["strikeCount"] == "0"

    def test_empty_range_omitted(self) -> None:
        assert "range" not in OptionChainQuery(range="").to_params()


class TestOptionChainRequest:
    """Tests for OptionChainRequest."""

    def test_default_options(self) -> None:
        request = OptionChainRequest(symbol="AAPL")

        assert request.options == OptionChainQuery()
        assert request.to_params() == {"symbol": "AAPL"}

    def test_params_include_symbol(self) -> None:
        request = OptionChainRequest(
            symbol="SPY",
            options=OptionChainQuery(contract_type="PUT", strike_count=5),
        )

        assert request.to_params() == {
            "symbol": "SPY",
            "contractType": "PUT",
            "strikeCount": "5",
        }

    def test_request_is_frozen(self) -> None:
        request = OptionChainRequest(symbol="AAPL")

        with pytest.raises(AttributeError):
            request.symbol = "MSFT"  # type: ignore[misc]
