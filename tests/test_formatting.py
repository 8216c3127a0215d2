"""Tests for money and rate display formatting."""

from decimal import Decimal

import pytest

from withholding.formatting import format_currency, format_currency_compact, format_percent


class TestFormatCurrency:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("1234.5"), "$1,234.50"),
            (Decimal("-1234.5"), "-$1,234.50"),
            (Decimal("0"), "$0.00"),
            (Decimal("0.005"), "$0.01"),
            (Decimal("4674.836"), "$4,674.84"),
            (1000000, "$1,000,000.00"),
        ],
    )
    def test_values(self, value, expected):
        assert format_currency(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", Decimal("NaN"), float("inf")])
    def test_non_numbers(self, value):
        assert format_currency(value) == "$0.00"

    def test_tiny_negative_has_no_sign(self):
        assert format_currency(Decimal("-0.001")) == "$0.00"


class TestFormatCurrencyCompact:
    def test_rounds_to_dollars(self):
        assert format_currency_compact(Decimal("1234.5")) == "$1,235"
        assert format_currency_compact(Decimal("-99.4")) == "-$99"


class TestFormatPercent:
    def test_one_decimal(self):
        assert format_percent(Decimal("0.18837418")) == "18.8%"
        assert format_percent(Decimal("0.2213")) == "22.1%"

    def test_zero(self):
        assert format_percent(Decimal("0")) == "0.0%"

    def test_whole_rate(self):
        assert format_percent(Decimal("0.37")) == "37.0%"
