from decimal import Decimal

import pytest

from cryptoprices.formatting import CryptoFormatter, CurrencyType


@pytest.fixture
def formatter():
    return CryptoFormatter()


class TestCurrencyFormatting:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("45000.50"), "$45,000.50"),
            (Decimal("1.0001"), "$1.00"),
            (Decimal("98.765"), "$98.76"),  # truncated, not rounded
            (Decimal("0.5"), "$0.50"),
            (Decimal("0.0871"), "$0.0871"),
            (Decimal("0.45678"), "$0.4567"),
            (Decimal("0.00000912"), "$0.00000912"),
            (Decimal("0.000000019"), "$0.00000001"),
            (Decimal("0"), "$0.00"),
            (Decimal("1234567"), "$1,234,567.00"),
        ],
    )
    def test_format_usd(self, formatter, value, expected):
        assert formatter.format_usd(value) == expected

    def test_format_eur(self, formatter):
        assert formatter.format_eur(Decimal("41500.75")) == "€41,500.75"
        assert formatter.format_eur(Decimal("0.0803")) == "€0.0803"

    def test_format_negative(self, formatter):
        assert formatter.format_usd(Decimal("-12.345")) == "-$12.34"

    def test_format_accepts_float_and_int(self, formatter):
        assert formatter.format_usd(0.1) == "$0.10"
        assert formatter.format_usd(3) == "$3.00"

    def test_format_dispatches_on_currency(self, formatter):
        assert formatter.format(Decimal("2"), CurrencyType.USD) == "$2.00"
        assert formatter.format(Decimal("2"), CurrencyType.EUR) == "€2.00"

    def test_fallback_on_invalid(self, formatter):
        assert formatter.format_usd("abc") == "$0.00"
        assert formatter.format_eur(Decimal("NaN")) == "€0.00"


class TestCurrencyType:
    def test_codes(self):
        assert CurrencyType.USD.code == "USD"
        assert CurrencyType.EUR.code == "EUR"
        assert CurrencyType.USD.fallback == "$0.00"


class TestDecimalFormatting:
    def test_default_places(self, formatter):
        assert formatter.format_decimal(Decimal("1234.5678")) == "1,234.56780000"

    def test_custom_places(self, formatter):
        assert formatter.format_decimal(Decimal("1.999"), decimal_places=2) == "1.99"
        assert formatter.format_decimal(Decimal("1234.9"), decimal_places=0) == "1,234"

    def test_invalid(self, formatter):
        assert formatter.format_decimal("x") == "--"


class TestParse:
    @pytest.mark.parametrize(
        "text,expected",
        [("1,234.56", Decimal("1234.56")), (" 42 ", Decimal("42")), ("0.00000912", Decimal("0.00000912"))],
    )
    def test_parse(self, formatter, text, expected):
        assert formatter.parse(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "inf"])
    def test_parse_invalid(self, formatter, text):
        assert formatter.parse(text) is None
