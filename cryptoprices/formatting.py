"""
Currency formatting for crypto prices.

Precision follows the value's magnitude so that small-cap tokens keep their
significant digits:

    >= 1      2 fraction digits       $45,000.50
    >= 0.01   2 to 4 fraction digits  $0.0871
    < 0.01    2 to 8 fraction digits  $0.00000912

Values are always truncated toward zero, never rounded up.
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

Number = Union[Decimal, int, float, str]


class CurrencyType(Enum):
    USD = ("USD", "$")
    EUR = ("EUR", "€")

    def __init__(self, code: str, symbol: str):
        self.code = code
        self.symbol = symbol

    @property
    def fallback(self) -> str:
        return f"{self.symbol}0.00"


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _fraction_digits(value: Decimal) -> tuple[int, int]:
    magnitude = abs(value)
    if magnitude >= 1:
        return 2, 2
    if magnitude >= Decimal("0.01"):
        return 2, 4
    return 2, 8


def _group(value: Decimal, min_digits: int, max_digits: int) -> str:
    rounded = value.quantize(Decimal(1).scaleb(-max_digits), rounding=ROUND_DOWN)
    whole, _, fraction = f"{abs(rounded):,.{max_digits}f}".partition(".")
    fraction = fraction.rstrip("0").ljust(min_digits, "0")
    sign = "-" if rounded < 0 else ""
    return f"{sign}{whole}.{fraction}" if fraction else f"{sign}{whole}"


class CryptoFormatter:
    """Stateless, so a single instance is safe to share across threads."""

    def format_usd(self, value: Number) -> str:
        return self.format(value, CurrencyType.USD)

    def format_eur(self, value: Number) -> str:
        return self.format(value, CurrencyType.EUR)

    def format(self, value: Number, currency: CurrencyType) -> str:
        try:
            amount = _to_decimal(value)
        except (InvalidOperation, ValueError):
            return currency.fallback
        if not amount.is_finite():
            return currency.fallback

        text = _group(amount, *_fraction_digits(amount))
        if text.startswith("-"):
            return f"-{currency.symbol}{text[1:]}"
        return f"{currency.symbol}{text}"

    def format_decimal(self, value: Number, decimal_places: int = 8) -> str:
        """Fixed number of fraction digits with thousands separators."""
        try:
            amount = _to_decimal(value)
        except (InvalidOperation, ValueError):
            return "--"
        if not amount.is_finite():
            return "--"
        return _group(amount, decimal_places, decimal_places)

    def parse(self, value: str) -> Optional[Decimal]:
        """Parse "1,234.5" style text. Returns None if not a number."""
        try:
            amount = Decimal(value.strip().replace(",", ""))
        except (InvalidOperation, AttributeError):
            return None
        return amount if amount.is_finite() else None
