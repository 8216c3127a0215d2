"""Display formatting for money and rates."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from withholding.models.inputs import to_decimal


def format_currency(value: Any) -> str:
    """``-1234.5`` -> ``-$1,234.50``. Non-numbers format as $0.00."""
    amount = to_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_currency_compact(value: Any) -> str:
    """Whole dollars, no cents."""
    amount = to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"


def format_percent(value: Any) -> str:
    """Fraction to percent with one decimal: ``0.2213`` -> ``22.1%``."""
    pct = (to_decimal(value) * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{pct}%"
