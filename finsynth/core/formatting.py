"""Compact number and money formatting for log summaries."""
from __future__ import annotations

from decimal import Decimal

_SCALES = (
    (Decimal(10) ** 12, "T", "trillion"),
    (Decimal(10) ** 9, "B", "billion"),
    (Decimal(10) ** 6, "M", "million"),
    (Decimal(10) ** 3, "k", "thousand"),
)
# Smaller magnitudes are printed in full.
_SCALE_FROM = Decimal(10_000)

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "CAD": "C$", "AUD": "A$", "JPY": "¥"}


def humanize_number(value: int | float | Decimal, short: bool = False, decimals: int = 1) -> str:
    """``2_500_000`` becomes ``"2.5 million"``, or ``"2.5M"`` when ``short``."""

    amount = Decimal(str(value))
    sign = "-" if amount < 0 else ""
    amount = abs(amount)

    if amount < _SCALE_FROM:
        if amount == amount.to_integral_value():
            return f"{sign}{int(amount)}"
        return f"{sign}{amount:.{decimals}f}"

    scale, suffix, word = next(entry for entry in _SCALES if amount >= entry[0])
    scaled = f"{amount / scale:.{decimals}f}"
    return f"{sign}{scaled}{suffix}" if short else f"{sign}{scaled} {word}"


def currency_symbol(code: str) -> str:
    return CURRENCY_SYMBOLS.get(code.upper(), code.upper())


def format_money(
    value: int | float | Decimal,
    currency: str = "USD",
    *,
    short: bool = True,
    decimals: int = 1,
) -> str:
    """Amount prefixed with the currency's symbol, e.g. ``"$ 15.0M"``."""

    return f"{currency_symbol(currency)} {humanize_number(value, short=short, decimals=decimals)}"
