"""Currencies a station can invoice in, and amount formatting for reports."""
from __future__ import annotations

from decimal import Decimal

SUPPORTED_CURRENCIES: tuple[str, ...] = ("PKR", "INR", "USD", "EUR", "GBP", "AED", "SAR", "CNY")


def is_supported_currency(code: str | None) -> bool:
    return bool(code) and code.upper() in SUPPORTED_CURRENCIES  # type: ignore[union-attr]


def decimal_text(amount: Decimal) -> str:
    """Plain positional notation, never exponent form (``1E+5`` -> ``"100000"``)."""
    return f"{amount:f}"


def format_amount(amount: Decimal) -> str:
    """Two decimals with thousands separators: ``Decimal("1234.5")`` -> ``"1,234.50"``."""
    return f"{amount:,.2f}"
