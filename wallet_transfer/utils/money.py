"""Fixed-point money helpers (two decimal places, stored as integer cents)"""

from decimal import Decimal

from wallet_transfer.config import settings

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> int:
    """Convert a 2-decimal amount to integer cents"""
    return int(amount.quantize(CENT) * 100)


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to a 2-decimal amount"""
    return (Decimal(cents) / 100).quantize(CENT)


def format_amount(amount: Decimal, symbol: str | None = None) -> str:
    """
    Render an amount for user-facing messages.

    Example:
        Decimal("1234.5") -> "₱1,234.50"
    """
    symbol = settings.currency_symbol if symbol is None else symbol
    return f"{symbol}{amount:,.2f}"
