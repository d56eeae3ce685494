from decimal import Decimal, InvalidOperation
from typing import Optional

from wallet_client.core.config import settings


def parse_whole_amount(value: int | str | float | Decimal) -> int:
    """Parse an amount in whole currency units.

    Accepts ints, integral floats/Decimals and numeric strings ("50000",
    "50000.00"). Fractional amounts and booleans are rejected.
    """
    if isinstance(value, bool):
        raise ValueError("amount must be a number, not a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"invalid amount: {value!r}")
    if not amount.is_finite() or amount != amount.to_integral_value():
        raise ValueError(f"amount must be a whole number of currency units: {value!r}")
    return int(amount)

def format_grouped(value: int, separator: Optional[str] = None) -> str:
    separator = settings.thousands_separator if separator is None else separator
    return f"{value:,}".replace(",", separator)


class Money:
    def __init__(self, amount: int | str | float | Decimal):
        self.amount = parse_whole_amount(amount)

    def grouped(self, separator: Optional[str] = None) -> str:
        return format_grouped(self.amount, separator)

    def signed(self, sign: str) -> str:
        return f"{sign}{self.grouped()}"

    def __str__(self) -> str:
        return f"{settings.currency_symbol}{self.grouped()}"

    def __repr__(self) -> str:
        return f"Money({self.amount})"
