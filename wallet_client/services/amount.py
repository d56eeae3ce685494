from typing import Optional

from pydantic import BaseModel

from wallet_client.core.config import settings
from wallet_client.core.exceptions import AmountOutOfRangeException, InvalidAmountException
from wallet_client.utils.mist import digits_only
from wallet_client.utils.money import format_grouped


class AmountInput(BaseModel):
    """State of an amount text field.

    ``raw`` is what gets submitted, ``display`` is what gets shown; both come
    from the same ``value``.
    """
    raw: str = ""
    display: str = ""
    value: Optional[int] = None
    error: Optional[str] = None


def bounds_error(value: int, minimum: Optional[int] = None, maximum: Optional[int] = None) -> Optional[str]:
    minimum = settings.min_transaction_amount if minimum is None else minimum
    maximum = settings.max_transaction_amount if maximum is None else maximum
    if value < minimum:
        return f"Minimum transaction is {settings.currency_label} {format_grouped(minimum)}"
    if value > maximum:
        return f"Maximum transaction is {settings.currency_label} {format_grouped(maximum)}"
    return None

def normalize_amount(text: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> AmountInput:
    cleaned = digits_only(text)
    if not cleaned:
        return AmountInput()

    # one digit past the maximum is already out of range; drop the rest
    cap = len(str(settings.max_transaction_amount if maximum is None else maximum)) + 1
    cleaned = cleaned.lstrip("0")[:cap] or "0"

    value = int(cleaned)
    return AmountInput(
        raw=str(value),
        display=format_grouped(value),
        value=value,
        error=bounds_error(value, minimum, maximum),
    )

def require_amount(amount: AmountInput, empty_message: str = "Please enter a valid amount.") -> int:
    """Return the amount to submit or raise why it cannot be submitted."""
    if not amount.value:
        raise InvalidAmountException(empty_message)
    if amount.error:
        raise AmountOutOfRangeException(amount.value, amount.error)
    return amount.value
