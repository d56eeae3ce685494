import re
from datetime import date, datetime, timezone
from typing import Optional

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[!@#$%^&*]).{8,32}$")
_PHONE_PATTERN = re.compile(r"^0\d{9,12}$")
_URL_PATTERN = re.compile(r"^https?://\S+$")


def digits_only(text: str) -> str:
    """Keep only ASCII digits; grouping separators, currency, spaces and other scripts go."""
    if not text:
        return ""
    return re.sub(r"[^0-9]", "", text)

def parse_identifier(value: int | str) -> int:
    """
    Parses a user, wallet or transaction id into an int.

    Args:
        value: An int or a string of digits (e.g. 42, "42", " 42 ").

    Returns:
        int: The identifier.

    Raises:
        ValueError: For booleans, negative numbers, floats or non-digit strings.
    """
    if isinstance(value, bool):
        raise ValueError("identifier must not be a boolean")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"identifier must not be negative: {value}")
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"invalid identifier: {value!r}")

def first_name(full_name: str | None) -> str:
    """Return the first word of a full name, or "" when there is none."""
    parts = (full_name or "").strip().split()
    if not parts:
        return ""
    return parts[0]

def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_PATTERN.match(email))

def is_valid_password(password: str) -> bool:
    """8 to 32 characters with a lowercase, an uppercase, a digit and one of !@#$%^&*."""
    return bool(_PASSWORD_PATTERN.match(password))

def is_valid_phone_number(phone_number: str) -> bool:
    """
    Validates a local phone number: a leading 0 followed by 9 to 12 digits.

    Args:
        phone_number (str): Phone number to validate.

    Returns:
        bool: True if valid, False otherwise.
    """
    return bool(_PHONE_PATTERN.match(phone_number))

def is_valid_avatar_url(url: str) -> bool:
    return bool(_URL_PATTERN.match(url))

def transaction_day(moment: datetime) -> date:
    """Calendar day of a transaction timestamp, in UTC when it carries a zone."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()

def format_transaction_date(moment: Optional[datetime]) -> str:
    if moment is None:
        return "-"
    return moment.strftime("%d %b %Y, %H:%M")
