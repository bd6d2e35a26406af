"""Shared validation utilities"""

import re
from datetime import datetime, timezone
from typing import Any, Optional

PHONE_PATTERN = re.compile(r"^[0-9]{10}$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def is_valid_phone(phone: Any) -> bool:
    """True for exactly 10 decimal digits, nothing else"""
    return isinstance(phone, str) and PHONE_PATTERN.fullmatch(phone) is not None


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase, stripped email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")

    return email


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a client supplied timestamp into naive UTC.

    Devices report epoch milliseconds (as a number or a numeric string);
    ISO-8601 strings are accepted as well.

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if value is None or isinstance(value, bool):
        raise ValueError("Invalid date")

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).replace(tzinfo=None)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"Invalid date: {value}") from e

    if isinstance(value, str):
        text = value.strip()
        if re.fullmatch(r"-?\d+(\.\d+)?", text):
            # Huge digit strings become inf and are rejected by the numeric branch
            return parse_timestamp(float(text))
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except (OverflowError, ValueError) as e:
            raise ValueError(f"Invalid date: {value}") from e
        return parsed

    if isinstance(value, datetime):
        return value

    raise ValueError(f"Invalid date: {value}")


LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` anywhere, with its wildcards taken literally"""
    escaped = term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
