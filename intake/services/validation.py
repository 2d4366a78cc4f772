"""Input format checks for signup fields."""

import re

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]+$")
PHONE_MIN_DIGITS = 10


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def is_valid_phone(phone: str) -> bool:
    """Digits, spaces, dashes, parentheses, optional leading +; at least 10 digits."""
    if not PHONE_RE.match(phone):
        return False
    return sum(ch.isdigit() for ch in phone) >= PHONE_MIN_DIGITS
