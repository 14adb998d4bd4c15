"""Shared validation utilities"""

import re
from datetime import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")
STATE_PATTERN = re.compile(r"^[A-Za-z]{2}$")
CENTS = Decimal("0.01")


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def parse_time_string(value) -> time:
    """
    Accept HH:MM or HH:MM:SS strings (or time objects) and return a time.

    Raises:
        ValueError: If the value is not a valid 24h clock time
    """
    if isinstance(value, time):
        return value.replace(microsecond=0)
    if not isinstance(value, str):
        raise ValueError("Time must be a string in HH:MM format")

    match = TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError("Time must be in HH:MM or HH:MM:SS format")

    hours, minutes, seconds = match.groups()
    return time(int(hours), int(minutes), int(seconds or 0))


def validate_hhmm(value: Optional[str]) -> Optional[str]:
    """Normalize a wall-clock time to HH:MM"""
    if value is None:
        return value
    return parse_time_string(value).strftime("%H:%M")


def validate_state(value: Optional[str]) -> Optional[str]:
    """Two-letter state code, stored upper case"""
    if not value:
        return value
    if not STATE_PATTERN.match(value):
        raise ValueError("State must be a two-letter code")
    return value.upper()


def validate_money(value: Optional[Decimal]) -> Optional[Decimal]:
    """Monetary values: non-negative, at most two decimal places"""
    if value is None:
        return value
    value = Decimal(value)
    if value < 0:
        raise ValueError("Amount cannot be negative")
    if value != value.quantize(CENTS, rounding=ROUND_HALF_UP):
        raise ValueError("Amount must have at most two decimal places")
    return value.quantize(CENTS)
