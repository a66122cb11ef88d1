"""Shared validation utilities"""

import re
from typing import Optional

TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9](:[0-5][0-9])?$")
COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


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

    if not EMAIL_PATTERN.match(email):
        raise ValueError("Email must be a valid email address")

    return email


def validate_time_of_day(value: Optional[str]) -> Optional[str]:
    """Accept ``HH:MM`` or ``HH:MM:SS`` on a 24-hour clock"""
    if value is None:
        return value

    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Start time must be in format HH:MM or HH:MM:SS")

    return value


def validate_hex_color(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value

    if not COLOR_PATTERN.match(value):
        raise ValueError("Color must be a valid hex color (e.g., #FF6B6B)")

    return value


def validate_password_strength(password: str) -> str:
    """At least 8 characters with an uppercase letter, a lowercase letter and a digit"""
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")

    if not (
        re.search(r"[a-z]", password) and re.search(r"[A-Z]", password) and re.search(r"\d", password)
    ):
        raise ValueError(
            "Password must contain at least one uppercase letter, one lowercase letter, and one number"
        )

    return password
