"""
Field rules shared by the database services and the local store.
"""
import re
from typing import Optional

from app.core.exceptions import ValidationError

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6

COLOR_PATTERN = re.compile(r"#[0-9a-fA-F]{6}")


def clean_text(value: Optional[str], message: str) -> str:
    """Strip surrounding whitespace and reject empty values."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(message)
    return cleaned


def clean_optional_text(value: Optional[str], message: str) -> Optional[str]:
    """Like clean_text, but None means the field was omitted."""
    if value is None:
        return None
    return clean_text(value, message)


def validate_credentials(username: Optional[str], password: Optional[str]) -> str:
    """
    Check registration input and return the normalized username.

    The password is checked before hashing and is never stripped.
    """
    username = (username or "").strip()
    if len(username) < MIN_USERNAME_LENGTH or len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Invalid username or password: username needs at least {MIN_USERNAME_LENGTH} "
            f"characters and password at least {MIN_PASSWORD_LENGTH}"
        )
    return username


def is_valid_color(value: Optional[str]) -> bool:
    return bool(value) and COLOR_PATTERN.fullmatch(value) is not None


def clean_color(value: Optional[str], default: Optional[str] = None) -> Optional[str]:
    """
    Normalize a topic color to #rrggbb.

    Blank input yields the default; anything else must be a six-digit hex color.
    """
    cleaned = (value or "").strip()
    if not cleaned:
        return default
    if not is_valid_color(cleaned):
        raise ValidationError(f"Invalid color: {cleaned!r}, expected #rrggbb")
    return cleaned.lower()
