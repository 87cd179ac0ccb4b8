"""Parsers for free-text replies."""

import re
import unicodedata
from decimal import Decimal, InvalidOperation

_AMOUNT_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")
_MAX_AMOUNT_LENGTH = 12
_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

_AFFIRMATIVE = {"yes", "si"}
_NEGATIVE = {"no"}


def normalize_token(text: str) -> str:
    """Lowercase text and strip accents and surrounding whitespace."""
    decomposed = unicodedata.normalize("NFKD", text.strip())
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.casefold()


def parse_amount(text: str) -> Decimal | None:
    """Parse a non-negative decimal number written in plain notation."""
    cleaned = text.strip()
    if len(cleaned) > _MAX_AMOUNT_LENGTH or not _AMOUNT_PATTERN.fullmatch(cleaned):
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def parse_selector(text: str, size: int) -> int | None:
    """Parse a 1-based menu choice, returning None when out of range."""
    cleaned = text.strip()
    if not cleaned.isascii() or not cleaned.isdigit():
        return None
    value = int(cleaned)
    if 1 <= value <= size:
        return value
    return None


def is_affirmative(text: str) -> bool:
    return normalize_token(text) in _AFFIRMATIVE


def is_negative(text: str) -> bool:
    return normalize_token(text) in _NEGATIVE


def is_valid_email(text: str) -> bool:
    """Check the simple local@domain.tld shape."""
    return _EMAIL_PATTERN.fullmatch(text.strip()) is not None
