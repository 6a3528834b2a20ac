"""Card number helpers: display masking, brand inference and recovery.

Card numbers are display data here. Only the last four digits are ever
shown once a value is long enough to be a real PAN.

Usage:
    mask_card("4532123456789012")   # "••••9012"
    brand_for_card("371449635398431")  # "AMEX"
"""

from __future__ import annotations

import re

MASK = "••••"
MIN_MASK_LENGTH = 12
NOT_AVAILABLE = "N/A"
DEFAULT_BRAND = "VISA"

BRAND_PREFIXES: tuple[tuple[str, str], ...] = (
    ("6011", "DISCOVER"),
    ("644", "DISCOVER"),
    ("65", "DISCOVER"),
    ("34", "AMEX"),
    ("37", "AMEX"),
    ("4", "VISA"),
    ("5", "MASTERCARD"),
)

CARD_RUN_PATTERN = re.compile(r"(?<!\d)\d{16}(?!\d)")


def mask_card(card_number: str | None) -> str:
    """Hide all but the last four digits of numbers 12 characters or longer."""
    if card_number is None:
        return NOT_AVAILABLE
    value = str(card_number).strip()
    if not value or value == NOT_AVAILABLE:
        return NOT_AVAILABLE
    if len(value) >= MIN_MASK_LENGTH:
        return f"{MASK}{value[-4:]}"
    return value


def brand_for_card(card_number: str | None) -> str:
    """Card network inferred from the leading digits, VISA when unknown."""
    if not card_number:
        return DEFAULT_BRAND
    digits = str(card_number).strip()
    for prefix, brand in BRAND_PREFIXES:
        if digits.startswith(prefix):
            return brand
    return DEFAULT_BRAND


def find_card_number(text: str | None) -> str | None:
    """First standalone 16-digit run in free text, if any."""
    if not text:
        return None
    match = CARD_RUN_PATTERN.search(text)
    return match.group(0) if match else None
