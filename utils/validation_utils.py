"""
utils/validation_utils.py

Purpose: Input validation

- Phone number validation and E.164 normalization (NANP)
- Verification code sanitization and format checks
- Input sanitization
"""

import re
from typing import Optional

from utils.constants import VERIFICATION_CODE_LENGTH


def digits_only(value: Optional[str]) -> str:
    """
    Strips every character that is not an ASCII digit.

    Args:
        value: Free text (e.g. "(555) 123-4567")

    Returns:
        The digits in order (e.g. "5551234567")
    """
    if not value:
        return ""
    return re.sub(r"[^0-9]", "", value)


def validate_phone_number(phone: str) -> bool:
    """
    Validates a North American phone number typed as free text.

    Accepted: exactly 10 digits, or 11 digits starting with the
    country code 1. Separators, spaces and a leading + are ignored.

    Args:
        phone: Phone number string

    Returns:
        True if the number can be normalized
    """
    cleaned = digits_only(phone)

    if len(cleaned) == 10:
        return True

    return len(cleaned) == 11 and cleaned.startswith("1")


def normalize_phone_number(phone: str) -> Optional[str]:
    """
    Normalizes a phone number to E.164.

    "(555) 123-4567"  -> "+15551234567"
    "1 555 123 4567"  -> "+15551234567"

    Args:
        phone: Phone number string

    Returns:
        E.164 string, or None when the number is not valid
    """
    if not validate_phone_number(phone):
        return None

    cleaned = digits_only(phone)
    if len(cleaned) == 10:
        return f"+1{cleaned}"
    return f"+{cleaned}"


def sanitize_verification_code(code: Optional[str]) -> str:
    """
    Cleans a typed verification code: digits only, at most 6 characters.
    """
    return digits_only(code)[:VERIFICATION_CODE_LENGTH]


def validate_code_format(code: str) -> bool:
    """
    Validates verification code format (must be exactly 6 digits).

    Args:
        code: Code string

    Returns:
        True if valid 6-digit code
    """
    if not code:
        return False

    return bool(re.match(rf"^[0-9]{{{VERIFICATION_CODE_LENGTH}}}$", code))


def sanitize_input(text: str, max_length: int = 1000) -> str:
    """
    Sanitizes user input to prevent injection attacks.

    Args:
        text: Input text
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    text = text[:max_length]

    # Keep alphanumeric, spaces, and common punctuation
    text = re.sub(r"[<>{}\[\]]", "", text)

    # Normalize whitespace
    text = " ".join(text.split())

    return text.strip()
