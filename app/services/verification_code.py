"""
app/services/verification_code.py

Purpose: Guest list verification codes

- Generates 6-digit numeric confirmation codes
- Codes are never reused: a resend replaces the stored code
"""

import random
import secrets
from typing import Optional

from utils.constants import VERIFICATION_CODE_MAX, VERIFICATION_CODE_MIN

_random = secrets.SystemRandom()


def generate_verification_code(rng: Optional[random.Random] = None) -> str:
    """
    Generates a confirmation code.

    Codes fall in 100000-999999, so they never carry a leading zero
    and are always exactly 6 characters.

    Args:
        rng: Optional random source with randint() (tests pass a seeded one)

    Returns:
        6-digit code string
    """
    source = rng or _random
    return str(source.randint(VERIFICATION_CODE_MIN, VERIFICATION_CODE_MAX))
