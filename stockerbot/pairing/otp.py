"""One-time pairing codes."""

import random
import re

# Constants
OTP_MIN = 1000
OTP_MAX = 9999

_CODE_PATTERN = re.compile(r"[0-9]{4}")


def generate_otp(rng: random.Random | None = None) -> str:
    """Generate a 4-digit pairing code (1000-9999, never a leading zero)."""
    rng = rng or random
    return str(rng.randint(OTP_MIN, OTP_MAX))


def looks_like_code(text: str) -> bool:
    """Check whether text has the shape of a pairing code (exactly 4 digits)."""
    return _CODE_PATTERN.fullmatch(text) is not None
