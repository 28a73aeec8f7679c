# backend/utils/barcode.py
import random

from config import settings

EAN13_LENGTH = 13
BODY_DIGITS = 9


def ean13_check_digit(payload: str) -> int:
    """Check digit for a 12-digit EAN-13 payload (weights 1/3 from the left)."""
    if len(payload) != EAN13_LENGTH - 1 or not payload.isdigit():
        raise ValueError(f"EAN-13 payload must be 12 digits, got {payload!r}")
    total = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(payload))
    return (10 - total % 10) % 10


def is_valid_ean13(code: str) -> bool:
    if not code or len(code) != EAN13_LENGTH or not code.isdigit():
        return False
    return ean13_check_digit(code[:-1]) == int(code[-1])


def generate_barcode(prefix: str = None) -> str:
    """
    Returns a random, checksum-valid EAN-13 code.

    The prefix is the 3-digit country/organisation code (settings.BARCODE_PREFIX
    by default); the 9-digit body is zero-padded so the payload is always 12
    digits long. Uniqueness is not checked here.
    """
    prefix = prefix if prefix is not None else settings.BARCODE_PREFIX
    body = str(random.randrange(10 ** BODY_DIGITS)).zfill(BODY_DIGITS)
    payload = prefix + body
    return payload + str(ean13_check_digit(payload))
