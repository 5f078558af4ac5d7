"""
Random identifier generators (national IDs, plates, meters, chassis numbers).

Every generator takes an optional ``rng``.  When omitted, a fresh
``random.SystemRandom`` is created for that call, so there is no shared
module-level random state and tests can pass a seeded ``random.Random``.
"""

from __future__ import annotations

import random
import string
from typing import Optional

ALPHANUMERIC = string.ascii_uppercase + string.digits
LETTERS = string.ascii_uppercase
DIGITS = string.digits
# VIN alphabet without I, O, Q
CHASSIS_CHARS = "ABCDEFGHJKLMNPRZ0123456789"


def _pick(alphabet: str, length: int, rng: random.Random) -> str:
    return "".join(rng.choice(alphabet) for _ in range(length))


def _rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.SystemRandom()


def generate_national_id(rng: Optional[random.Random] = None) -> str:
    """16 uppercase alphanumeric characters."""
    return _pick(ALPHANUMERIC, 16, _rng(rng))


def generate_car_plate(rng: Optional[random.Random] = None) -> str:
    """Plate of the form ``XXX123X``."""
    r = _rng(rng)
    return _pick(LETTERS, 3, r) + _pick(DIGITS, 3, r) + _pick(LETTERS, 1, r)


def generate_meter_number(rng: Optional[random.Random] = None) -> str:
    return _pick(DIGITS, 6, _rng(rng))


def generate_chassis_number(rng: Optional[random.Random] = None) -> str:
    """17 characters matching ``^[A-HJ-NPR-Z0-9]{17}$``."""
    return _pick(CHASSIS_CHARS, 17, _rng(rng))
