"""
Electricity token generation and verification.

A token binds ``(meter_number, units, tid)`` to the vending key:

    data      = "{meter_number}|{tid}|{units to 2 decimals}"
    signature = hex(HMAC-SHA256(vending_key, data))
    digits    = ord(c) % 10 for the first 20 hex characters
    token     = "XXXXX-XXXXX-XXXXX-XXXXX"

Nothing is recoverable from the token itself; verification recomputes the
digits from the same triple and compares.  The digit folding has no
collision bound and the comparison is a plain string equality, so this is
an integrity checksum for a legacy wire format, not a security boundary.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Optional, Union

logger = logging.getLogger(__name__)

# 1993-01-01T00:00:00Z as unix seconds.
TID_EPOCH = 725846400

TOKEN_DIGITS = 20
GROUP_SIZE = 5

_TWO_PLACES = Decimal("0.01")

Number = Union[int, float, Decimal]


class TokenGenerationError(RuntimeError):
    """Raised when a token cannot be produced (bad input or HMAC failure)."""


def compute_tid(now: Optional[float] = None) -> int:
    """Seconds elapsed since the 1993-01-01 UTC epoch."""
    current = time.time() if now is None else now
    return int(current) - TID_EPOCH


def format_units(units: Number) -> str:
    """
    Render ``units`` with exactly two fraction digits, rounding half-up on
    the shortest decimal form of the number (``100.005`` -> ``"100.01"``).
    """
    if isinstance(units, bool):
        raise TypeError("units must be a number")
    value = units if isinstance(units, Decimal) else Decimal(str(units))
    if not value.is_finite():
        raise ValueError(f"units must be finite, got {units!r}")
    with localcontext() as ctx:
        # enough digits for every integer place plus two decimals
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return format(value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP), "f")


def build_token_data(meter_number: str, tid: int, units: Number) -> str:
    return f"{meter_number}|{int(tid)}|{format_units(units)}"


def sign(data: str, key: str) -> str:
    """Lower-case hex HMAC-SHA256 of ``data``."""
    return hmac.new(key.encode("utf-8"), data.encode("utf-8"), hashlib.sha256).hexdigest()


def signature_to_digits(signature: str) -> str:
    """Fold the first 20 signature characters to decimal digits, zero-padded."""
    return "".join(
        str(ord(signature[i]) % 10) if i < len(signature) else "0"
        for i in range(TOKEN_DIGITS)
    )


def format_token(digits: str) -> str:
    if len(digits) != TOKEN_DIGITS:
        raise ValueError(f"Numeric token must be {TOKEN_DIGITS} digits")
    return "-".join(
        digits[i:i + GROUP_SIZE] for i in range(0, TOKEN_DIGITS, GROUP_SIZE)
    )


def _numeric_token(meter_number: str, units: Number, tid: int, secret: str) -> str:
    return signature_to_digits(sign(build_token_data(meter_number, tid, units), secret))


def generate_token(
    meter_number: str,
    units: Number,
    *,
    secret: str,
    tid: Optional[int] = None,
) -> str:
    """
    Produce a formatted token for ``meter_number`` and ``units``.

    ``tid`` defaults to :func:`compute_tid` at call time; pass it explicitly
    when the caller needs to report the exact value it was signed with.
    """
    if tid is None:
        tid = compute_tid()
    try:
        token = format_token(_numeric_token(meter_number, units, tid, secret))
    except (TypeError, ValueError, InvalidOperation, AttributeError) as exc:
        logger.error("Failed to generate electricity token for meter %s: %s", meter_number, exc)
        raise TokenGenerationError("Error generating electricity token") from exc

    logger.info("Generated electricity token for meter %s (tid=%d)", meter_number, tid)
    return token


def verify_token(
    token: str,
    meter_number: str,
    units: Number,
    tid: int,
    *,
    secret: str,
) -> bool:
    """
    Recompute the token for the supplied triple and compare.

    Never raises; malformed input gives ``False``.
    """
    try:
        numeric = token.replace("-", "")
        is_valid = numeric == _numeric_token(meter_number, units, tid, secret)
    except Exception as exc:
        logger.error("Error verifying electricity token: %s", exc)
        return False

    if is_valid:
        logger.debug("Electricity token is valid for meter %s", meter_number)
    else:
        logger.warning("Invalid electricity token for meter %s", meter_number)
    return is_valid
