"""
HS256 JSON Web Token creation and verification.

Tokens are three base64url (unpadded) segments ``header.payload.signature``.
The signature is the raw HMAC-SHA256 of ``header + "." + payload`` encoded
once.  Validation never raises: malformed, tampered or expired tokens all
yield ``False`` / ``None`` so callers can treat them as unauthenticated.

The secret is passed on every call; callers read it from
``config.jwt_secret`` (env var: ``JWT_SECRET``).
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

_HEADER = {"alg": "HS256", "typ": "JWT"}
_SEPARATOR = "."


class TokenCreationError(RuntimeError):
    """Raised when a token cannot be serialized or signed."""


def _b64url_encode(raw: bytes) -> str:
    return urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64url_decode(segment: str) -> bytes:
    padding = "=" * (-len(segment) % 4)
    return urlsafe_b64decode(segment + padding)


def _sign(signing_input: str, secret_key: str) -> str:
    digest = hmac.new(
        secret_key.encode("utf-8"), signing_input.encode("utf-8"), hashlib.sha256
    ).digest()
    return _b64url_encode(digest)


def _split(token: str) -> Optional[list[str]]:
    parts = token.split(_SEPARATOR)
    if len(parts) != 3:
        return None
    return parts


def _now(now: Optional[float]) -> int:
    return int(time.time() if now is None else now)


def create_token(
    secret_key: str,
    subject: str,
    issuer: str,
    expiry_in_seconds: int,
    *,
    now: Optional[float] = None,
) -> str:
    """Create a signed token for ``subject`` valid for ``expiry_in_seconds``."""
    try:
        issued_at = _now(now)
        payload = {
            "sub": subject,
            "iss": issuer,
            "iat": issued_at,
            "exp": issued_at + int(expiry_in_seconds),
        }
        encoded_header = _b64url_encode(
            json.dumps(_HEADER, separators=(",", ":")).encode("utf-8")
        )
        encoded_payload = _b64url_encode(
            json.dumps(payload, separators=(",", ":")).encode("utf-8")
        )
        signature = _sign(encoded_header + _SEPARATOR + encoded_payload, secret_key)
    except (TypeError, ValueError, AttributeError) as exc:
        logger.error("Failed to create JWT for subject %s: %s", subject, exc)
        raise TokenCreationError("Error creating JWT token") from exc

    logger.info("Created JWT for subject %s", subject)
    return _SEPARATOR.join((encoded_header, encoded_payload, signature))


def is_token_valid(token: str, secret_key: str, *, now: Optional[float] = None) -> bool:
    """
    Check the signature of ``token`` against ``secret_key`` and its expiry.

    Returns ``False`` on any failure instead of raising.
    """
    try:
        parts = _split(token)
        if parts is None:
            logger.warning("Invalid JWT format: expected 3 segments")
            return False

        expected = _sign(parts[0] + _SEPARATOR + parts[1], secret_key)
        if expected != parts[2]:
            logger.warning("Invalid JWT: signature mismatch")
            return False

        if is_token_expired(token, now=now):
            logger.warning("JWT is expired")
            return False
    except Exception as exc:
        logger.error("Error validating JWT: %s", exc)
        return False

    logger.debug("JWT is valid")
    return True


def is_token_expired(token: str, *, now: Optional[float] = None) -> bool:
    """A token without a usable ``exp`` claim counts as expired."""
    exp = extract_claim(token, "exp", int)
    if exp is None:
        return True
    return exp <= _now(now)


def extract_username(token: str) -> Optional[str]:
    """
    Return the ``sub`` claim.  The signature is NOT checked here, so only
    trust the result after :func:`is_token_valid` succeeded.
    """
    return extract_claim(token, "sub", str)


def extract_claim(token: str, claim: str, expected_type: type) -> Any:
    """
    Read ``claim`` from the payload if it is an instance of ``expected_type``.

    Integer claims are widened when a ``float`` is expected.  Booleans are
    never accepted as numbers.  Missing claims, type mismatches and
    undecodable tokens give ``None``.
    """
    payload = _decode_payload(token)
    if payload is None:
        return None

    value = payload.get(claim)
    if value is None:
        logger.debug("Claim %s not found in JWT", claim)
        return None

    if isinstance(value, bool) and expected_type is not bool:
        return None
    if expected_type is float and isinstance(value, int):
        return float(value)
    if isinstance(value, expected_type):
        return value

    logger.warning(
        "Claim %s has invalid type (expected %s, got %s)",
        claim,
        expected_type.__name__,
        type(value).__name__,
    )
    return None


def _decode_payload(token: str) -> Optional[Dict[str, Any]]:
    try:
        parts = _split(token)
        if parts is None:
            return None
        payload = json.loads(_b64url_decode(parts[1]).decode("utf-8"))
    except (ValueError, TypeError, AttributeError) as exc:
        logger.debug("Could not decode JWT payload: %s", exc)
        return None
    return payload if isinstance(payload, dict) else None
