"""
FastAPI dependencies for bearer-token authentication.

``get_current_subject`` only trusts a token after ``is_token_valid`` has
accepted it; any failure is reported as 401 rather than raised further.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.jwt import extract_username, is_token_valid
from config.settings import config

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_subject(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> str:
    """
    Extract and verify the Bearer token, returning its ``sub`` claim
    (the user's email).
    """
    if credentials is None or not credentials.credentials.strip():
        raise _unauthorized("Missing Bearer token")

    token = credentials.credentials.strip()
    if not is_token_valid(token, config.jwt_secret):
        raise _unauthorized("Invalid or expired token")

    subject = extract_username(token)
    if subject is None:
        raise _unauthorized("Token has no subject")

    logger.debug("Authenticated subject %s", subject)
    return subject
