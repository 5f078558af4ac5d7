"""
Auth API routes — register, login, current user.

Route prefix: /api/v1/auth
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import db_session, get_current_user
from auth.jwt import create_token
from auth.models import AccountStatus, Role, User
from auth.password import hash_password, verify_password
from config.settings import config

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

_PASSWORD_RE = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)[A-Za-z\d]{8,}$")


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=15, pattern=r"^[A-Za-z]+$")
    last_name: str = Field(..., min_length=1, max_length=15, pattern=r"^[A-Za-z]+$")
    email: EmailStr
    mobile: str = Field(..., pattern=r"^\+?[1-9]\d{1,14}$")
    dob: date
    password: str = Field(..., min_length=8, max_length=50)
    national_id: str = Field(..., pattern=r"^[A-Za-z0-9\-]{16}$")

    @field_validator("email")
    @classmethod
    def _check_email_length(cls, value: str) -> str:
        if len(value) > 50:
            raise ValueError("Email must be 50 characters or less")
        return value

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        if not _PASSWORD_RE.match(value):
            raise ValueError("Password must contain at least one letter and one number")
        return value

    @field_validator("dob")
    @classmethod
    def _check_dob(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("Date of birth must be in the past or present")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=50)


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    mobile: str
    national_id: str
    dob: date | None
    status: str
    role: str


def _user_payload(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "mobile": user.mobile,
        "national_id": user.national_id,
        "dob": user.dob,
        "status": user.status.value,
        "role": user.role.value,
    }


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user."""
    result = await session.execute(
        select(User).where(
            or_(
                User.email == req.email,
                User.mobile == req.mobile,
                User.national_id == req.national_id,
            )
        )
    )
    if result.scalars().first() is not None:
        logger.warning("Registration rejected for %s: duplicate identity", req.email)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email, mobile or national ID already registered",
        )

    user = User(
        first_name=req.first_name,
        last_name=req.last_name,
        email=req.email,
        mobile=req.mobile,
        national_id=req.national_id,
        dob=req.dob,
        password_hash=hash_password(req.password),
        status=AccountStatus.ACTIVE,
        role=Role.USER,
    )
    session.add(user)
    await session.flush()

    logger.info("Registered user %s (%s)", user.email, user.id)
    return _user_payload(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Login with email + password and receive a bearer token."""
    result = await session.execute(
        select(User).where(User.email == req.email)
    )
    user = result.scalar_one_or_none()

    if user is None or not verify_password(req.password, user.password_hash):
        logger.warning("Failed login for %s", req.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if user.status is not AccountStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is not active",
        )

    token = create_token(
        config.jwt_secret,
        user.email,
        config.jwt_issuer,
        config.jwt_expiry_seconds,
    )
    logger.info("Login: %s (%s)", user.email, user.id)
    return {"token": token}


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)) -> Dict[str, Any]:
    """Profile of the authenticated user."""
    return _user_payload(user)
