"""
Electricity token vending routes.

Route prefix: /api/v1/electricity/tokens
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict

from config.settings import config
from electricity.token import TokenGenerationError, compute_tid, generate_token, verify_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["electricity"])

SERVICE_VERSION = "1.0.0"


class GenerateRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    meter_number: str
    units: float


class VerifyRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    token: str
    meter_number: str
    units: float
    tid: int


class PurchaseRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    meter_number: str
    amount: float


def _require(value: str, name: str) -> str:
    if not value or not value.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{name} is required")
    return value


def _issue(meter_number: str, units: float) -> tuple[str, int]:
    tid = compute_tid()
    try:
        token = generate_token(meter_number, units, secret=config.vending_key, tid=tid)
    except TokenGenerationError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    return token, tid


@router.post("/generate")
async def generate(req: GenerateRequest) -> Dict[str, Any]:
    """Generate a token for ``units`` on a meter."""
    _require(req.meter_number, "Meter number")
    if req.units <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Units must be greater than 0")

    token, tid = _issue(req.meter_number, req.units)
    return {
        "success": True,
        "message": "Token generated successfully",
        "data": {
            "token": token,
            "meter_number": req.meter_number,
            "units": req.units,
            "tid": tid,
            "generated_at": datetime.now(timezone.utc),
            "expires_in": f"{config.token_validity_days} days",
        },
    }


@router.post("/verify")
async def verify(req: VerifyRequest) -> Dict[str, Any]:
    """Check a token against the meter, units and tid it was issued for."""
    _require(req.token, "Token")
    _require(req.meter_number, "Meter number")

    is_valid = verify_token(
        req.token, req.meter_number, req.units, req.tid, secret=config.vending_key
    )
    logger.info(
        "Token verification for meter %s: %s", req.meter_number, "VALID" if is_valid else "INVALID"
    )
    return {
        "success": True,
        "message": "Token is valid" if is_valid else "Token is invalid",
        "data": {
            "token": req.token,
            "meter_number": req.meter_number,
            "units": req.units,
            "tid": req.tid,
            "is_valid": is_valid,
            "verified_at": datetime.now(timezone.utc),
        },
    }


@router.post("/purchase")
async def purchase(req: PurchaseRequest) -> Dict[str, Any]:
    """Convert a payment into units at the configured rate and issue a token."""
    _require(req.meter_number, "Meter number")
    if req.amount <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Amount must be greater than 0")

    rate = config.electricity_rate
    units = req.amount / rate
    token, tid = _issue(req.meter_number, units)
    now = datetime.now(timezone.utc)

    logger.info("Token purchased for meter %s: %.2f for %.2f units", req.meter_number, req.amount, units)
    return {
        "success": True,
        "message": "Token purchased successfully",
        "data": {
            "transaction_id": f"TXN-{int(time.time() * 1000)}",
            "token": token,
            "meter_number": req.meter_number,
            "amount_paid": req.amount,
            "units_allocated": round(units, 2),
            "rate": rate,
            "tid": tid,
            "purchase_date": now,
            "expiry_date": now + timedelta(days=config.token_validity_days),
        },
    }


@router.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "success": True,
        "message": "Electricity Token Service is running",
        "timestamp": datetime.now(timezone.utc),
        "version": SERVICE_VERSION,
    }
