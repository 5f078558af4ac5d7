"""
Utility routes returning freshly generated identifiers.

Route prefix: /api/v1/utility
"""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter

from utils.generators import (
    generate_car_plate,
    generate_chassis_number,
    generate_meter_number,
    generate_national_id,
)

router = APIRouter(tags=["utility"])


@router.get("/national-id")
async def national_id() -> Dict[str, str]:
    return {"national_id": generate_national_id()}


@router.get("/car-plate")
async def car_plate() -> Dict[str, str]:
    return {"car_plate": generate_car_plate()}


@router.get("/meter-number")
async def meter_number() -> Dict[str, str]:
    return {"meter_number": generate_meter_number()}


@router.get("/chassis-number")
async def chassis_number() -> Dict[str, str]:
    return {"chassis_number": generate_chassis_number()}
