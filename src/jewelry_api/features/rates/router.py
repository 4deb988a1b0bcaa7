"""API routes for gold and silver rates."""
from fastapi import APIRouter, Depends
from typing import Annotated

from .schemas import RatesUpdate, RatesResponse, RateHistoryResponse
from . import service

from ..auth.models import User as AuthUser
from ..auth.security import get_current_identity, get_current_staff_user

router = APIRouter(
    prefix="/rates",
    tags=["Rates"],
    dependencies=[Depends(get_current_identity)],
)


@router.get("", response_model=RatesResponse, summary="Current metal rates")
async def get_rates():
    return await service.get_rates()


@router.put("", response_model=RatesResponse, summary="Update metal rates")
async def update_rates(
    rates_in: RatesUpdate,
    current_staff: Annotated[AuthUser, Depends(get_current_staff_user)],
):
    return await service.update_rates(rates_in, current_staff)


@router.get("/history", response_model=RateHistoryResponse, summary="Recent rate changes")
async def get_rate_history():
    return await service.get_rate_history()
