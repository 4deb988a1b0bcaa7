"""API routes for recording and reviewing sales."""
import datetime
from fastapi import APIRouter, status, Query, Depends
from typing import Optional, Annotated

from .schemas import (
    SaleCreate,
    SaleUpdate,
    SaleListResponse,
    SaleDetailResponse,
    SaleMutationResponse,
    SalesSummaryResponse,
)
from . import service

from ..auth.models import User as AuthUser
from ..auth.security import get_current_identity, get_current_staff_user

router = APIRouter(
    prefix="/sales",
    tags=["Sales"],
    dependencies=[Depends(get_current_identity)],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=SaleListResponse, summary="List sales")
async def list_sales(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Number of sales per page"),
    start_date: Optional[datetime.datetime] = Query(None, alias="startDate", description="ISO-8601 lower bound"),
    end_date: Optional[datetime.datetime] = Query(None, alias="endDate", description="ISO-8601 upper bound"),
):
    return await service.list_sales(page, limit, start_date, end_date)


# Declared before /{sale_id} so the literal path wins
@router.get("/analytics", response_model=SalesSummaryResponse, summary="Sales totals for a period")
async def get_sales_summary(
    start_date: Optional[datetime.datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime.datetime] = Query(None, alias="endDate"),
):
    return await service.get_sales_summary(start_date, end_date)


@router.get("/{sale_id}", response_model=SaleDetailResponse, summary="Get a sale")
async def get_sale(sale_id: str):
    return await service.get_sale(sale_id)


@router.post(
    "",
    response_model=SaleMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a sale",
)
async def create_sale(
    sale_in: SaleCreate,
    current_staff: Annotated[AuthUser, Depends(get_current_staff_user)],
):
    return await service.create_sale(sale_in)


@router.put("/{sale_id}", response_model=SaleMutationResponse, summary="Update a sale")
async def update_sale(
    sale_id: str,
    sale_in: SaleUpdate,
    current_staff: Annotated[AuthUser, Depends(get_current_staff_user)],
):
    return await service.update_sale(sale_id, sale_in)


@router.delete("/{sale_id}", response_model=SaleMutationResponse, summary="Delete a sale")
async def delete_sale(
    sale_id: str,
    current_staff: Annotated[AuthUser, Depends(get_current_staff_user)],
):
    return await service.delete_sale(sale_id)
