"""API routes for managing customers."""
from fastapi import APIRouter, status, Query, Depends
from typing import Optional, Annotated

from .schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerListResponse,
    CustomerDetailResponse,
    CustomerMutationResponse,
)
from . import service

from ..auth.models import User as AuthUser
from ..auth.security import get_current_identity, get_current_staff_user

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    dependencies=[Depends(get_current_identity)],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=CustomerListResponse, summary="List customers")
async def list_customers(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Number of customers per page"),
    search: Optional[str] = Query(None, description="Name prefix to match"),
):
    return await service.list_customers(page, limit, search)


@router.get("/{customer_id}", response_model=CustomerDetailResponse, summary="Get a customer")
async def get_customer(customer_id: str):
    return await service.get_customer(customer_id)


@router.post(
    "",
    response_model=CustomerMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a customer",
)
async def create_customer(
    customer_in: CustomerCreate,
    current_staff: Annotated[AuthUser, Depends(get_current_staff_user)],
):
    return await service.create_customer(customer_in)


@router.put("/{customer_id}", response_model=CustomerMutationResponse, summary="Update a customer")
async def update_customer(
    customer_id: str,
    customer_in: CustomerUpdate,
    current_staff: Annotated[AuthUser, Depends(get_current_staff_user)],
):
    return await service.update_customer(customer_id, customer_in)


@router.delete("/{customer_id}", response_model=CustomerMutationResponse, summary="Delete a customer")
async def delete_customer(
    customer_id: str,
    current_staff: Annotated[AuthUser, Depends(get_current_staff_user)],
):
    return await service.delete_customer(customer_id)
