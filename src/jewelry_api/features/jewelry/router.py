"""API routes for managing jewelry items."""
from fastapi import APIRouter, status, Query, Depends
from typing import Optional, Annotated

from .schemas import (
    JewelryCreate,
    JewelryUpdate,
    JewelryListResponse,
    JewelryDetailResponse,
    JewelryMutationResponse,
    CategoriesResponse,
)
from . import service

from ..auth.models import User as AuthUser
from ..auth.security import get_current_identity, get_current_staff_user

router = APIRouter(
    prefix="/jewelry",
    tags=["Jewelry"],
    dependencies=[Depends(get_current_identity)],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=JewelryListResponse, summary="List jewelry items")
async def list_jewelry(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Number of items per page"),
    category: Optional[str] = Query(None, description="Category to filter by"),
    search: Optional[str] = Query(None, description="Name prefix to match"),
):
    return await service.list_jewelry(page, limit, category, search)


# Declared before /{item_id} so the literal path wins
@router.get("/categories", response_model=CategoriesResponse, summary="List jewelry categories")
async def list_categories():
    return await service.list_categories()


@router.get("/{item_id}", response_model=JewelryDetailResponse, summary="Get a jewelry item")
async def get_jewelry(item_id: str):
    return await service.get_jewelry(item_id)


@router.post(
    "",
    response_model=JewelryMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a jewelry item",
)
async def create_jewelry(
    item_in: JewelryCreate,
    current_staff: Annotated[AuthUser, Depends(get_current_staff_user)],
):
    return await service.create_jewelry(item_in)


@router.put("/{item_id}", response_model=JewelryMutationResponse, summary="Update a jewelry item")
async def update_jewelry(
    item_id: str,
    item_in: JewelryUpdate,
    current_staff: Annotated[AuthUser, Depends(get_current_staff_user)],
):
    return await service.update_jewelry(item_id, item_in)


@router.delete("/{item_id}", response_model=JewelryMutationResponse, summary="Delete a jewelry item")
async def delete_jewelry(
    item_id: str,
    current_staff: Annotated[AuthUser, Depends(get_current_staff_user)],
):
    return await service.delete_jewelry(item_id)
