import logging
from typing import Optional
from fastapi import HTTPException, status

from ...common.pagination import paginate
from .models import JewelryItem
from .schemas import (
    JewelryCreate,
    JewelryUpdate,
    JewelryResponse,
    JewelryListResponse,
    JewelryDetailResponse,
    JewelryMutationResponse,
    CategoriesResponse,
)

logger = logging.getLogger(__name__)


def _to_jewelry_response(item: JewelryItem) -> JewelryResponse:
    """Converts a JewelryItem model instance to a JewelryResponse schema."""
    return JewelryResponse(
        id=item.public_id,
        name=item.name,
        sku=item.sku,
        category=item.category,
        metal_type=item.metal_type,
        purity=item.purity,
        weight=item.weight,
        description=item.description,
        cost_price=item.cost_price,
        selling_price=item.selling_price,
        quantity=item.quantity,
        min_stock_level=item.min_stock_level,
        status=item.status,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


async def _get_item_or_404(item_id: str) -> JewelryItem:
    item = await JewelryItem.get_or_none(public_id=item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Jewelry not found")
    return item


async def list_jewelry(
    page: int, limit: int, category: Optional[str], search: Optional[str]
) -> JewelryListResponse:
    """
    Lists jewelry items, newest first.

    Args:
        page: The page number.
        limit: The number of items per page.
        category: Exact category label to filter by.
        search: Prefix the item name must start with.

    Returns:
        A page of jewelry items with paging metadata.
    """
    query = JewelryItem.all()
    if category:
        query = query.filter(category=category)
    if search:
        query = query.filter(name__startswith=search)

    items, total, total_pages = await paginate(query, page, limit, "-created_at")
    return JewelryListResponse(
        jewelry=[_to_jewelry_response(item) for item in items],
        total_pages=total_pages,
        current_page=page,
        total=total,
    )


async def get_jewelry(item_id: str) -> JewelryDetailResponse:
    item = await _get_item_or_404(item_id)
    return JewelryDetailResponse(jewelry=_to_jewelry_response(item))


async def create_jewelry(item_in: JewelryCreate) -> JewelryMutationResponse:
    """
    Creates a new jewelry item.

    Args:
        item_in: The data for the new item.

    Returns:
        The created item wrapped in the mutation envelope.
    """
    try:
        item = await JewelryItem.create(**item_in.model_dump())
    except Exception as e:
        logger.error(f"Error creating jewelry item: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        )
    return JewelryMutationResponse(
        message="Jewelry created successfully", jewelry=_to_jewelry_response(item)
    )


async def update_jewelry(item_id: str, item_in: JewelryUpdate) -> JewelryMutationResponse:
    """
    Applies a partial update to a jewelry item.

    Args:
        item_id: The public ID of the item to update.
        item_in: Fields to change; unset fields are left alone.

    Returns:
        The updated item wrapped in the mutation envelope.
    """
    item = await _get_item_or_404(item_id)

    update_data = item_in.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No fields for update"
        )
    if "name" in update_data and not update_data["name"]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Jewelry name cannot be cleared"
        )
    for key, value in update_data.items():
        setattr(item, key, value)
    try:
        await item.save()
    except Exception as e:
        logger.error(f"Error updating jewelry item {item_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        )
    return JewelryMutationResponse(
        message="Jewelry updated successfully", jewelry=_to_jewelry_response(item)
    )


async def delete_jewelry(item_id: str) -> JewelryMutationResponse:
    item = await _get_item_or_404(item_id)
    await item.delete()
    logger.info(f"Deleted jewelry item {item_id}")
    return JewelryMutationResponse(message="Jewelry deleted successfully")


async def list_categories() -> CategoriesResponse:
    """Distinct non-empty categories, in first-seen order."""
    labels = await JewelryItem.all().order_by("id").values_list("category", flat=True)
    return CategoriesResponse(categories=list(dict.fromkeys(label for label in labels if label)))
