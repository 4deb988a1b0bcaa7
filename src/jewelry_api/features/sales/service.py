import datetime
import logging
from typing import Optional
from fastapi import HTTPException, status
from tortoise.queryset import QuerySet

from ...common.dates import as_utc, utcnow
from ...common.pagination import paginate
from ..analytics.engine import summarize_sales
from ..analytics.snapshots import to_sale_snapshot
from .models import Sale
from .schemas import (
    SaleCreate,
    SaleUpdate,
    SaleResponse,
    SaleListResponse,
    SaleDetailResponse,
    SaleMutationResponse,
    SalesSummaryResponse,
)

logger = logging.getLogger(__name__)


def _to_sale_response(sale: Sale) -> SaleResponse:
    """Converts a Sale model instance to a SaleResponse schema."""
    return SaleResponse(
        id=sale.public_id,
        jewelry_item_id=sale.jewelry_item_id,
        jewelry_item_name=sale.jewelry_item_name,
        customer_id=sale.customer_id,
        customer_name=sale.customer_name,
        payment_method=sale.payment_method,
        notes=sale.notes,
        quantity=sale.quantity,
        unit_price=sale.unit_price,
        total_amount=sale.total_amount,
        sale_date=sale.sale_date,
        created_at=sale.created_at,
        updated_at=sale.updated_at,
    )


def sales_between(
    start_date: Optional[datetime.datetime], end_date: Optional[datetime.datetime]
) -> QuerySet:
    """Sales whose sale_date falls inside the inclusive [start_date, end_date] window.

    Either bound may be omitted.
    """
    query = Sale.all()
    if start_date:
        query = query.filter(sale_date__gte=as_utc(start_date))
    if end_date:
        query = query.filter(sale_date__lte=as_utc(end_date))
    return query


async def _get_sale_or_404(sale_id: str) -> Sale:
    sale = await Sale.get_or_none(public_id=sale_id)
    if not sale:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sale not found")
    return sale


async def list_sales(
    page: int,
    limit: int,
    start_date: Optional[datetime.datetime],
    end_date: Optional[datetime.datetime],
) -> SaleListResponse:
    """
    Lists sales, most recent sale_date first.

    Args:
        page: The page number.
        limit: The number of sales per page.
        start_date: Optional inclusive lower bound on sale_date.
        end_date: Optional inclusive upper bound on sale_date.

    Returns:
        A page of sales with paging metadata.
    """
    sales, total, total_pages = await paginate(
        sales_between(start_date, end_date), page, limit, "-sale_date"
    )
    return SaleListResponse(
        sales=[_to_sale_response(sale) for sale in sales],
        total_pages=total_pages,
        current_page=page,
        total=total,
    )


async def get_sale(sale_id: str) -> SaleDetailResponse:
    sale = await _get_sale_or_404(sale_id)
    return SaleDetailResponse(sale=_to_sale_response(sale))


async def create_sale(sale_in: SaleCreate) -> SaleMutationResponse:
    """
    Records a sale.

    When ``total_amount`` is omitted and both quantity and unit price are
    given, it is derived from them. Quantity is stored as given. When
    ``sale_date`` is omitted the sale is dated now.

    Args:
        sale_in: The data for the new sale.

    Returns:
        The recorded sale wrapped in the mutation envelope.
    """
    sale_data = sale_in.model_dump()
    if (
        sale_data["total_amount"] is None
        and sale_data["unit_price"] is not None
        and sale_data["quantity"] is not None
    ):
        sale_data["total_amount"] = sale_data["unit_price"] * sale_data["quantity"]
    sale_data["sale_date"] = as_utc(sale_data["sale_date"]) or utcnow()
    try:
        sale = await Sale.create(**sale_data)
    except Exception as e:
        logger.error(f"Error recording sale: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        )
    logger.debug(f"Recorded sale {sale.public_id} for item {sale.jewelry_item_id}")
    return SaleMutationResponse(message="Sale recorded successfully", sale=_to_sale_response(sale))


async def update_sale(sale_id: str, sale_in: SaleUpdate) -> SaleMutationResponse:
    sale = await _get_sale_or_404(sale_id)

    update_data = sale_in.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No fields for update"
        )
    if "sale_date" in update_data:
        if update_data["sale_date"] is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="saleDate cannot be cleared"
            )
        update_data["sale_date"] = as_utc(update_data["sale_date"])

    for key, value in update_data.items():
        setattr(sale, key, value)
    try:
        await sale.save()
    except Exception as e:
        logger.error(f"Error updating sale {sale_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        )
    return SaleMutationResponse(message="Sale updated successfully", sale=_to_sale_response(sale))


async def delete_sale(sale_id: str) -> SaleMutationResponse:
    sale = await _get_sale_or_404(sale_id)
    await sale.delete()
    logger.info(f"Deleted sale {sale_id}")
    return SaleMutationResponse(message="Sale deleted successfully")


async def get_sales_summary(
    start_date: Optional[datetime.datetime], end_date: Optional[datetime.datetime]
) -> SalesSummaryResponse:
    """Totals over the sales in the optional date window."""
    sales = await sales_between(start_date, end_date)
    return SalesSummaryResponse(analytics=summarize_sales([to_sale_snapshot(sale) for sale in sales]))
