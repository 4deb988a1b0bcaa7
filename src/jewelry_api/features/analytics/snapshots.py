"""Conversions from stored documents to the engine's snapshot records."""

from ..customers.models import Customer
from ..jewelry.models import JewelryItem
from ..sales.models import Sale
from .schemas import CustomerSnapshot, JewelrySnapshot, SaleSnapshot


def to_jewelry_snapshot(item: JewelryItem) -> JewelrySnapshot:
    return JewelrySnapshot(
        id=item.public_id,
        category=item.category,
        metal_type=item.metal_type,
        status=item.status,
        selling_price=item.selling_price,
        cost_price=item.cost_price,
        quantity=item.quantity,
        min_stock_level=item.min_stock_level,
        created_at=item.created_at,
        timestamp=item.timestamp,
    )


def to_sale_snapshot(sale: Sale) -> SaleSnapshot:
    return SaleSnapshot(
        id=sale.public_id,
        jewelry_item_id=sale.jewelry_item_id,
        jewelry_item_name=sale.jewelry_item_name,
        quantity=sale.quantity,
        total_amount=sale.total_amount,
        sale_date=sale.sale_date,
    )


def to_customer_snapshot(customer: Customer) -> CustomerSnapshot:
    return CustomerSnapshot(
        id=customer.public_id,
        created_at=customer.created_at,
        timestamp=customer.timestamp,
    )
