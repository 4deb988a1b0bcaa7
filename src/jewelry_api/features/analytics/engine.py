"""
Aggregation engine

Pure functions that turn jewelry, sales and customer snapshots into the
analytics report. Nothing here touches the record store or mutates its
inputs; the same snapshots, range and ``now`` always give the same report.
"""

import datetime
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from ...common.dates import as_utc, shift_month, start_of_month, utcnow
from .schemas import (
    AnalyticsReport,
    CustomerMetrics,
    CustomerSnapshot,
    DateRange,
    InventoryMetrics,
    JewelrySnapshot,
    MonthlyTrend,
    MonthlyTrends,
    ProfitLossMetrics,
    RecentActivity,
    SaleSnapshot,
    SalesMetrics,
    SalesSummary,
    TopSelling,
    TopSellingItem,
)

logger = logging.getLogger(__name__)

TREND_MONTHS = 6
TOP_SELLING_LIMIT = 10
RECENT_ACTIVITY_DAYS = 7

# Fixed so labels never depend on the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def default_date_range(
    start_date: Optional[datetime.datetime] = None,
    end_date: Optional[datetime.datetime] = None,
    now: Optional[datetime.datetime] = None,
) -> DateRange:
    """Fills in missing bounds: the first instant of the current month and ``now``."""
    now = as_utc(now) or utcnow()
    return DateRange(
        start_date=as_utc(start_date) or start_of_month(now),
        end_date=as_utc(end_date) or now,
    )


def compute_sales_metrics(sales: Sequence[SaleSnapshot]) -> SalesMetrics:
    total_revenue = sum(sale.amount for sale in sales)
    total_sales = len(sales)
    return SalesMetrics(
        total_sales=total_sales,
        total_revenue=total_revenue,
        average_order_value=total_revenue / total_sales if total_sales > 0 else 0.0,
    )


def _count_by(labels: Iterable[str]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
    return counts


def compute_inventory_metrics(
    jewelry: Sequence[JewelrySnapshot],
) -> tuple[InventoryMetrics, ProfitLossMetrics]:
    """
    Values the inventory and derives the potential profit.

    Valuation only counts items whose status is "active"; the category and
    metal breakdowns and the low-stock count cover the whole snapshot.

    Returns:
        The inventory metrics and the profit/loss block built from them.
    """
    active_items = [item for item in jewelry if item.status == "active"]
    sold_count = sum(1 for item in jewelry if item.status == "sold")
    low_stock_count = sum(1 for item in jewelry if item.is_low_stock)

    total_value = sum(item.selling_price_or_zero for item in active_items)
    total_cost = sum(item.cost_price_or_zero for item in active_items)
    potential_profit = total_value - total_cost
    profit_margin = (potential_profit / total_value) * 100 if total_value > 0 else 0.0

    inventory = InventoryMetrics(
        total_items=len(jewelry),
        active_items=len(active_items),
        sold_items=sold_count,
        low_stock_items=low_stock_count,
        total_value=total_value,
        total_cost_value=total_cost,
        category_breakdown=_count_by(item.category_label for item in jewelry),
        metal_type_breakdown=_count_by(item.metal_label for item in jewelry),
    )
    profit_loss = ProfitLossMetrics(
        total_revenue=total_value,
        total_cost=total_cost,
        profit=potential_profit,
        gross_profit=potential_profit,
        profit_margin=profit_margin,
    )
    return inventory, profit_loss


def compute_monthly_trends(
    sales: Sequence[SaleSnapshot], now: datetime.datetime
) -> MonthlyTrends:
    """
    Revenue per calendar month for the current month and the five before it.

    Buckets are ordered oldest first. A bucket covers the first instant of
    its month up to, but excluding, the first instant of the next month.
    """
    now = as_utc(now)
    trends: List[MonthlyTrend] = []
    for months_back in range(TREND_MONTHS - 1, -1, -1):
        year, month = shift_month(now.year, now.month, -months_back)
        next_year, next_month = shift_month(year, month, 1)
        bucket_start = datetime.datetime(year, month, 1, tzinfo=datetime.timezone.utc)
        bucket_end = datetime.datetime(next_year, next_month, 1, tzinfo=datetime.timezone.utc)

        revenue = sum(
            sale.amount
            for sale in sales
            if sale.sold_at is not None and bucket_start <= sale.sold_at < bucket_end
        )
        trends.append(MonthlyTrend(month=MONTH_ABBREVIATIONS[month - 1], revenue=revenue))
    return MonthlyTrends(trends=trends)


def compute_top_selling(
    sales: Sequence[SaleSnapshot], limit: int = TOP_SELLING_LIMIT
) -> TopSelling:
    """
    Groups sales by jewelry item and ranks the items by revenue.

    Sales without an item id are skipped. The item name comes from the first
    sale seen for that item. Ties keep first-seen order.
    """
    per_item: Dict[str, dict] = {}
    for sale in sales:
        if not sale.jewelry_item_id:
            continue
        entry = per_item.setdefault(
            sale.jewelry_item_id,
            {"name": sale.item_name, "quantity": 0, "revenue": 0.0},
        )
        entry["quantity"] += sale.quantity_or_zero
        entry["revenue"] += sale.amount

    ranked = sorted(per_item.items(), key=lambda pair: pair[1]["revenue"], reverse=True)
    return TopSelling(
        items=[
            TopSellingItem(
                jewelry_item_id=item_id,
                jewelry_item_name=data["name"],
                quantity=data["quantity"],
                revenue=data["revenue"],
            )
            for item_id, data in ranked[:limit]
        ]
    )


def compute_customer_metrics(
    customers: Sequence[CustomerSnapshot], date_range: DateRange
) -> CustomerMetrics:
    range_start = as_utc(date_range.start_date)
    new_customers = sum(
        1
        for customer in customers
        if customer.acquired_at is not None and customer.acquired_at >= range_start
    )
    total = len(customers)
    return CustomerMetrics(
        total_customers=total,
        new_customers=new_customers,
        returning_customers=total - new_customers,
        active_customers=total,
    )


def compute_recent_activity(
    jewelry: Sequence[JewelrySnapshot],
    sales: Sequence[SaleSnapshot],
    now: datetime.datetime,
) -> RecentActivity:
    """Counts items added and sales made in the trailing week, regardless of the report range."""
    week_ago = as_utc(now) - datetime.timedelta(days=RECENT_ACTIVITY_DAYS)
    return RecentActivity(
        recently_added=sum(
            1 for item in jewelry if item.added_at is not None and item.added_at >= week_ago
        ),
        recent_sales=sum(
            1 for sale in sales if sale.sold_at is not None and sale.sold_at >= week_ago
        ),
    )


def compute_analytics(
    jewelry: Sequence[JewelrySnapshot],
    sales: Sequence[SaleSnapshot],
    customers: Sequence[CustomerSnapshot],
    date_range: DateRange,
    now: Optional[datetime.datetime] = None,
) -> AnalyticsReport:
    """
    Builds the full analytics report.

    The sales snapshot is expected to be filtered to ``date_range`` already;
    every sales figure, including the monthly trend, is computed over exactly
    what is passed in.

    Args:
        jewelry: Every jewelry item.
        sales: Sales inside the reporting range.
        customers: Every customer.
        date_range: The reporting window; its start decides who counts as a
            new customer.
        now: Reference instant for the trend buckets and the recent-activity
            window. Defaults to the current UTC time.

    Returns:
        AnalyticsReport: the nested report.
    """
    now = as_utc(now) or utcnow()
    inventory, profit_loss = compute_inventory_metrics(jewelry)
    report = AnalyticsReport(
        sales=compute_sales_metrics(sales),
        inventory=inventory,
        profit_loss=profit_loss,
        customer=compute_customer_metrics(customers, date_range),
        monthly_trends=compute_monthly_trends(sales, now),
        top_selling=compute_top_selling(sales),
        recent_activity=compute_recent_activity(jewelry, sales, now),
    )
    logger.debug(
        f"Computed analytics over {len(jewelry)} items, {len(sales)} sales, {len(customers)} customers"
    )
    return report


def summarize_sales(sales: Sequence[SaleSnapshot]) -> SalesSummary:
    """Revenue, units and transaction count for a set of sales."""
    total_amount = sum(sale.amount for sale in sales)
    transactions = len(sales)
    return SalesSummary(
        total_sales=total_amount,
        total_items=sum(sale.quantity_or_zero for sale in sales),
        total_transactions=transactions,
        average_sale_value=total_amount / transactions if transactions > 0 else 0.0,
    )
