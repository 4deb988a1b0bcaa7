"""
Analytics service

Fetches the three snapshots the aggregation engine needs and wraps the
report in the API envelope.
"""

import asyncio
import datetime
import logging
from typing import Optional

from ...common.dates import utcnow
from ..customers.models import Customer
from ..jewelry.models import JewelryItem
from ..sales.service import sales_between
from .engine import compute_analytics, default_date_range
from .schemas import AnalyticsResponse, DateRange, DateRangeOut
from .snapshots import to_customer_snapshot, to_jewelry_snapshot, to_sale_snapshot

logger = logging.getLogger(__name__)


async def fetch_snapshots(date_range: DateRange):
    """
    Reads jewelry, in-range sales and customers concurrently.

    The three reads are independent; a failure in any of them propagates and
    fails the whole request.

    Returns:
        A tuple of (jewelry snapshots, sale snapshots, customer snapshots).
    """
    jewelry_rows, sale_rows, customer_rows = await asyncio.gather(
        JewelryItem.all(),
        sales_between(date_range.start_date, date_range.end_date),
        Customer.all(),
    )
    return (
        [to_jewelry_snapshot(item) for item in jewelry_rows],
        [to_sale_snapshot(sale) for sale in sale_rows],
        [to_customer_snapshot(customer) for customer in customer_rows],
    )


async def generate_analytics_report(
    start_date: Optional[datetime.datetime],
    end_date: Optional[datetime.datetime],
) -> AnalyticsResponse:
    """
    Generates the dashboard analytics for a date range.

    Args:
        start_date: Inclusive start of the range; defaults to the first day
            of the current month.
        end_date: Inclusive end of the range; defaults to now.

    Returns:
        AnalyticsResponse: the report plus the resolved date range.
    """
    now = utcnow()
    date_range = default_date_range(start_date, end_date, now=now)
    jewelry, sales, customers = await fetch_snapshots(date_range)
    report = compute_analytics(jewelry, sales, customers, date_range, now=now)
    logger.info(
        f"Analytics for {date_range.start_date.isoformat()}..{date_range.end_date.isoformat()}: "
        f"{report.sales.total_sales} sales, revenue {report.sales.total_revenue:.2f}"
    )
    return AnalyticsResponse(
        analytics=report,
        date_range=DateRangeOut(start_date=date_range.start_date, end_date=date_range.end_date),
    )
