import datetime

import pytest

from jewelry_api.features.analytics.engine import (
    compute_analytics,
    compute_customer_metrics,
    compute_inventory_metrics,
    compute_monthly_trends,
    compute_recent_activity,
    compute_sales_metrics,
    compute_top_selling,
    default_date_range,
    summarize_sales,
)
from jewelry_api.features.analytics.schemas import (
    CustomerSnapshot,
    DateRange,
    JewelrySnapshot,
    SaleSnapshot,
)

UTC = datetime.timezone.utc
NOW = datetime.datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


def at(*args) -> datetime.datetime:
    return datetime.datetime(*args, tzinfo=UTC)


def item(id, **fields) -> JewelrySnapshot:
    return JewelrySnapshot(id=id, **fields)


def sale(id, **fields) -> SaleSnapshot:
    return SaleSnapshot(id=id, **fields)


def customer(id, **fields) -> CustomerSnapshot:
    return CustomerSnapshot(id=id, **fields)


MARCH = DateRange(start_date=at(2024, 3, 1), end_date=NOW)


def test_default_date_range_fills_missing_bounds():
    """Missing bounds become the first instant of the month and now."""
    date_range = default_date_range(None, None, now=NOW)
    assert date_range.start_date == at(2024, 3, 1)
    assert date_range.end_date == NOW


def test_default_date_range_keeps_given_bounds_and_reads_naive_as_utc():
    date_range = default_date_range(
        datetime.datetime(2024, 1, 1), datetime.datetime(2024, 1, 31), now=NOW
    )
    assert date_range.start_date == at(2024, 1, 1)
    assert date_range.end_date == at(2024, 1, 31)


def test_sales_metrics_empty():
    metrics = compute_sales_metrics([])
    assert metrics.total_sales == 0
    assert metrics.total_revenue == 0
    assert metrics.average_order_value == 0


def test_sales_metrics_treats_missing_amount_as_zero():
    metrics = compute_sales_metrics(
        [sale("a", total_amount=100.0), sale("b", total_amount=50.0), sale("c")]
    )
    assert metrics.total_sales == 3
    assert metrics.total_revenue == pytest.approx(150.0)
    assert metrics.average_order_value == pytest.approx(50.0)


def test_inventory_metrics_values_only_active_items():
    jewelry = [
        item("1", status="active", selling_price=1000.0, cost_price=600.0, quantity=10, category="ring", metal_type="gold"),
        item("2", status="active", selling_price=500.0, quantity=10, category="ring", metal_type="silver"),
        item("3", status="sold", selling_price=9999.0, cost_price=1.0, quantity=0, category="necklace"),
        item("4", status="inactive", selling_price=300.0, quantity=10),
    ]
    inventory, profit_loss = compute_inventory_metrics(jewelry)

    assert inventory.total_items == 4
    assert inventory.active_items == 2
    assert inventory.sold_items == 1
    assert inventory.total_value == pytest.approx(1500.0)
    assert inventory.total_cost_value == pytest.approx(600.0)
    assert inventory.category_breakdown == {"ring": 2, "necklace": 1, "uncategorized": 1}
    assert inventory.metal_type_breakdown == {"gold": 1, "silver": 1, "unknown": 2}

    assert profit_loss.profit == pytest.approx(900.0)
    assert profit_loss.gross_profit == pytest.approx(900.0)
    assert profit_loss.profit_margin == pytest.approx(60.0)


def test_profit_loss_total_revenue_is_inventory_valuation():
    """profitLoss.totalRevenue reports the active inventory value, not sales revenue."""
    jewelry = [item("1", status="active", selling_price=800.0, cost_price=500.0)]
    sales = [sale("s", jewelry_item_id="1", total_amount=50.0, sale_date=at(2024, 3, 5))]

    report = compute_analytics(jewelry, sales, [], MARCH, now=NOW)

    assert report.sales.total_revenue == pytest.approx(50.0)
    assert report.profit_loss.total_revenue == pytest.approx(800.0)
    assert report.profit_loss.total_revenue == pytest.approx(report.inventory.total_value)
    assert report.profit_loss.total_cost == pytest.approx(report.inventory.total_cost_value)


def test_single_active_item_margin():
    report = compute_analytics(
        [item("1", status="active", selling_price=100.0, cost_price=60.0)], [], [], MARCH, now=NOW
    )
    assert report.inventory.total_value == pytest.approx(100.0)
    assert report.inventory.total_cost_value == pytest.approx(60.0)
    assert report.profit_loss.profit == pytest.approx(40.0)
    assert report.profit_loss.profit_margin == pytest.approx(40.0)


def test_inventory_breakdowns_sum_to_total_items():
    jewelry = [
        item("1", category="ring"),
        item("2", category=""),
        item("3", metal_type="gold"),
        item("4", category="ring", metal_type="gold"),
    ]
    inventory, _ = compute_inventory_metrics(jewelry)
    assert sum(inventory.category_breakdown.values()) == inventory.total_items
    assert sum(inventory.metal_type_breakdown.values()) == inventory.total_items


def test_inventory_margin_is_zero_without_active_value():
    _, profit_loss = compute_inventory_metrics([item("1", status="sold", selling_price=10.0)])
    assert profit_loss.profit_margin == 0
    assert profit_loss.total_revenue == 0


def test_low_stock_uses_inclusive_threshold_and_defaults():
    jewelry = [
        item("at-threshold", quantity=5, min_stock_level=5),
        item("above", quantity=6, min_stock_level=5),
        item("default-threshold", quantity=5),
        item("no-quantity"),
    ]
    inventory, _ = compute_inventory_metrics(jewelry)
    # at-threshold, default-threshold, no-quantity
    assert inventory.low_stock_items == 3


def test_low_stock_zero_threshold_falls_back_to_default():
    jewelry = [
        item("one-left", quantity=1, min_stock_level=0),
        item("none-left", quantity=0, min_stock_level=0),
        item("plenty", quantity=6, min_stock_level=0),
    ]
    inventory, _ = compute_inventory_metrics(jewelry)
    assert inventory.low_stock_items == 2


def test_monthly_trends_labels_oldest_first():
    trends = compute_monthly_trends([], NOW).trends
    assert [t.month for t in trends] == ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]
    assert all(t.revenue == 0 for t in trends)


def test_monthly_trends_buckets_cover_whole_month():
    sales = [
        sale("a", total_amount=100.0, sale_date=at(2024, 1, 31, 23, 59, 59)),
        sale("b", total_amount=10.0, sale_date=at(2024, 2, 1)),
        sale("c", total_amount=1.0, sale_date=at(2023, 10, 1)),
        sale("d", total_amount=1000.0, sale_date=at(2023, 9, 30, 23, 59)),
        sale("e", total_amount=5.0),
    ]
    trends = {t.month: t.revenue for t in compute_monthly_trends(sales, NOW).trends}
    assert trends["Jan"] == pytest.approx(100.0)
    assert trends["Feb"] == pytest.approx(10.0)
    assert trends["Oct"] == pytest.approx(1.0)
    assert sum(trends.values()) == pytest.approx(111.0)


def test_monthly_trends_cross_year_boundary():
    trends = compute_monthly_trends([], at(2024, 1, 10)).trends
    assert [t.month for t in trends] == ["Aug", "Sep", "Oct", "Nov", "Dec", "Jan"]


def test_top_selling_groups_and_ranks_by_revenue():
    sales = [
        sale("1", jewelry_item_id="ring", jewelry_item_name="Gold Ring", quantity=1, total_amount=100.0),
        sale("2", jewelry_item_id="chain", jewelry_item_name="Silver Chain", quantity=2, total_amount=300.0),
        sale("3", jewelry_item_id="ring", jewelry_item_name="Renamed Ring", quantity=3, total_amount=300.0),
        sale("4", quantity=10, total_amount=10000.0),
    ]
    items = compute_top_selling(sales).items

    assert [i.jewelry_item_id for i in items] == ["ring", "chain"]
    ring = items[0]
    assert ring.jewelry_item_name == "Gold Ring"
    assert ring.quantity == 4
    assert ring.revenue == pytest.approx(400.0)


def test_top_selling_merges_sales_of_one_item():
    sales = [
        sale("1", jewelry_item_id="A", jewelry_item_name="Ring", quantity=1, total_amount=50.0),
        sale("2", jewelry_item_id="A", jewelry_item_name="Ring", quantity=1, total_amount=150.0),
    ]
    items = compute_top_selling(sales).items
    assert [i.model_dump() for i in items] == [
        {"jewelry_item_id": "A", "jewelry_item_name": "Ring", "quantity": 2, "revenue": 200.0}
    ]


def test_top_selling_ties_keep_first_seen_order():
    sales = [
        sale("1", jewelry_item_id="b", total_amount=50.0),
        sale("2", jewelry_item_id="a", total_amount=50.0),
        sale("3", jewelry_item_id="c", total_amount=75.0),
    ]
    items = compute_top_selling(sales).items
    assert [i.jewelry_item_id for i in items] == ["c", "b", "a"]
    assert items[1].jewelry_item_name == "Unknown Item"


def test_top_selling_keeps_ten_highest():
    sales = [
        sale(str(n), jewelry_item_id=f"item-{n}", total_amount=float(n))
        for n in range(1, 13)
    ]
    items = compute_top_selling(sales).items
    assert len(items) == 10
    assert items[0].jewelry_item_id == "item-12"
    assert items[-1].jewelry_item_id == "item-3"
    revenues = [i.revenue for i in items]
    assert revenues == sorted(revenues, reverse=True)


def test_customer_metrics_splits_new_and_returning():
    customers = [
        customer("new", created_at=at(2024, 3, 2)),
        customer("boundary", created_at=at(2024, 3, 1)),
        customer("legacy-new", timestamp=datetime.datetime(2024, 3, 10)),
        customer("old", created_at=at(2024, 1, 5)),
        customer("undated"),
    ]
    metrics = compute_customer_metrics(customers, MARCH)
    assert metrics.total_customers == 5
    assert metrics.new_customers == 3
    assert metrics.returning_customers == 2
    assert metrics.active_customers == 5
    assert metrics.new_customers + metrics.returning_customers == metrics.total_customers


def test_recent_activity_counts_trailing_week():
    jewelry = [
        item("fresh", created_at=at(2024, 3, 10)),
        item("legacy", timestamp=at(2024, 3, 14)),
        item("old", created_at=at(2024, 3, 1)),
        item("undated"),
    ]
    sales = [
        sale("fresh", sale_date=at(2024, 3, 8, 12)),
        sale("old", sale_date=at(2024, 3, 8, 11, 59)),
    ]
    activity = compute_recent_activity(jewelry, sales, NOW)
    assert activity.recently_added == 2
    assert activity.recent_sales == 1


def test_compute_analytics_on_empty_store():
    report = compute_analytics([], [], [], MARCH, now=NOW)
    assert report.sales.total_sales == 0
    assert report.sales.average_order_value == 0
    assert report.inventory.total_items == 0
    assert report.inventory.category_breakdown == {}
    assert report.profit_loss.profit_margin == 0
    assert report.customer.total_customers == 0
    assert len(report.monthly_trends.trends) == 6
    assert report.top_selling.items == []
    assert report.recent_activity.recent_sales == 0


def test_compute_analytics_serialises_camel_case():
    jewelry = [item("1", status="active", selling_price=200.0, cost_price=50.0, quantity=2, created_at=at(2024, 3, 14))]
    sales = [sale("s", jewelry_item_id="1", jewelry_item_name="Ring", quantity=1, total_amount=200.0, sale_date=at(2024, 3, 14))]
    customers = [customer("c", created_at=at(2024, 3, 14))]

    payload = compute_analytics(jewelry, sales, customers, MARCH, now=NOW).model_dump(by_alias=True)

    assert set(payload) == {
        "sales", "inventory", "profitLoss", "customer",
        "monthlyTrends", "topSelling", "recentActivity",
    }
    assert payload["sales"]["averageOrderValue"] == pytest.approx(200.0)
    assert payload["inventory"]["lowStockItems"] == 1
    assert payload["inventory"]["categoryBreakdown"] == {"uncategorized": 1}
    assert payload["profitLoss"]["profitMargin"] == pytest.approx(75.0)
    assert payload["monthlyTrends"]["trends"][-1] == {"month": "Mar", "revenue": 200.0}
    assert payload["topSelling"]["items"][0]["jewelryItemName"] == "Ring"
    assert payload["recentActivity"] == {"recentlyAdded": 1, "recentSales": 1}
    assert payload["customer"]["newCustomers"] == 1


def test_compute_analytics_is_deterministic():
    jewelry = [item(str(n), category="ring" if n % 2 else "chain", selling_price=n * 10.0, status="active") for n in range(5)]
    sales = [sale(str(n), jewelry_item_id=str(n % 3), total_amount=25.0, sale_date=at(2024, 3, n + 1)) for n in range(6)]
    first = compute_analytics(jewelry, sales, [], MARCH, now=NOW)
    second = compute_analytics(jewelry, sales, [], MARCH, now=NOW)
    assert first == second


def test_summarize_sales():
    summary = summarize_sales(
        [sale("a", quantity=2, total_amount=100.0), sale("b", quantity=1, total_amount=50.0), sale("c")]
    )
    assert summary.total_sales == pytest.approx(150.0)
    assert summary.total_items == 3
    assert summary.total_transactions == 3
    assert summary.average_sale_value == pytest.approx(50.0)


def test_summarize_sales_empty():
    summary = summarize_sales([])
    assert summary.total_transactions == 0
    assert summary.average_sale_value == 0
