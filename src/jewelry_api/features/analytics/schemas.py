"""Analytics schemas

Two groups of models live here:

1. Snapshot records: frozen, typed views of stored documents as the
   aggregation engine consumes them. Optional fields carry the documented
   substitution rules (prices and quantities default to zero, the minimum
   stock level to 5, labels to "uncategorized"/"unknown"/"Unknown Item").
2. The analytics report and sales summary returned by the API, serialised
   with camelCase keys."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
import datetime

from ...common.dates import as_utc
from ...common.schemas import CamelModel, SuccessResponse

DEFAULT_MIN_STOCK_LEVEL = 5
UNCATEGORIZED = "uncategorized"
UNKNOWN_METAL = "unknown"
UNKNOWN_ITEM_NAME = "Unknown Item"


class Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Snapshot records ---
class JewelrySnapshot(Snapshot):
    id: str
    category: Optional[str] = None
    metal_type: Optional[str] = None
    status: Optional[str] = None
    selling_price: Optional[float] = None
    cost_price: Optional[float] = None
    quantity: Optional[int] = None
    min_stock_level: Optional[int] = None
    created_at: Optional[datetime.datetime] = None
    timestamp: Optional[datetime.datetime] = None

    @property
    def category_label(self) -> str:
        return self.category or UNCATEGORIZED

    @property
    def metal_label(self) -> str:
        return self.metal_type or UNKNOWN_METAL

    @property
    def selling_price_or_zero(self) -> float:
        return self.selling_price or 0.0

    @property
    def cost_price_or_zero(self) -> float:
        return self.cost_price or 0.0

    @property
    def is_low_stock(self) -> bool:
        quantity = self.quantity if self.quantity is not None else 0
        # A stored 0 also falls back to the default threshold
        threshold = self.min_stock_level or DEFAULT_MIN_STOCK_LEVEL
        return quantity <= threshold

    @property
    def added_at(self) -> Optional[datetime.datetime]:
        return as_utc(self.created_at or self.timestamp)


class SaleSnapshot(Snapshot):
    id: str
    jewelry_item_id: Optional[str] = None
    jewelry_item_name: Optional[str] = None
    quantity: Optional[int] = None
    total_amount: Optional[float] = None
    sale_date: Optional[datetime.datetime] = None

    @property
    def item_name(self) -> str:
        return self.jewelry_item_name or UNKNOWN_ITEM_NAME

    @property
    def quantity_or_zero(self) -> int:
        return self.quantity or 0

    @property
    def amount(self) -> float:
        return self.total_amount or 0.0

    @property
    def sold_at(self) -> Optional[datetime.datetime]:
        return as_utc(self.sale_date)


class CustomerSnapshot(Snapshot):
    id: str
    created_at: Optional[datetime.datetime] = None
    timestamp: Optional[datetime.datetime] = None

    @property
    def acquired_at(self) -> Optional[datetime.datetime]:
        return as_utc(self.created_at or self.timestamp)


class DateRange(Snapshot):
    """Inclusive reporting window."""

    start_date: datetime.datetime
    end_date: datetime.datetime


# --- Report ---
class SalesMetrics(CamelModel):
    total_sales: int = 0
    total_revenue: float = 0.0
    average_order_value: float = 0.0


class InventoryMetrics(CamelModel):
    total_items: int = 0
    active_items: int = 0
    sold_items: int = 0
    low_stock_items: int = 0
    total_value: float = 0.0
    total_cost_value: float = 0.0
    category_breakdown: Dict[str, int] = Field(default_factory=dict)
    metal_type_breakdown: Dict[str, int] = Field(default_factory=dict)


class ProfitLossMetrics(CamelModel):
    # total_revenue mirrors the active inventory valuation, not sales revenue
    total_revenue: float = 0.0
    total_cost: float = 0.0
    profit: float = 0.0
    gross_profit: float = 0.0
    profit_margin: float = 0.0


class CustomerMetrics(CamelModel):
    total_customers: int = 0
    new_customers: int = 0
    returning_customers: int = 0
    active_customers: int = 0


class MonthlyTrend(CamelModel):
    month: str
    revenue: float = 0.0


class MonthlyTrends(CamelModel):
    trends: List[MonthlyTrend]


class TopSellingItem(CamelModel):
    jewelry_item_id: str
    jewelry_item_name: str
    quantity: int = 0
    revenue: float = 0.0


class TopSelling(CamelModel):
    items: List[TopSellingItem]


class RecentActivity(CamelModel):
    recently_added: int = 0
    recent_sales: int = 0


class AnalyticsReport(CamelModel):
    sales: SalesMetrics
    inventory: InventoryMetrics
    profit_loss: ProfitLossMetrics
    customer: CustomerMetrics
    monthly_trends: MonthlyTrends
    top_selling: TopSelling
    recent_activity: RecentActivity


class DateRangeOut(CamelModel):
    start_date: datetime.datetime
    end_date: datetime.datetime


class AnalyticsResponse(SuccessResponse):
    analytics: AnalyticsReport
    date_range: DateRangeOut


class SalesSummary(CamelModel):
    total_sales: float = 0.0
    total_items: int = 0
    total_transactions: int = 0
    average_sale_value: float = 0.0
