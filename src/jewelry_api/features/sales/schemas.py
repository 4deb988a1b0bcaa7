from pydantic import Field
from typing import List, Optional
import datetime

from ...common.schemas import CamelModel, SuccessResponse, MessageResponse, PageMeta
from ..analytics.schemas import SalesSummary


class SaleBase(CamelModel):
    jewelry_item_id: Optional[str] = Field(None, max_length=27, description="Public ID of the jewelry item sold")
    jewelry_item_name: Optional[str] = Field(None, max_length=255, description="Name of the item at the time of sale")
    customer_id: Optional[str] = Field(None, max_length=27, description="Public ID of the customer")
    customer_name: Optional[str] = Field(None, max_length=255)
    payment_method: Optional[str] = Field(None, max_length=50, description="e.g. cash, card, upi")
    notes: Optional[str] = Field(None, max_length=2000)


class SaleCreate(SaleBase):
    quantity: Optional[int] = Field(None, ge=0, description="Units sold")
    unit_price: Optional[float] = Field(None, ge=0, description="Price per unit")
    total_amount: Optional[float] = Field(
        None, ge=0, description="Amount charged; derived from quantity x unit price when omitted"
    )
    sale_date: Optional[datetime.datetime] = Field(None, description="When the sale happened; defaults to now")


class SaleUpdate(CamelModel):
    jewelry_item_id: Optional[str] = Field(None, max_length=27)
    jewelry_item_name: Optional[str] = Field(None, max_length=255)
    customer_id: Optional[str] = Field(None, max_length=27)
    customer_name: Optional[str] = Field(None, max_length=255)
    payment_method: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=2000)
    quantity: Optional[int] = Field(None, ge=0)
    unit_price: Optional[float] = Field(None, ge=0)
    total_amount: Optional[float] = Field(None, ge=0)
    sale_date: Optional[datetime.datetime] = None


class SaleResponse(SaleBase):
    id: str = Field(..., description="Public unique identifier for the sale (KSUID)")
    quantity: Optional[int] = None
    unit_price: Optional[float] = None
    total_amount: Optional[float] = None
    sale_date: datetime.datetime
    created_at: datetime.datetime
    updated_at: datetime.datetime


class SaleListResponse(PageMeta):
    sales: List[SaleResponse]


class SaleDetailResponse(SuccessResponse):
    sale: SaleResponse


class SaleMutationResponse(MessageResponse):
    sale: Optional[SaleResponse] = None


class SalesSummaryResponse(SuccessResponse):
    analytics: SalesSummary
