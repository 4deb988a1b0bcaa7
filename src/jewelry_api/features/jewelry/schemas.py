from pydantic import Field
from typing import List, Optional
import datetime

from ...common.schemas import CamelModel, SuccessResponse, MessageResponse, PageMeta


class JewelryBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255, description="Name of the piece")
    sku: Optional[str] = Field(None, max_length=100, description="Stock keeping unit")
    category: Optional[str] = Field(None, max_length=100, description="Free-text category, e.g. ring")
    metal_type: Optional[str] = Field(None, max_length=50, description="Free-text metal label, e.g. gold")
    purity: Optional[str] = Field(None, max_length=20, description="Purity label, e.g. 22K")
    weight: Optional[float] = Field(None, ge=0, description="Weight in grams")
    description: Optional[str] = Field(None, max_length=2000)


class JewelryCreate(JewelryBase):
    cost_price: float = Field(default=0.0, ge=0, description="Purchase cost of the piece")
    selling_price: float = Field(default=0.0, ge=0, description="Listed selling price")
    quantity: int = Field(default=0, ge=0, description="Units in stock")
    min_stock_level: int = Field(default=5, ge=0, description="Reorder threshold")
    status: str = Field(default="active", min_length=1, max_length=20)


class JewelryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    sku: Optional[str] = Field(None, max_length=100)
    category: Optional[str] = Field(None, max_length=100)
    metal_type: Optional[str] = Field(None, max_length=50)
    purity: Optional[str] = Field(None, max_length=20)
    weight: Optional[float] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=2000)
    cost_price: Optional[float] = Field(None, ge=0)
    selling_price: Optional[float] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)
    status: Optional[str] = Field(None, min_length=1, max_length=20)


class JewelryResponse(JewelryBase):
    id: str = Field(..., description="Public unique identifier for the item (KSUID)")
    cost_price: Optional[float] = None
    selling_price: Optional[float] = None
    quantity: Optional[int] = None
    min_stock_level: Optional[int] = None
    status: Optional[str] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime


class JewelryListResponse(PageMeta):
    jewelry: List[JewelryResponse]


class JewelryDetailResponse(SuccessResponse):
    jewelry: JewelryResponse


class JewelryMutationResponse(MessageResponse):
    jewelry: Optional[JewelryResponse] = None


class CategoriesResponse(SuccessResponse):
    categories: List[str]
