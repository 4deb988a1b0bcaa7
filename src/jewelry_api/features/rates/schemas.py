from pydantic import Field
from typing import List, Optional
import datetime

from ...common.schemas import CamelModel, SuccessResponse


class RateValue(CamelModel):
    price: float
    last_updated: datetime.datetime


class Rates(CamelModel):
    gold: RateValue
    silver: RateValue


class RatesUpdate(CamelModel):
    # Presence and sign are checked by the service so the messages stay stable
    gold: Optional[float] = Field(None, description="Gold price per gram")
    silver: Optional[float] = Field(None, description="Silver price per gram")


class RatesResponse(SuccessResponse):
    message: Optional[str] = None
    rates: Rates


class RateHistoryItem(CamelModel):
    id: str
    gold: float
    silver: float
    updated_by: Optional[str] = None
    timestamp: datetime.datetime


class RateHistoryResponse(SuccessResponse):
    history: List[RateHistoryItem]
