from pydantic import EmailStr, Field
from typing import List, Optional
import datetime

from ...common.schemas import CamelModel, SuccessResponse, MessageResponse, PageMeta


class CustomerBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255, description="Customer name")
    email: Optional[EmailStr] = Field(None, description="Contact email")
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=2000)
    notes: Optional[str] = Field(None, max_length=2000)


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=2000)
    notes: Optional[str] = Field(None, max_length=2000)


class CustomerResponse(CustomerBase):
    id: str = Field(..., description="Public unique identifier for the customer (KSUID)")
    # Stored emails predate validation, so they are echoed back verbatim
    email: Optional[str] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime


class CustomerListResponse(PageMeta):
    customers: List[CustomerResponse]


class CustomerDetailResponse(SuccessResponse):
    customer: CustomerResponse


class CustomerMutationResponse(MessageResponse):
    customer: Optional[CustomerResponse] = None
