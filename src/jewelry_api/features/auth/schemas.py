"""Pydantic schemas for authentication and user management."""

from pydantic import BaseModel, EmailStr, Field
from typing import Literal, Optional
import datetime

from jewelry_api.common.schemas import CamelModel, SuccessResponse, MessageResponse

Role = Literal["admin", "superadmin", "worker"]


class Identity(BaseModel):
    """Caller identity recovered from a verified bearer token."""

    subject_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class Token(BaseModel):
    access_token: str
    token_type: str


class UserCreate(CamelModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password")
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    role: Role = Field("worker", description="Role checked by the role gate")
    phone: str = Field("", max_length=50)


class UserUpdate(CamelModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[Role] = None
    phone: Optional[str] = Field(None, max_length=50)


class UserResponse(CamelModel):
    uid: str = Field(..., description="Public unique identifier for the user (KSUID)")
    email: str
    name: str
    role: str
    phone: str
    created_at: datetime.datetime
    updated_at: datetime.datetime


class CurrentUserResponse(SuccessResponse):
    user: UserResponse


class UserListResponse(SuccessResponse):
    users: list[UserResponse]


class UserMutationResponse(MessageResponse):
    user: Optional[UserResponse] = None
