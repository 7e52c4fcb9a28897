# ledgerbook/schemas/order_schemas.py

from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional, Literal

OrderStatus = Literal["pending", "processing", "completed", "delivered"]


def _blank_to_none(v):
    if v is None:
        return None
    v = str(v).strip()
    return v or None


class OrderCreate(BaseModel):
    order_number: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    order_date: date
    status: OrderStatus = "pending"
    notes: Optional[str] = None

    @field_validator("order_number", "title", mode="before")
    def strip_required(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", "notes", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    class Config:
        extra = "forbid"


class OrderUpdate(BaseModel):
    order_number: Optional[str] = Field(None, min_length=1, max_length=50)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    order_date: Optional[date] = None
    status: Optional[OrderStatus] = None
    notes: Optional[str] = None

    @field_validator("order_number", "title", mode="before")
    def strip_required(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", "notes", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    class Config:
        extra = "forbid"


class OrderOut(BaseModel):
    order_id: int
    order_number: str
    title: str
    description: Optional[str] = None
    order_date: date
    status: str
    notes: Optional[str] = None
    created_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None

    class Config:
        from_attributes = True
