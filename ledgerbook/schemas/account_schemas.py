from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional, Literal

AccountType = Literal["customer", "mahajan"]

_OPTIONAL_TEXT = ("phone", "email", "address", "gst_number", "payment_day")


def _blank_to_none(v):
    if v is None:
        return None
    v = str(v).strip()
    return v or None


class AccountBase(BaseModel):
    account_type: AccountType = "customer"
    name: str = Field(..., min_length=1, max_length=150)
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    gst_number: Optional[str] = None
    payment_day: Optional[str] = None

    @field_validator("name", mode="before")
    def strip_name(cls, v):
        # whitespace-only names then fail min_length
        return v.strip() if isinstance(v, str) else v

    @field_validator(*_OPTIONAL_TEXT, mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)


class AccountCreate(AccountBase):
    pass


class AccountUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    gst_number: Optional[str] = None
    payment_day: Optional[str] = None

    @field_validator("name", mode="before")
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator(*_OPTIONAL_TEXT, mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)


class AccountOut(AccountBase):
    account_id: int
    created_on: Optional[datetime] = None

    class Config:
        from_attributes = True


class AccountTotalsOut(BaseModel):
    obligation_count: int = 0
    active_obligation_count: int = 0
    total_principal: float = 0.0
    total_paid: float = 0.0
    total_interest_paid: float = 0.0
    total_outstanding: float = 0.0
    last_payment_date: Optional[date] = None
    average_payment: float = 0.0
    payment_count: int = 0


class AccountSummaryOut(BaseModel):
    account_id: int
    account_type: str
    name: str
    phone: Optional[str] = None
    as_of: date
    totals: AccountTotalsOut


class AccountOutstandingOut(BaseModel):
    account_id: int
    as_of: date
    principal_balance: float
    accrued_interest: float
    outstanding: float
