from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Literal

ObligationType = Literal["bill", "loan", "sale"]
InterestType = Literal["none", "simple-daily", "simple-monthly", "flat"]
TransactionType = Literal["payment", "principal", "interest", "refund", "mixed"]
PaymentMode = Literal["cash", "bank", "cheque", "upi", "other"]


class ObligationCreate(BaseModel):
    account_id: int
    obligation_type: ObligationType = "bill"
    reference_no: Optional[str] = None

    principal_amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    obligation_date: date
    due_date: Optional[date] = None

    interest_rate: Optional[Decimal] = Field(None, ge=0)
    interest_type: InterestType = "none"

    description: Optional[str] = None


class ObligationOut(BaseModel):
    obligation_id: int
    account_id: int
    obligation_type: str
    reference_no: Optional[str] = None

    principal_amount: float
    obligation_date: date
    due_date: Optional[date] = None

    interest_rate: Optional[float] = None
    interest_type: str

    description: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class DueDatePatch(BaseModel):
    due_date: Optional[date] = None


class ActivePatch(BaseModel):
    is_active: bool


class TransactionCreate(BaseModel):
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    payment_date: Optional[date] = None
    transaction_type: TransactionType = "payment"
    payment_mode: PaymentMode = "cash"
    notes: Optional[str] = None

    @field_validator("notes", mode="before")
    def empty_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class TransactionOut(BaseModel):
    transaction_id: int
    obligation_id: int
    amount: float
    payment_date: date
    transaction_type: str
    payment_mode: str
    cheque_id: Optional[int] = None
    notes: Optional[str] = None
    created_on: Optional[datetime] = None

    class Config:
        from_attributes = True


class BalanceOut(BaseModel):
    obligation_id: int
    as_of: date
    principal_amount: float
    total_paid: float
    total_interest_paid: float
    total_refund: float
    total_mixed: float
    balance: float
    accrued_interest: float
    total_due: float


class TransactionResult(BaseModel):
    transaction: TransactionOut
    balance: float
    obligation_active: bool
