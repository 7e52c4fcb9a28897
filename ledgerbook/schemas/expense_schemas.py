# ledgerbook/schemas/expense_schemas.py

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal


# ----------------------------
# Expense Category Schemas
# ----------------------------
class ExpenseCategoryBase(BaseModel):
    category_name: str = Field(..., min_length=1, max_length=120)
    is_active: bool = True

    class Config:
        extra = "forbid"


class ExpenseCategoryCreate(ExpenseCategoryBase):
    pass


class ExpenseCategoryUpdate(BaseModel):
    category_name: Optional[str] = Field(None, min_length=1, max_length=120)
    is_active: Optional[bool] = None

    class Config:
        extra = "forbid"


class ExpenseCategoryOut(ExpenseCategoryBase):
    category_id: int

    class Config:
        from_attributes = True


# ----------------------------
# Expense Schemas
# ----------------------------
class ExpenseBase(BaseModel):
    category_id: int
    expense_date: date
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    payee: Optional[str] = None
    description: Optional[str] = None
    payment_mode: Optional[str] = None
    reference_no: Optional[str] = None


class ExpenseCreate(ExpenseBase):
    pass


class ExpenseUpdate(BaseModel):
    category_id: Optional[int] = None
    expense_date: Optional[date] = None
    amount: Optional[Decimal] = Field(None, gt=0)  # keep Decimal, not float
    payee: Optional[str] = None
    description: Optional[str] = None
    payment_mode: Optional[str] = None
    reference_no: Optional[str] = None


class ExpenseOut(ExpenseBase):
    expense_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
