from pydantic import BaseModel
from datetime import date
from typing import Optional, List

from ledgerbook.schemas.account_schemas import AccountTotalsOut


class SummaryRowOut(BaseModel):
    account_id: int
    name: str
    phone: Optional[str] = None
    totals: AccountTotalsOut


class SummaryGrandTotalsOut(BaseModel):
    account_count: int = 0
    obligation_count: int = 0
    active_obligation_count: int = 0
    total_principal: float = 0.0
    total_paid: float = 0.0
    total_outstanding: float = 0.0


class SummaryReportOut(BaseModel):
    account_type: Optional[str] = None
    status: str
    as_of: date
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    rows: List[SummaryRowOut]
    totals: SummaryGrandTotalsOut


class ReminderRowOut(BaseModel):
    obligation_id: int
    reference_no: str
    account_id: int
    account_name: str
    principal_amount: float
    obligation_date: date
    due_date: date
    interest_rate: float
    interest_type: str
    outstanding_balance: float
    interest: float
    amount_due: float


class ReminderReportOut(BaseModel):
    as_of: date
    rows: List[ReminderRowOut]
    total_outstanding: float
    total_due: float
