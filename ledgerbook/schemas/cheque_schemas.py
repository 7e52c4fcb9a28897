from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Literal

ChequeType = Literal["received", "issued"]
ChequeStatus = Literal["pending", "processing", "cleared", "bounced"]


class ChequeCreate(BaseModel):
    cheque_type: ChequeType
    cheque_number: str = Field(..., min_length=1, max_length=50)
    cheque_date: date
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    bank_name: str = Field(..., min_length=1, max_length=120)

    account_id: Optional[int] = None
    obligation_id: Optional[int] = None
    party_name: Optional[str] = None
    notes: Optional[str] = None


class ChequeStatusPatch(BaseModel):
    status: ChequeStatus
    cleared_date: Optional[date] = None
    bounce_charges: Optional[Decimal] = Field(None, ge=0)
    bank_transaction_id: Optional[str] = None
    notes: Optional[str] = None


class ChequeOut(BaseModel):
    cheque_id: int
    cheque_type: str
    cheque_number: str
    cheque_date: date
    amount: float
    bank_name: str
    status: str
    bounce_charges: float
    bank_transaction_id: Optional[str] = None
    account_id: Optional[int] = None
    obligation_id: Optional[int] = None
    party_name: Optional[str] = None
    notes: Optional[str] = None
    cleared_date: Optional[date] = None

    class Config:
        from_attributes = True


class ChequeHistoryOut(BaseModel):
    history_id: int
    cheque_id: int
    old_status: Optional[str] = None
    new_status: str
    notes: Optional[str] = None
    changed_on: datetime

    class Config:
        from_attributes = True


class ChequeStatusStat(BaseModel):
    count: int = 0
    amount: float = 0.0


class ChequeStatsOut(BaseModel):
    pending: ChequeStatusStat = Field(default_factory=ChequeStatusStat)
    processing: ChequeStatusStat = Field(default_factory=ChequeStatusStat)
    cleared: ChequeStatusStat = Field(default_factory=ChequeStatusStat)
    bounced: ChequeStatusStat = Field(default_factory=ChequeStatusStat)
