# ledgerbook/routers/accounts_router.py
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ledgerbook.utils.database import get_db
from ledgerbook.models.ledger_account_model import LedgerAccount
from ledgerbook.models.obligation_model import Obligation
from ledgerbook.schemas.account_schemas import (
    AccountCreate,
    AccountOut,
    AccountUpdate,
    AccountSummaryOut,
    AccountOutstandingOut,
)
from ledgerbook.utils.balance_calculations import reduce_transactions
from ledgerbook.utils.interest_calculations import compute_accrued_interest, money
from ledgerbook.utils.ledger_queries import list_account_obligations, STATUS_ACTIVE
from ledgerbook.utils.summary_cache import SummaryCache, get_summary_cache
from ledgerbook.utils.summary_calculations import summarize_obligations, totals_as_dict

router = APIRouter(prefix="/accounts", tags=["Ledger Accounts"])


def get_account_or_404(db: Session, account_id: int) -> LedgerAccount:
    account = db.query(LedgerAccount).filter(LedgerAccount.account_id == account_id).first()
    if not account:
        raise HTTPException(404, "Account not found")
    return account


# CREATE
@router.post("", response_model=AccountOut, status_code=201)
def create_account(payload: AccountCreate, db: Session = Depends(get_db)):
    account = LedgerAccount(**payload.model_dump())
    account.name = account.name.strip()
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


# READ ALL
@router.get("", response_model=list[AccountOut])
def list_accounts(
        account_type: Optional[str] = Query(default=None, description="customer / mahajan"),
        search: Optional[str] = Query(default=None, description="Name, phone, email or GST"),
        db: Session = Depends(get_db),
):
    q = db.query(LedgerAccount)

    if account_type:
        q = q.filter(LedgerAccount.account_type == account_type.lower())

    if search and search.strip():
        like = f"%{search.strip().lower()}%"
        q = q.filter(
            or_(
                LedgerAccount.name.ilike(like),
                LedgerAccount.phone.ilike(like),
                LedgerAccount.email.ilike(like),
                LedgerAccount.gst_number.ilike(like),
            )
        )

    return q.order_by(LedgerAccount.created_on.desc(), LedgerAccount.account_id.desc()).all()


# READ ONE
@router.get("/{account_id}", response_model=AccountOut)
def get_account(account_id: int, db: Session = Depends(get_db)):
    return get_account_or_404(db, account_id)


# UPDATE
@router.put("/{account_id}", response_model=AccountOut)
def update_account(
        account_id: int,
        payload: AccountUpdate,
        db: Session = Depends(get_db),
        cache: SummaryCache = Depends(get_summary_cache),
):
    account = get_account_or_404(db, account_id)

    for k, v in payload.model_dump(exclude_unset=True).items():
        if k == "name" and v is None:
            continue
        setattr(account, k, v)

    db.commit()
    db.refresh(account)
    # names and phones appear in cached summary rows
    cache.invalidate()
    return account


# DELETE
@router.delete("/{account_id}")
def delete_account(
        account_id: int,
        db: Session = Depends(get_db),
        cache: SummaryCache = Depends(get_summary_cache),
):
    account = get_account_or_404(db, account_id)

    used = db.query(Obligation).filter(Obligation.account_id == account_id).first()
    if used:
        raise HTTPException(409, "Cannot delete account: obligations exist")

    db.delete(account)
    db.commit()
    cache.invalidate()
    return {"message": "Account deleted successfully"}


# =================================================
# Derived figures (never stored)
# =================================================
@router.get("/{account_id}/summary", response_model=AccountSummaryOut)
def account_summary(
        account_id: int,
        as_of: Optional[date] = Query(None),
        status: str = Query("all", pattern="^(all|active|closed)$"),
        db: Session = Depends(get_db),
):
    account = get_account_or_404(db, account_id)
    as_of = as_of or date.today()

    pairs = list_account_obligations(db, account_id, status)
    totals = summarize_obligations(pairs, as_of)

    return AccountSummaryOut(
        account_id=account.account_id,
        account_type=account.account_type,
        name=account.name,
        phone=account.phone,
        as_of=as_of,
        totals=totals_as_dict(totals),
    )


@router.get("/{account_id}/outstanding", response_model=AccountOutstandingOut)
def account_outstanding(
        account_id: int,
        as_of: Optional[date] = Query(None),
        db: Session = Depends(get_db),
):
    get_account_or_404(db, account_id)
    as_of = as_of or date.today()

    principal_balance = Decimal("0")
    interest = Decimal("0")
    for obligation, txns in list_account_obligations(db, account_id, STATUS_ACTIVE):
        reduced = reduce_transactions(obligation.principal_amount, txns)
        principal_balance += reduced.balance
        interest += compute_accrued_interest(
            reduced.balance,
            obligation.interest_rate,
            obligation.interest_type,
            obligation.obligation_date,
            as_of,
        )

    return AccountOutstandingOut(
        account_id=account_id,
        as_of=as_of,
        principal_balance=float(money(principal_balance)),
        accrued_interest=float(money(interest)),
        outstanding=float(money(principal_balance + interest)),
    )
