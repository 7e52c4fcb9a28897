import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette import status

from ledgerbook.utils.database import get_db
from ledgerbook.models.ledger_account_model import LedgerAccount
from ledgerbook.models.obligation_model import Obligation
from ledgerbook.schemas.obligation_schemas import (
    ObligationCreate,
    ObligationOut,
    DueDatePatch,
    ActivePatch,
    TransactionCreate,
    TransactionOut,
    TransactionResult,
    BalanceOut,
)
from ledgerbook.utils.balance_calculations import reduce_transactions
from ledgerbook.utils.interest_calculations import compute_accrued_interest, money
from ledgerbook.utils.ledger_queries import get_obligation_with_transactions
from ledgerbook.utils.summary_cache import SummaryCache, get_summary_cache
from ledgerbook.utils.ledger_posting import post_transaction

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/obligations", tags=["Obligations"])


# -------------------------------------------------
# Helpers
# -------------------------------------------------
def get_obligation_or_404(db: Session, obligation_id: int) -> Obligation:
    obligation = db.query(Obligation).filter(Obligation.obligation_id == obligation_id).first()
    if not obligation:
        raise HTTPException(404, "Obligation not found")
    return obligation


# =================================================
# CREATE / LIST
# =================================================
@router.post("", response_model=ObligationOut, status_code=201)
def create_obligation(
        payload: ObligationCreate,
        db: Session = Depends(get_db),
        cache: SummaryCache = Depends(get_summary_cache),
):
    account = db.query(LedgerAccount).filter(LedgerAccount.account_id == payload.account_id).first()
    if not account:
        raise HTTPException(400, "Invalid account_id")

    if payload.due_date and payload.due_date < payload.obligation_date:
        raise HTTPException(400, "due_date cannot be before obligation_date")

    rate = payload.interest_rate
    interest_type = payload.interest_type if rate else "none"

    obligation = Obligation(
        account_id=payload.account_id,
        obligation_type=payload.obligation_type,
        reference_no=payload.reference_no,
        principal_amount=money(payload.principal_amount),
        obligation_date=payload.obligation_date,
        due_date=payload.due_date,
        interest_rate=rate,
        interest_type=interest_type,
        description=payload.description,
        is_active=True,
    )

    try:
        db.add(obligation)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("obligation insert rejected: %s", getattr(e, "orig", e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to create obligation due to database constraints.",
        )

    db.refresh(obligation)
    cache.invalidate()
    return obligation


@router.get("", response_model=list[ObligationOut])
def list_obligations(
        account_id: Optional[int] = Query(None),
        obligation_type: Optional[str] = Query(None),
        is_active: Optional[bool] = Query(None),
        db: Session = Depends(get_db),
):
    q = db.query(Obligation)
    if account_id is not None:
        q = q.filter(Obligation.account_id == account_id)
    if obligation_type:
        q = q.filter(Obligation.obligation_type == obligation_type.lower())
    if is_active is not None:
        q = q.filter(Obligation.is_active.is_(is_active))
    return q.order_by(Obligation.obligation_date.desc(), Obligation.obligation_id.desc()).all()


# =================================================
# DYNAMIC ROUTES
# =================================================
@router.get("/{obligation_id}", response_model=ObligationOut)
def get_obligation(obligation_id: int, db: Session = Depends(get_db)):
    return get_obligation_or_404(db, obligation_id)


@router.get("/{obligation_id}/balance", response_model=BalanceOut)
def obligation_balance(
        obligation_id: int,
        as_of: Optional[date] = Query(None),
        db: Session = Depends(get_db),
):
    found = get_obligation_with_transactions(db, obligation_id)
    if not found:
        raise HTTPException(404, "Obligation not found")
    obligation, txns = found
    as_of = as_of or date.today()

    reduced = reduce_transactions(obligation.principal_amount, txns)
    accrued = compute_accrued_interest(
        reduced.balance,
        obligation.interest_rate,
        obligation.interest_type,
        obligation.obligation_date,
        as_of,
    )

    return BalanceOut(
        obligation_id=obligation.obligation_id,
        as_of=as_of,
        principal_amount=float(obligation.principal_amount),
        total_paid=float(reduced.total_paid),
        total_interest_paid=float(reduced.total_interest_paid),
        total_refund=float(reduced.total_refund),
        total_mixed=float(reduced.total_mixed),
        balance=float(reduced.balance),
        accrued_interest=float(accrued),
        total_due=float(money(reduced.balance + accrued)),
    )


@router.patch("/{obligation_id}/due-date", response_model=ObligationOut)
def set_due_date(
        obligation_id: int,
        payload: DueDatePatch,
        db: Session = Depends(get_db),
        cache: SummaryCache = Depends(get_summary_cache),
):
    obligation = get_obligation_or_404(db, obligation_id)

    if payload.due_date and payload.due_date < obligation.obligation_date:
        raise HTTPException(400, "due_date cannot be before obligation_date")

    obligation.due_date = payload.due_date
    db.commit()
    db.refresh(obligation)
    cache.invalidate()
    return obligation


@router.patch("/{obligation_id}/active", response_model=ObligationOut)
def set_active(
        obligation_id: int,
        payload: ActivePatch,
        db: Session = Depends(get_db),
        cache: SummaryCache = Depends(get_summary_cache),
):
    obligation = get_obligation_or_404(db, obligation_id)
    obligation.is_active = payload.is_active
    db.commit()
    db.refresh(obligation)
    cache.invalidate()
    return obligation


@router.get("/{obligation_id}/transactions", response_model=list[TransactionOut])
def list_transactions(obligation_id: int, db: Session = Depends(get_db)):
    found = get_obligation_with_transactions(db, obligation_id)
    if not found:
        raise HTTPException(404, "Obligation not found")
    return found[1]


# =================================================
# RECORD TRANSACTION (append only)
# =================================================
@router.post("/{obligation_id}/transactions", response_model=TransactionResult, status_code=201)
def record_transaction(
        obligation_id: int,
        payload: TransactionCreate,
        db: Session = Depends(get_db),
        cache: SummaryCache = Depends(get_summary_cache),
):
    found = get_obligation_with_transactions(db, obligation_id)
    if not found:
        raise HTTPException(404, "Obligation not found")
    obligation, txns = found

    try:
        # closing happens in the same commit as the insert
        txn, new_balance = post_transaction(
            db,
            obligation,
            txns,
            amount=payload.amount,
            transaction_type=payload.transaction_type,
            payment_mode=payload.payment_mode,
            payment_date=payload.payment_date,
            notes=payload.notes,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(txn)
    cache.invalidate()
    logger.info(
        "recorded %s of %s on obligation %s, balance now %s",
        txn.transaction_type, txn.amount, obligation_id, new_balance,
    )

    return TransactionResult(
        transaction=TransactionOut.model_validate(txn),
        balance=float(new_balance),
        obligation_active=bool(obligation.is_active),
    )
