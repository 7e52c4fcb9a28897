# ledgerbook/routers/cheques_router.py

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from ledgerbook.utils.database import get_db
from ledgerbook.models.cheque_model import Cheque, ChequeStatusHistory
from ledgerbook.models.ledger_account_model import LedgerAccount
from ledgerbook.models.obligation_model import Obligation
from ledgerbook.schemas.cheque_schemas import (
    ChequeCreate,
    ChequeOut,
    ChequeStatusPatch,
    ChequeHistoryOut,
    ChequeStatsOut,
    ChequeStatusStat,
)
from ledgerbook.utils.balance_calculations import TXN_PAYMENT
from ledgerbook.utils.interest_calculations import money
from ledgerbook.utils.ledger_posting import post_transaction
from ledgerbook.utils.ledger_queries import get_obligation_with_transactions
from ledgerbook.utils.summary_cache import SummaryCache, get_summary_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cheques", tags=["Cheques"])

CHEQUE_STATUSES = ("pending", "processing", "cleared", "bounced")

# cleared / bounced are terminal
ALLOWED_TRANSITIONS = {
    "pending": {"processing", "cleared", "bounced"},
    "processing": {"cleared", "bounced"},
    "cleared": set(),
    "bounced": set(),
}


def get_cheque_or_404(db: Session, cheque_id: int) -> Cheque:
    cheque = db.query(Cheque).filter(Cheque.cheque_id == cheque_id).first()
    if not cheque:
        raise HTTPException(404, "Cheque not found")
    return cheque


@router.post("", response_model=ChequeOut, status_code=201)
def create_cheque(payload: ChequeCreate, db: Session = Depends(get_db)):
    if payload.account_id is not None:
        account = db.query(LedgerAccount).filter(LedgerAccount.account_id == payload.account_id).first()
        if not account:
            raise HTTPException(400, "Invalid account_id")

    if payload.obligation_id is not None:
        obligation = (
            db.query(Obligation)
            .filter(Obligation.obligation_id == payload.obligation_id)
            .first()
        )
        if not obligation:
            raise HTTPException(400, "Invalid obligation_id")
        if payload.account_id is not None and obligation.account_id != payload.account_id:
            raise HTTPException(400, "Obligation does not belong to this account")

    cheque = Cheque(
        **payload.model_dump(exclude={"amount"}),
        amount=money(payload.amount),
        status="pending",
        bounce_charges=money(0),
    )
    db.add(cheque)
    db.flush()

    db.add(ChequeStatusHistory(cheque_id=cheque.cheque_id, old_status=None, new_status="pending"))
    db.commit()
    db.refresh(cheque)
    return cheque


@router.get("", response_model=list[ChequeOut])
def list_cheques(
        cheque_type: Optional[str] = Query(None, pattern="^(received|issued)$"),
        status: Optional[str] = Query(None, pattern="^(pending|processing|cleared|bounced)$"),
        db: Session = Depends(get_db),
):
    q = db.query(Cheque)
    if cheque_type:
        q = q.filter(Cheque.cheque_type == cheque_type)
    if status:
        q = q.filter(Cheque.status == status)
    return q.order_by(Cheque.cheque_date.desc(), Cheque.cheque_id.desc()).all()


@router.get("/stats", response_model=ChequeStatsOut)
def cheque_stats(
        cheque_type: Optional[str] = Query(None, pattern="^(received|issued)$"),
        db: Session = Depends(get_db),
):
    q = db.query(
        Cheque.status,
        func.count(Cheque.cheque_id),
        func.coalesce(func.sum(Cheque.amount), 0),
    )
    if cheque_type:
        q = q.filter(Cheque.cheque_type == cheque_type)
    rows = q.group_by(Cheque.status).all()

    out = ChequeStatsOut()
    for s, count, amount in rows:
        if s in CHEQUE_STATUSES:
            setattr(out, s, ChequeStatusStat(count=int(count), amount=float(money(amount))))
    return out


@router.get("/{cheque_id}", response_model=ChequeOut)
def get_cheque(cheque_id: int, db: Session = Depends(get_db)):
    return get_cheque_or_404(db, cheque_id)


@router.get("/{cheque_id}/history", response_model=list[ChequeHistoryOut])
def cheque_history(cheque_id: int, db: Session = Depends(get_db)):
    get_cheque_or_404(db, cheque_id)
    return (
        db.query(ChequeStatusHistory)
        .filter(ChequeStatusHistory.cheque_id == cheque_id)
        .order_by(ChequeStatusHistory.history_id.asc())
        .all()
    )


@router.patch("/{cheque_id}/status", response_model=ChequeOut)
def update_cheque_status(
        cheque_id: int,
        payload: ChequeStatusPatch,
        db: Session = Depends(get_db),
        cache: SummaryCache = Depends(get_summary_cache),
):
    cheque = get_cheque_or_404(db, cheque_id)
    old = cheque.status
    new = payload.status

    if new not in ALLOWED_TRANSITIONS.get(old, set()):
        raise HTTPException(409, f"Cannot move cheque from {old} to {new}")

    cleared_on = payload.cleared_date or date.today()

    try:
        booked = False
        # the payment is gated before the cheque itself changes
        if new == "cleared" and cheque.obligation_id is not None:
            found = get_obligation_with_transactions(db, cheque.obligation_id)
            if not found:
                raise HTTPException(409, "Linked obligation no longer exists")
            obligation, txns = found
            post_transaction(
                db,
                obligation,
                txns,
                amount=cheque.amount,
                transaction_type=TXN_PAYMENT,
                payment_mode="cheque",
                payment_date=cleared_on,
                notes=f"Cheque {cheque.cheque_number} cleared",
                cheque_id=cheque.cheque_id,
            )
            booked = True

        cheque.status = new
        if payload.bank_transaction_id:
            cheque.bank_transaction_id = payload.bank_transaction_id
        if new == "cleared":
            cheque.cleared_date = cleared_on
        elif new == "bounced":
            cheque.bounce_charges = money(payload.bounce_charges or 0)

        db.add(
            ChequeStatusHistory(
                cheque_id=cheque.cheque_id,
                old_status=old,
                new_status=new,
                notes=payload.notes,
            )
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(cheque)
    if booked:
        cache.invalidate()
    logger.info("cheque %s moved %s -> %s", cheque_id, old, new)
    return cheque


@router.delete("/{cheque_id}")
def delete_cheque(cheque_id: int, db: Session = Depends(get_db)):
    cheque = get_cheque_or_404(db, cheque_id)

    # a cleared cheque may have produced a ledger transaction
    if cheque.status == "cleared":
        raise HTTPException(409, "Cannot delete a cleared cheque")

    db.delete(cheque)
    db.commit()
    return {"message": "Cheque deleted successfully"}
