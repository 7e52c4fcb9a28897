import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, joinedload

from ledgerbook.utils.database import get_db
from ledgerbook.models.obligation_model import Obligation
from ledgerbook.schemas.report_schemas import (
    SummaryReportOut,
    ReminderReportOut,
    ReminderRowOut,
)
from ledgerbook.utils.balance_calculations import reduce_transactions
from ledgerbook.utils.interest_calculations import (
    compute_accrued_interest,
    money,
    normalize_interest_type,
    parse_rate,
)
from ledgerbook.utils.ledger_queries import (
    list_accounts_with_obligations,
    transactions_by_obligation,
)
from ledgerbook.utils.summary_cache import SummaryCache, get_summary_cache
from ledgerbook.utils.summary_calculations import (
    build_account_summaries,
    grand_totals,
    totals_as_dict,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/summary", response_model=SummaryReportOut)
def summary_report(
        account_type: Optional[str] = Query("mahajan", pattern="^(customer|mahajan)$"),
        status: str = Query("all", pattern="^(all|active|closed)$"),
        date_from: Optional[date] = Query(None),
        date_to: Optional[date] = Query(None),
        as_of: Optional[date] = Query(None),
        db: Session = Depends(get_db),
        cache: SummaryCache = Depends(get_summary_cache),
):
    if date_from and date_to and date_from > date_to:
        raise HTTPException(400, "date_from cannot be after date_to")

    as_of = as_of or date.today()
    key = (account_type, status, date_from, date_to, as_of)

    cached = cache.get(key)
    if cached is not None:
        return cached

    rows = build_account_summaries(
        list_accounts_with_obligations(db, account_type, status),
        as_of,
        date_from,
        date_to,
    )
    totals = grand_totals(rows)

    report = SummaryReportOut(
        account_type=account_type,
        status=status,
        as_of=as_of,
        date_from=date_from,
        date_to=date_to,
        rows=[
            {
                "account_id": r.account_id,
                "name": r.name,
                "phone": r.phone,
                "totals": totals_as_dict(r.totals),
            }
            for r in rows
        ],
        totals={k: float(v) if isinstance(v, Decimal) else v for k, v in totals.items()},
    )
    cache.set(key, report)
    return report


@router.post("/summary/refresh")
def refresh_summary(cache: SummaryCache = Depends(get_summary_cache)):
    cleared = len(cache)
    cache.invalidate()
    logger.info("summary cache refreshed, %d entries dropped", cleared)
    return {"message": "refreshed", "cleared": cleared}


@router.get("/reminders", response_model=ReminderReportOut)
def bill_reminders(as_of: Optional[date] = Query(None), db: Session = Depends(get_db)):
    """
    Active obligations due on or before `as_of` that still carry a balance.
    Interest here runs from the due date, not the obligation date.
    """
    as_of = as_of or date.today()

    obligations = (
        db.query(Obligation)
        .options(joinedload(Obligation.account))
        .filter(
            Obligation.is_active.is_(True),
            Obligation.due_date.isnot(None),
            Obligation.due_date <= as_of,
        )
        .order_by(Obligation.due_date.asc(), Obligation.obligation_id.asc())
        .all()
    )
    txns = transactions_by_obligation(db, [o.obligation_id for o in obligations])

    out = []
    total_outstanding = Decimal("0")
    total_due = Decimal("0")

    for o in obligations:
        reduced = reduce_transactions(o.principal_amount, txns[o.obligation_id])
        if reduced.balance <= 0:
            continue

        interest = compute_accrued_interest(
            reduced.balance, o.interest_rate, o.interest_type, o.due_date, as_of
        )
        unpaid_interest = max(Decimal("0"), interest - reduced.total_interest_paid)
        amount_due = money(reduced.balance + unpaid_interest)

        total_outstanding += reduced.balance
        total_due += amount_due

        out.append(
            ReminderRowOut(
                obligation_id=o.obligation_id,
                reference_no=o.reference_no or "N/A",
                account_id=o.account_id,
                account_name=o.account.name if o.account else "Unknown",
                principal_amount=float(o.principal_amount),
                obligation_date=o.obligation_date,
                due_date=o.due_date,
                interest_rate=float(parse_rate(o.interest_rate)),
                interest_type=normalize_interest_type(o.interest_type),
                outstanding_balance=float(reduced.balance),
                interest=float(interest),
                amount_due=float(amount_due),
            )
        )

    return ReminderReportOut(
        as_of=as_of,
        rows=out,
        total_outstanding=float(money(total_outstanding)),
        total_due=float(money(total_due)),
    )
