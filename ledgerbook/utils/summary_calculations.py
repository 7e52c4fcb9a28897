from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ledgerbook.utils.balance_calculations import (
    PAYMENT_KINDS,
    reduce_transactions,
    txn_field,
    txn_kind,
)
from ledgerbook.utils.interest_calculations import compute_accrued_interest, money

ObligationPair = Tuple[Any, Sequence[Any]]


@dataclass
class AccountTotals:
    obligation_count: int = 0
    active_obligation_count: int = 0
    total_principal: Decimal = Decimal("0.00")
    total_paid: Decimal = Decimal("0.00")
    total_interest_paid: Decimal = Decimal("0.00")
    total_outstanding: Decimal = Decimal("0.00")
    last_payment_date: Optional[date] = None
    average_payment: Decimal = Decimal("0.00")
    payment_count: int = 0


@dataclass
class AccountSummaryRow:
    account_id: int
    name: str
    phone: Optional[str]
    totals: AccountTotals = field(default_factory=AccountTotals)


def _as_date(value) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def summarize_obligations(pairs: Iterable[ObligationPair], as_of_date: date) -> AccountTotals:
    """
    Totals for one ledger account from its (obligation, transactions) pairs.

    Outstanding is balance plus interest accrued from the obligation date to
    `as_of_date`. When several payments share the latest date, which one
    supplies it is not defined; only the date is reported.
    """
    totals = AccountTotals()
    principal_sum = Decimal("0")
    paid_sum = Decimal("0")
    interest_paid_sum = Decimal("0")
    outstanding_sum = Decimal("0")

    for obligation, transactions in pairs:
        totals.obligation_count += 1
        if obligation.is_active:
            totals.active_obligation_count += 1

        reduced = reduce_transactions(obligation.principal_amount, transactions)
        accrued = compute_accrued_interest(
            reduced.balance,
            obligation.interest_rate,
            obligation.interest_type,
            obligation.obligation_date,
            as_of_date,
        )

        principal_sum += money(obligation.principal_amount)
        paid_sum += reduced.total_paid
        interest_paid_sum += reduced.total_interest_paid
        outstanding_sum += reduced.balance + accrued

        for t in transactions:
            if txn_kind(t) not in PAYMENT_KINDS:
                continue
            totals.payment_count += 1
            paid_on = _as_date(txn_field(t, "payment_date"))
            if paid_on and (totals.last_payment_date is None or paid_on > totals.last_payment_date):
                totals.last_payment_date = paid_on

    totals.total_principal = money(principal_sum)
    totals.total_paid = money(paid_sum)
    totals.total_interest_paid = money(interest_paid_sum)
    totals.total_outstanding = money(outstanding_sum)
    if totals.payment_count:
        totals.average_payment = money(paid_sum / totals.payment_count)
    return totals


def build_account_summaries(
        rows: Iterable[Tuple[Any, Sequence[ObligationPair]]],
        as_of_date: date,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
) -> List[AccountSummaryRow]:
    """
    One summary row per account. With both date bounds set only accounts
    whose last payment falls inside the range are kept.
    """
    out = []
    for account, pairs in rows:
        totals = summarize_obligations(pairs, as_of_date)
        if date_from and date_to:
            last = totals.last_payment_date
            if last is None or not (date_from <= last <= date_to):
                continue
        out.append(
            AccountSummaryRow(
                account_id=account.account_id,
                name=account.name,
                phone=account.phone,
                totals=totals,
            )
        )
    return out


def grand_totals(rows: Iterable[AccountSummaryRow]) -> dict:
    acc = {
        "account_count": 0,
        "obligation_count": 0,
        "active_obligation_count": 0,
        "total_principal": Decimal("0.00"),
        "total_paid": Decimal("0.00"),
        "total_outstanding": Decimal("0.00"),
    }
    for r in rows:
        acc["account_count"] += 1
        acc["obligation_count"] += r.totals.obligation_count
        acc["active_obligation_count"] += r.totals.active_obligation_count
        acc["total_principal"] = money(acc["total_principal"] + r.totals.total_principal)
        acc["total_paid"] = money(acc["total_paid"] + r.totals.total_paid)
        acc["total_outstanding"] = money(acc["total_outstanding"] + r.totals.total_outstanding)
    return acc


def totals_as_dict(totals: AccountTotals) -> dict:
    return {
        "obligation_count": totals.obligation_count,
        "active_obligation_count": totals.active_obligation_count,
        "total_principal": float(totals.total_principal),
        "total_paid": float(totals.total_paid),
        "total_interest_paid": float(totals.total_interest_paid),
        "total_outstanding": float(totals.total_outstanding),
        "last_payment_date": totals.last_payment_date,
        "average_payment": float(totals.average_payment),
        "payment_count": totals.payment_count,
    }
