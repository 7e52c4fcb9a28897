from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from ledgerbook.utils.interest_calculations import money

TXN_PAYMENT = "payment"
TXN_PRINCIPAL = "principal"
TXN_INTEREST = "interest"
TXN_REFUND = "refund"
TXN_MIXED = "mixed"

TRANSACTION_TYPES = (TXN_PAYMENT, TXN_PRINCIPAL, TXN_INTEREST, TXN_REFUND, TXN_MIXED)

# kinds that reduce principal
PAYMENT_KINDS = frozenset({TXN_PAYMENT, TXN_PRINCIPAL})


@dataclass(frozen=True)
class BalanceSummary:
    total_paid: Decimal
    total_interest_paid: Decimal
    total_refund: Decimal
    total_mixed: Decimal
    balance: Decimal


def txn_field(txn: Any, name: str):
    """Read a field from an ORM row, a pydantic model or a plain dict."""
    if isinstance(txn, dict):
        return txn.get(name)
    return getattr(txn, name, None)


def txn_kind(txn: Any) -> str:
    return (txn_field(txn, "transaction_type") or "").strip().lower()


def reduce_transactions(principal, transactions: Iterable[Any]) -> BalanceSummary:
    """
    Fold an obligation's transactions into paid / interest / refund totals.

      balance = principal - (payment + principal) + refund

    Interest payments and mixed payments are reported but do not move the
    balance. Over-payment is not an error, it shows as a negative balance.
    """
    paid = Decimal("0")
    interest = Decimal("0")
    refund = Decimal("0")
    mixed = Decimal("0")

    for t in transactions or ():
        amount = money(txn_field(t, "amount"))
        kind = txn_kind(t)
        if kind in PAYMENT_KINDS:
            paid += amount
        elif kind == TXN_INTEREST:
            interest += amount
        elif kind == TXN_REFUND:
            refund += amount
        elif kind == TXN_MIXED:
            mixed += amount

    return BalanceSummary(
        total_paid=money(paid),
        total_interest_paid=money(interest),
        total_refund=money(refund),
        total_mixed=money(mixed),
        balance=money(money(principal) - paid + refund),
    )
