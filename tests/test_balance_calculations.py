from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from ledgerbook.utils.balance_calculations import reduce_transactions


def txn(amount, kind, on=date(2024, 2, 1)):
    return {"amount": amount, "transaction_type": kind, "payment_date": on}


def test_no_transactions_balance_equals_principal():
    s = reduce_transactions(1000, [])
    assert s.balance == Decimal("1000.00")
    assert s.total_paid == 0
    assert s.total_interest_paid == 0


def test_single_payment():
    s = reduce_transactions(1000, [txn(400, "payment")])
    assert s.balance == Decimal("600.00")
    assert s.total_paid == Decimal("400.00")


def test_principal_kind_counts_as_paid():
    s = reduce_transactions(1000, [txn(100, "payment"), txn(250, "principal")])
    assert s.total_paid == Decimal("350.00")
    assert s.balance == Decimal("650.00")


def test_refund_adds_back():
    s = reduce_transactions(1000, [txn(400, "payment"), txn(100, "refund")])
    assert s.total_refund == Decimal("100.00")
    assert s.balance == Decimal("700.00")


def test_interest_and_mixed_do_not_move_balance():
    s = reduce_transactions(1000, [txn(50, "interest"), txn(120, "mixed")])
    assert s.balance == Decimal("1000.00")
    assert s.total_interest_paid == Decimal("50.00")
    assert s.total_mixed == Decimal("120.00")


def test_overpayment_renders_negative():
    s = reduce_transactions(500, [txn(700, "payment")])
    assert s.balance == Decimal("-200.00")


def test_accepts_objects_and_mixed_case_kinds():
    rows = [
        SimpleNamespace(amount=Decimal("10.10"), transaction_type="Payment", payment_date=date(2024, 1, 5)),
        SimpleNamespace(amount=Decimal("0.20"), transaction_type="PRINCIPAL", payment_date=date(2024, 1, 6)),
    ]
    s = reduce_transactions("100", rows)
    assert s.total_paid == Decimal("10.30")
    assert s.balance == Decimal("89.70")


def test_unknown_kind_is_ignored():
    s = reduce_transactions(100, [txn(30, "adjustment")])
    assert s.balance == Decimal("100.00")


def test_reducer_is_pure():
    rows = [txn(400, "payment"), txn(25, "interest")]
    assert reduce_transactions(1000, rows) == reduce_transactions(1000, rows)
    assert len(rows) == 2
