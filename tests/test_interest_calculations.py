from datetime import date, datetime
from decimal import Decimal

import pytest

from ledgerbook.utils.interest_calculations import (
    compute_accrued_interest,
    days_elapsed,
    money,
    months_elapsed,
    normalize_interest_type,
    parse_rate,
)


def test_money_rounds_half_up():
    assert money("0.005") == Decimal("0.01")
    assert money(2.675) == Decimal("2.68")
    assert money(None) == Decimal("0.00")


def test_same_day_daily_interest_is_zero():
    interest = compute_accrued_interest(1000, 10, "simple-daily", date(2024, 1, 1), date(2024, 1, 1))
    assert interest == Decimal("0.00")


def test_flat_interest():
    interest = compute_accrued_interest(1000, 12, "flat", date(2024, 1, 1), date(2024, 1, 1))
    assert interest == Decimal("120.00")


@pytest.mark.parametrize("as_of", [date(2023, 1, 1), date(2024, 1, 1), date(2030, 12, 31)])
def test_flat_interest_ignores_as_of(as_of):
    assert compute_accrued_interest(1000, 12, "flat", date(2024, 1, 1), as_of) == Decimal("120.00")


def test_monthly_interest_whole_months():
    interest = compute_accrued_interest(500, 24, "simple-monthly", date(2024, 1, 1), date(2024, 4, 1))
    assert interest == Decimal("360.00")


def test_monthly_interest_with_day_fraction():
    # 1 month + 15/30
    interest = compute_accrued_interest(1000, 12, "simple-monthly", date(2024, 1, 10), date(2024, 2, 25))
    assert interest == Decimal("180.00")


def test_months_elapsed_negative_day_difference():
    assert months_elapsed(date(2024, 1, 20), date(2024, 3, 5)) == Decimal("1.5")


def test_daily_interest_thirty_days():
    # 1000 * 10% * 30 / 365 = 8.219...
    interest = compute_accrued_interest(1000, 10, "simple-daily", date(2024, 1, 1), date(2024, 1, 31))
    assert interest == Decimal("8.22")


def test_days_elapsed_rounds_partial_days_up():
    assert days_elapsed(datetime(2024, 1, 1, 0, 0), datetime(2024, 1, 2, 1, 0)) == 2
    assert days_elapsed(date(2024, 1, 1), date(2024, 1, 11)) == 10


@pytest.mark.parametrize("method", ["simple-daily", "simple-monthly", "flat", "none"])
def test_interest_never_negative_when_as_of_precedes_origin(method):
    interest = compute_accrued_interest(1000, 18, method, date(2024, 6, 1), date(2024, 1, 1))
    assert interest >= 0
    if method != "flat":
        assert interest == Decimal("0.00")


def test_no_interest_for_missing_or_bad_rate():
    for rate in (None, 0, "0", "abc", -5, "NaN"):
        assert compute_accrued_interest(1000, rate, "simple-daily", date(2024, 1, 1), date(2024, 12, 31)) == 0


def test_unknown_method_means_no_interest():
    assert compute_accrued_interest(1000, 10, "compound", date(2024, 1, 1), date(2024, 12, 31)) == 0
    assert compute_accrued_interest(1000, 10, None, date(2024, 1, 1), date(2024, 12, 31)) == 0


def test_non_positive_balance_accrues_nothing():
    assert compute_accrued_interest(-200, 10, "flat", date(2024, 1, 1), date(2024, 2, 1)) == 0
    assert compute_accrued_interest(0, 10, "simple-daily", date(2024, 1, 1), date(2024, 2, 1)) == 0


def test_flat_rounding_is_half_up():
    assert compute_accrued_interest(Decimal("0.10"), 5, "flat", None, date(2024, 1, 1)) == Decimal("0.01")


def test_legacy_interest_type_names():
    assert normalize_interest_type("daily") == "simple-daily"
    assert normalize_interest_type("Simple") == "simple-daily"
    assert normalize_interest_type("MONTHLY") == "simple-monthly"
    assert normalize_interest_type(" flat ") == "flat"
    assert normalize_interest_type("") == "none"


def test_parse_rate():
    assert parse_rate("12.5") == Decimal("12.5")
    assert parse_rate(True) == 0
    assert parse_rate("inf") == 0


def test_recomputation_is_stable():
    args = (Decimal("750.00"), Decimal("18"), "simple-daily", date(2024, 1, 1), date(2024, 3, 15))
    assert compute_accrued_interest(*args) == compute_accrued_interest(*args)
