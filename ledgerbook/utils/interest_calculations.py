import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

DateLike = Union[date, datetime]

INTEREST_NONE = "none"
INTEREST_SIMPLE_DAILY = "simple-daily"
INTEREST_SIMPLE_MONTHLY = "simple-monthly"
INTEREST_FLAT = "flat"

INTEREST_TYPES = (INTEREST_NONE, INTEREST_SIMPLE_DAILY, INTEREST_SIMPLE_MONTHLY, INTEREST_FLAT)

# names written by older front ends
_LEGACY_INTEREST_TYPES = {
    "daily": INTEREST_SIMPLE_DAILY,
    "simple": INTEREST_SIMPLE_DAILY,
    "simple_daily": INTEREST_SIMPLE_DAILY,
    "monthly": INTEREST_SIMPLE_MONTHLY,
    "simple_monthly": INTEREST_SIMPLE_MONTHLY,
}

DAYS_IN_YEAR = Decimal("365")
DAYS_IN_MONTH = Decimal("30")
ZERO = Decimal("0.00")


def money(x) -> Decimal:
    """Always return 2-decimal Decimal with HALF_UP rounding."""
    if x is None:
        x = 0
    if not isinstance(x, Decimal):
        x = Decimal(str(x))
    return x.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def normalize_interest_type(value) -> str:
    """
    Map whatever is stored in interest_type onto one of INTEREST_TYPES.
    Anything unrecognised means no interest.
    """
    if value is None:
        return INTEREST_NONE
    key = str(value).strip().lower()
    if key in INTEREST_TYPES:
        return key
    return _LEGACY_INTEREST_TYPES.get(key, INTEREST_NONE)


def parse_rate(value) -> Decimal:
    """Percent rate as Decimal; missing, malformed or negative rates are 0."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        rate = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not rate.is_finite() or rate <= 0:
        return Decimal("0")
    return rate


def _as_datetime(d: DateLike) -> datetime:
    if isinstance(d, datetime):
        return d
    return datetime(d.year, d.month, d.day)


def days_elapsed(origin: DateLike, as_of: DateLike) -> int:
    """
    Whole days from origin to as_of, rounded up, never negative.

    Plain dates always differ by whole days, so rounding only matters when
    a datetime is passed.
    """
    delta = _as_datetime(as_of) - _as_datetime(origin)
    days = math.ceil(delta.total_seconds() / 86400)
    return max(0, days)


def months_elapsed(origin: DateLike, as_of: DateLike) -> Decimal:
    """
    Calendar months between the two dates plus the leftover day difference
    over a 30 day month. Clamped to zero.

      2024-01-01 -> 2024-04-01 = 3
      2024-01-10 -> 2024-02-25 = 1.5
    """
    whole = (as_of.year - origin.year) * 12 + (as_of.month - origin.month)
    fraction = Decimal(as_of.day - origin.day) / DAYS_IN_MONTH
    months = Decimal(whole) + fraction
    return months if months > 0 else Decimal("0")


def compute_accrued_interest(
        balance,
        interest_rate_percent,
        interest_type,
        origin_date: Optional[DateLike],
        as_of_date: DateLike,
) -> Decimal:
    """
    Interest owed on `balance` as of `as_of_date`.

      none            -> 0
      simple-daily    -> balance * rate% * days / 365
      simple-monthly  -> balance * rate% * (months + day_diff / 30)
      flat            -> balance * rate%, one time, date independent

    Display only, nothing is persisted. Never negative.
    """
    method = normalize_interest_type(interest_type)
    rate = parse_rate(interest_rate_percent)
    if method == INTEREST_NONE or rate == 0:
        return ZERO

    balance = money(balance)
    if balance <= 0:
        return ZERO

    r = rate / Decimal("100")

    if method == INTEREST_FLAT:
        return money(balance * r)

    if origin_date is None:
        return ZERO

    if method == INTEREST_SIMPLE_DAILY:
        days = Decimal(days_elapsed(origin_date, as_of_date))
        return money(balance * r * days / DAYS_IN_YEAR)

    # INTEREST_SIMPLE_MONTHLY
    return money(balance * r * months_elapsed(origin_date, as_of_date))
