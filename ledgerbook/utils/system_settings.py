from typing import Optional

from sqlalchemy.orm import Session

from ledgerbook.models.system_settings_model import SystemSetting

ALLOW_OVERPAYMENT = "ALLOW_OVERPAYMENT"
AUTO_CLOSE_SETTLED = "AUTO_CLOSE_SETTLED"

# toggles read through get_bool_setting; stored as "true" / "false"
BOOLEAN_SETTINGS = frozenset({ALLOW_OVERPAYMENT, AUTO_CLOSE_SETTLED})

_TRUTHY = {"1", "true", "yes", "y", "on"}
_FALSY = {"0", "false", "no", "n", "off"}


def parse_bool_value(value) -> Optional[bool]:
    """True / False for a recognised flag spelling, None otherwise."""
    v = str(value).strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    return None


def normalize_setting_value(key: str, value: str) -> str:
    """
    Canonical stored form of a setting value. Boolean toggles become
    "true" / "false"; ValueError when a toggle gets anything else.
    """
    value = str(value).strip()
    if key in BOOLEAN_SETTINGS:
        flag = parse_bool_value(value)
        if flag is None:
            raise ValueError(f"{key} must be true or false, got {value!r}")
        return "true" if flag else "false"
    return value


def get_setting(db: Session, key: str, default: str) -> str:
    row = db.query(SystemSetting).filter(SystemSetting.key == key).first()
    return row.value if row else default


def get_bool_setting(db: Session, key: str, default: bool = False) -> bool:
    value = get_setting(db, key, "true" if default else "false")
    return str(value).strip().lower() in _TRUTHY
