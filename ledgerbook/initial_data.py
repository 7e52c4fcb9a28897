import logging

from sqlalchemy.orm import Session

from ledgerbook.models.expense_model import ExpenseCategory
from ledgerbook.models.system_settings_model import SystemSetting
from ledgerbook.utils.database import SessionLocal
from ledgerbook.utils.system_settings import ALLOW_OVERPAYMENT, AUTO_CLOSE_SETTLED

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = [
    (ALLOW_OVERPAYMENT, "false", "Accept payments larger than the outstanding balance"),
    (AUTO_CLOSE_SETTLED, "false", "Deactivate an obligation once its balance reaches zero"),
]

DEFAULT_EXPENSE_CATEGORIES = ["Rent", "Salaries", "Transport", "Utilities", "Other"]


def seed(db: Session) -> int:
    """Insert missing defaults. Existing rows are left untouched."""
    added = 0

    for key, value, description in DEFAULT_SETTINGS:
        if not db.query(SystemSetting).filter(SystemSetting.key == key).first():
            db.add(SystemSetting(key=key, value=value, description=description))
            added += 1

    for name in DEFAULT_EXPENSE_CATEGORIES:
        if not db.query(ExpenseCategory).filter(ExpenseCategory.category_name == name).first():
            db.add(ExpenseCategory(category_name=name, is_active=True))
            added += 1

    db.commit()
    return added


def init_seed():
    db = SessionLocal()
    try:
        added = seed(db)
        logger.info("seeded %d default rows", added)
    finally:
        db.close()
