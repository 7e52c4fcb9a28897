import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence, Tuple

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ledgerbook.models.obligation_model import Obligation
from ledgerbook.models.obligation_transaction_model import ObligationTransaction
from ledgerbook.utils.balance_calculations import TXN_MIXED, PAYMENT_KINDS, reduce_transactions
from ledgerbook.utils.interest_calculations import money
from ledgerbook.utils.system_settings import (
    ALLOW_OVERPAYMENT,
    AUTO_CLOSE_SETTLED,
    get_bool_setting,
)

logger = logging.getLogger(__name__)

# kinds checked against the outstanding balance before insert
CAPPED_KINDS = PAYMENT_KINDS | {TXN_MIXED}


def post_transaction(
        db: Session,
        obligation: Obligation,
        existing: Sequence[ObligationTransaction],
        amount,
        transaction_type: str,
        payment_mode: str,
        payment_date: Optional[date] = None,
        notes: Optional[str] = None,
        cheque_id: Optional[int] = None,
) -> Tuple[ObligationTransaction, Decimal]:
    """
    Validate and stage one transaction against an obligation.

    Raises HTTPException(400) before anything is added when the obligation
    is closed, the amount is not positive, or a payment would exceed the
    outstanding balance (unless ALLOW_OVERPAYMENT is on). When the balance
    reaches zero and AUTO_CLOSE_SETTLED is on the obligation is closed too.
    Nothing is committed; the caller owns the transaction.
    """
    if not obligation.is_active:
        raise HTTPException(400, "Obligation is closed")

    amount = money(amount)
    if amount <= 0:
        raise HTTPException(400, "Amount must be > 0")

    outstanding = reduce_transactions(obligation.principal_amount, existing).balance

    if transaction_type in CAPPED_KINDS and not get_bool_setting(db, ALLOW_OVERPAYMENT):
        if amount > outstanding:
            logger.info(
                "payment rejected on obligation %s: %s > outstanding %s",
                obligation.obligation_id, amount, outstanding,
            )
            raise HTTPException(
                400, f"Payment amount cannot exceed outstanding amount of {outstanding:.2f}"
            )

    txn = ObligationTransaction(
        obligation_id=obligation.obligation_id,
        amount=amount,
        payment_date=payment_date or date.today(),
        transaction_type=transaction_type,
        payment_mode=payment_mode,
        cheque_id=cheque_id,
        notes=notes,
    )
    new_balance = reduce_transactions(obligation.principal_amount, [*existing, txn]).balance

    db.add(txn)
    if new_balance <= 0 and get_bool_setting(db, AUTO_CLOSE_SETTLED):
        obligation.is_active = False
        logger.info("obligation %s settled and closed", obligation.obligation_id)

    return txn, new_balance
