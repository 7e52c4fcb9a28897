from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ledgerbook.models.ledger_account_model import LedgerAccount
from ledgerbook.models.obligation_model import Obligation
from ledgerbook.models.obligation_transaction_model import ObligationTransaction

STATUS_ALL = "all"
STATUS_ACTIVE = "active"
STATUS_CLOSED = "closed"


def _apply_status(q, status: Optional[str]):
    status = (status or STATUS_ALL).lower()
    if status == STATUS_ACTIVE:
        return q.filter(Obligation.is_active.is_(True))
    if status == STATUS_CLOSED:
        return q.filter(Obligation.is_active.is_(False))
    return q


def transactions_by_obligation(
        db: Session, obligation_ids: List[int]
) -> Dict[int, List[ObligationTransaction]]:
    grouped: Dict[int, List[ObligationTransaction]] = defaultdict(list)
    if not obligation_ids:
        return grouped

    rows = (
        db.query(ObligationTransaction)
        .filter(ObligationTransaction.obligation_id.in_(obligation_ids))
        .order_by(
            ObligationTransaction.payment_date.asc(),
            ObligationTransaction.transaction_id.asc(),
        )
        .all()
    )
    for r in rows:
        grouped[r.obligation_id].append(r)
    return grouped


def get_obligation_with_transactions(
        db: Session, obligation_id: int
) -> Optional[Tuple[Obligation, List[ObligationTransaction]]]:
    obligation = db.query(Obligation).filter(Obligation.obligation_id == obligation_id).first()
    if not obligation:
        return None
    txns = transactions_by_obligation(db, [obligation_id])
    return obligation, txns[obligation_id]


def list_account_obligations(
        db: Session, account_id: int, status: Optional[str] = None
) -> List[Tuple[Obligation, List[ObligationTransaction]]]:
    q = db.query(Obligation).filter(Obligation.account_id == account_id)
    obligations = _apply_status(q, status).order_by(Obligation.obligation_date.desc()).all()

    txns = transactions_by_obligation(db, [o.obligation_id for o in obligations])
    return [(o, txns[o.obligation_id]) for o in obligations]


def list_accounts_with_obligations(
        db: Session, account_type: Optional[str] = None, status: Optional[str] = None
) -> List[Tuple[LedgerAccount, List[Tuple[Obligation, List[ObligationTransaction]]]]]:
    """
    Accounts that own at least one obligation matching `status`, each with
    its obligations and their transactions. Three queries in total.
    """
    q = db.query(Obligation).join(LedgerAccount, LedgerAccount.account_id == Obligation.account_id)
    if account_type:
        q = q.filter(LedgerAccount.account_type == account_type.lower())
    obligations = _apply_status(q, status).order_by(Obligation.obligation_id.asc()).all()
    if not obligations:
        return []

    txns = transactions_by_obligation(db, [o.obligation_id for o in obligations])

    by_account: Dict[int, list] = defaultdict(list)
    for o in obligations:
        by_account[o.account_id].append((o, txns[o.obligation_id]))

    accounts = (
        db.query(LedgerAccount)
        .filter(LedgerAccount.account_id.in_(list(by_account.keys())))
        .order_by(LedgerAccount.name.asc(), LedgerAccount.account_id.asc())
        .all()
    )
    return [(a, by_account[a.account_id]) for a in accounts]
