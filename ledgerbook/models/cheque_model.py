# ledgerbook/models/cheque_model.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Numeric,
    Text,
    ForeignKey,
    Index,
    func,
)
from sqlalchemy.orm import relationship

from ledgerbook.utils.database import Base


class Cheque(Base):
    __tablename__ = "cheques"

    cheque_id = Column(Integer, primary_key=True, index=True)

    # received / issued
    cheque_type = Column(String(10), nullable=False)

    cheque_number = Column(String(50), nullable=False)
    cheque_date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    bank_name = Column(String(120), nullable=False)

    # pending -> processing -> cleared / bounced
    status = Column(String(20), nullable=False, server_default="pending")

    bounce_charges = Column(Numeric(12, 2), nullable=False, server_default="0")
    bank_transaction_id = Column(String(100), nullable=True)

    account_id = Column(
        Integer,
        ForeignKey("ledger_accounts.account_id", ondelete="SET NULL"),
        nullable=True,
    )
    # when set, clearing the cheque books a payment against this obligation
    obligation_id = Column(
        Integer,
        ForeignKey("obligations.obligation_id", ondelete="SET NULL"),
        nullable=True,
    )

    party_name = Column(String(150), nullable=True)
    notes = Column(Text, nullable=True)
    cleared_date = Column(Date, nullable=True)

    created_on = Column(DateTime, server_default=func.now(), nullable=True)

    account = relationship("LedgerAccount")
    history = relationship(
        "ChequeStatusHistory",
        back_populates="cheque",
        cascade="all, delete-orphan",
        order_by="ChequeStatusHistory.history_id",
    )

    __table_args__ = (
        Index("ix_cheques_type_status", "cheque_type", "status"),
    )


class ChequeStatusHistory(Base):
    __tablename__ = "cheque_status_history"

    history_id = Column(Integer, primary_key=True, index=True)
    cheque_id = Column(
        Integer,
        ForeignKey("cheques.cheque_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    old_status = Column(String(20), nullable=True)
    new_status = Column(String(20), nullable=False)
    notes = Column(Text, nullable=True)

    changed_on = Column(DateTime, server_default=func.now(), nullable=False)

    cheque = relationship("Cheque", back_populates="history")
