# ledgerbook/models/obligation_model.py

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Numeric,
    Boolean,
    Text,
    ForeignKey,
    Index,
)
from sqlalchemy.sql import func, expression
from sqlalchemy.orm import relationship

from ledgerbook.utils.database import Base


class Obligation(Base):
    __tablename__ = "obligations"

    __table_args__ = (
        Index("ix_obligations_account_active", "account_id", "is_active"),
        Index("ix_obligations_due_date", "due_date"),
    )

    obligation_id = Column(Integer, primary_key=True, index=True)

    account_id = Column(
        Integer,
        ForeignKey("ledger_accounts.account_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # BILL / LOAN / SALE, stored lower-case
    obligation_type = Column(String(10), nullable=False, server_default="bill")
    reference_no = Column(String(50), nullable=True)

    principal_amount = Column(Numeric(12, 2), nullable=False)
    obligation_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)

    # percent, NULL means no interest
    interest_rate = Column(Numeric(7, 3), nullable=True)
    # none / simple-daily / simple-monthly / flat
    interest_type = Column(String(20), nullable=False, server_default="none")

    description = Column(Text, nullable=True)

    is_active = Column(Boolean, nullable=False, server_default=expression.true(), default=True)

    created_on = Column(DateTime, server_default=func.now())
    updated_on = Column(DateTime, server_default=func.now(), onupdate=func.now())

    account = relationship("LedgerAccount", back_populates="obligations")
    transactions = relationship(
        "ObligationTransaction",
        back_populates="obligation",
        order_by="ObligationTransaction.payment_date",
        passive_deletes=True,
    )
