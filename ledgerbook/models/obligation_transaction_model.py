from sqlalchemy import (
    Column, Integer, String, Date, DateTime, Numeric, Text, ForeignKey
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ledgerbook.utils.database import Base


class ObligationTransaction(Base):
    __tablename__ = "obligation_transactions"

    transaction_id = Column(Integer, primary_key=True, index=True)
    obligation_id = Column(
        Integer,
        ForeignKey("obligations.obligation_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    amount = Column(Numeric(12, 2), nullable=False)
    payment_date = Column(Date, nullable=False)

    # payment / principal / interest / refund / mixed
    transaction_type = Column(String(20), nullable=False)
    payment_mode = Column(String(20), nullable=False, default="cash")

    # set when the row was produced by clearing a cheque
    cheque_id = Column(Integer, ForeignKey("cheques.cheque_id"), nullable=True)

    notes = Column(Text, nullable=True)

    created_on = Column(DateTime, server_default=func.now())

    obligation = relationship("Obligation", back_populates="transactions")
