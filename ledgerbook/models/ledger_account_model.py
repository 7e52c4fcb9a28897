# ledgerbook/models/ledger_account_model.py

from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ledgerbook.utils.database import Base


class LedgerAccount(Base):
    __tablename__ = "ledger_accounts"

    __table_args__ = (
        Index("ix_ledger_accounts_type_name", "account_type", "name"),
    )

    account_id = Column(Integer, primary_key=True, index=True)

    # customer / mahajan
    account_type = Column(String(20), nullable=False, server_default="customer")

    name = Column(String(150), nullable=False)
    phone = Column(String(32), nullable=True)
    email = Column(String(150), nullable=True)
    address = Column(Text, nullable=True)
    gst_number = Column(String(32), nullable=True)

    # day of week/month the mahajan expects payment, free text
    payment_day = Column(String(20), nullable=True)

    created_on = Column(DateTime, server_default=func.now())

    obligations = relationship(
        "Obligation",
        back_populates="account",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<LedgerAccount(id={self.account_id}, type={self.account_type}, name={self.name})>"
