# ledgerbook/models/expense_model.py

from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Numeric, Text, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ledgerbook.utils.database import Base


class ExpenseCategory(Base):
    __tablename__ = "expense_categories"

    category_id = Column(Integer, primary_key=True, index=True)
    category_name = Column(String(120), nullable=False, unique=True, index=True)

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ExpenseCategory(id={self.category_id}, name={self.category_name})>"


class Expense(Base):
    __tablename__ = "expenses"

    expense_id = Column(Integer, primary_key=True, index=True)

    category_id = Column(
        Integer,
        ForeignKey("expense_categories.category_id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )

    expense_date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)

    payee = Column(String(180), nullable=True)
    description = Column(Text, nullable=True)
    payment_mode = Column(String(50), nullable=True)
    reference_no = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    category = relationship("ExpenseCategory")
