# ledgerbook/models/order_model.py

from sqlalchemy import Column, Integer, String, Date, DateTime, Text, Index
from sqlalchemy.sql import func

from ledgerbook.utils.database import Base


class Order(Base):
    __tablename__ = "orders"

    __table_args__ = (
        Index("ix_orders_status_date", "status", "order_date"),
    )

    order_id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String(50), nullable=False, unique=True, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    order_date = Column(Date, nullable=False)

    # pending / processing / completed / delivered
    status = Column(String(20), nullable=False, server_default="pending")

    notes = Column(Text, nullable=True)

    created_on = Column(DateTime, server_default=func.now())
    updated_on = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Order(id={self.order_id}, number={self.order_number}, status={self.status})>"
