"""
Sales order model - retail sale that may be bought on credit
"""

from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, DECIMAL
from sqlalchemy.orm import relationship
from motoshop.db.base import Base
from motoshop.models.payment_status import PaymentStatus, STATUS_LABELS, derive_status


class SalesOrder(Base):
    """Sales order

    Creating an order opens exactly one CustomerReceivable for its total.
    paid_amount mirrors the payments recorded against that receivable.
    """
    __tablename__ = "sales_orders"

    id = Column(Integer, primary_key=True, index=True)

    # Format: SO20241203001
    order_number = Column(String(50), unique=True, nullable=False, index=True, comment="Order number")

    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    total_amount = Column(DECIMAL(12, 2), nullable=False, comment="Order total")
    paid_amount = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0.00"), comment="Paid so far")

    # Set when the order becomes fully paid
    payment_date = Column(DateTime, comment="Date the order was settled")

    notes = Column(Text, comment="Notes")

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = relationship("Customer", back_populates="sales_orders")
    receivable = relationship("CustomerReceivable", back_populates="sales_order", uselist=False)
    payments = relationship("SalesOrderPayment", back_populates="sales_order", order_by="SalesOrderPayment.id")

    def __repr__(self):
        return f"<SalesOrder {self.order_number}: {self.total_amount}>"

    @property
    def payment_status(self) -> PaymentStatus:
        return derive_status(self.total_amount, self.paid_amount or Decimal("0"))

    @property
    def payment_status_display(self) -> str:
        return STATUS_LABELS[self.payment_status]
