"""
Customer receivable model - one sales order's debt position
"""

from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, DateTime, ForeignKey, DECIMAL, CheckConstraint
from sqlalchemy.orm import relationship
from motoshop.db.base import Base
from motoshop.models.payment_status import PaymentStatus, STATUS_LABELS, derive_status


class CustomerReceivable(Base):
    """Receivable (công nợ) of a customer for one sales order

    Rules:
    - created together with the sales order: original_amount = order total, paid_amount = 0
    - only payment settlement changes paid_amount, and only upwards
    - balance and status are derived, never stored
    - never deleted; a paid receivable stays as history
    """
    __tablename__ = "customer_receivables"
    __table_args__ = (
        CheckConstraint("paid_amount >= 0", name="ck_receivable_paid_non_negative"),
        CheckConstraint("paid_amount <= original_amount", name="ck_receivable_paid_within_original"),
    )

    id = Column(Integer, primary_key=True, index=True)

    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    sales_order_id = Column(Integer, ForeignKey("sales_orders.id"), nullable=False, unique=True, index=True)

    original_amount = Column(DECIMAL(12, 2), nullable=False, comment="Amount owed when the order was created")
    paid_amount = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0.00"), comment="Amount paid so far")

    # FIFO settlement key, oldest first
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = relationship("Customer", back_populates="receivables")
    sales_order = relationship("SalesOrder", back_populates="receivable")
    payments = relationship("SalesOrderPayment", back_populates="receivable")

    def __repr__(self):
        return f"<CustomerReceivable {self.customer_id}/{self.sales_order_id}: {self.balance}>"

    @property
    def balance(self) -> Decimal:
        return (self.original_amount or Decimal("0")) - (self.paid_amount or Decimal("0"))

    @property
    def status(self) -> PaymentStatus:
        return derive_status(self.original_amount, self.paid_amount or Decimal("0"))

    @property
    def status_display(self) -> str:
        return STATUS_LABELS[self.status]
