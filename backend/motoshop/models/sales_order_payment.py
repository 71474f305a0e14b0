"""
Sales order payment - money actually received against a receivable
"""

from datetime import datetime
from enum import Enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, DECIMAL
from sqlalchemy.orm import relationship
from motoshop.db.base import Base


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    EWALLET_MOMO = "ewallet_momo"
    EWALLET_ZALOPAY = "ewallet_zalopay"
    EWALLET_VNPAY = "ewallet_vnpay"


PAYMENT_METHOD_LABELS = {
    PaymentMethod.CASH: "Tiền mặt",
    PaymentMethod.CARD: "Thẻ",
    PaymentMethod.BANK_TRANSFER: "Chuyển khoản",
    PaymentMethod.EWALLET_MOMO: "Ví MoMo",
    PaymentMethod.EWALLET_ZALOPAY: "Ví ZaloPay",
    PaymentMethod.EWALLET_VNPAY: "Ví VNPay",
}


class SalesOrderPayment(Base):
    """Payment record

    One row per receivable touched by a settlement, so a single FIFO
    payment spread over three orders produces three rows.
    """
    __tablename__ = "sales_order_payments"

    id = Column(Integer, primary_key=True, index=True)

    sales_order_id = Column(Integer, ForeignKey("sales_orders.id"), nullable=False, index=True)
    receivable_id = Column(Integer, ForeignKey("customer_receivables.id"), nullable=False, index=True)

    amount = Column(DECIMAL(12, 2), nullable=False, comment="Amount applied")

    # cash / card / bank_transfer / ewallet_momo / ewallet_zalopay / ewallet_vnpay
    payment_method = Column(String(20), nullable=False, default=PaymentMethod.CASH.value, comment="Payment method")
    transaction_id = Column(String(100), comment="Bank or wallet reference")
    notes = Column(Text, comment="Notes")

    paid_at = Column(DateTime, default=datetime.utcnow, comment="Payment date")
    created_at = Column(DateTime, default=datetime.utcnow)

    sales_order = relationship("SalesOrder", back_populates="payments")
    receivable = relationship("CustomerReceivable", back_populates="payments")

    def __repr__(self):
        return f"<SalesOrderPayment {self.id}: {self.sales_order_id} {self.amount}>"

    @property
    def method_display(self) -> str:
        try:
            return PAYMENT_METHOD_LABELS[PaymentMethod(self.payment_method)]
        except ValueError:
            return self.payment_method
