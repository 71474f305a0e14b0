"""
Settlement status shared by receivables and sales orders.
The status is never stored; it is a function of (original amount, paid amount).
"""

from decimal import Decimal
from enum import Enum


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


STATUS_LABELS = {
    PaymentStatus.UNPAID: "Chưa thanh toán",
    PaymentStatus.PARTIAL: "Thanh toán một phần",
    PaymentStatus.PAID: "Đã thanh toán",
}


def derive_status(original_amount: Decimal, paid_amount: Decimal) -> PaymentStatus:
    """paid iff nothing is owed, unpaid iff nothing was paid, partial otherwise"""
    if original_amount - paid_amount <= Decimal("0"):
        return PaymentStatus.PAID
    if paid_amount <= Decimal("0"):
        return PaymentStatus.UNPAID
    return PaymentStatus.PARTIAL
