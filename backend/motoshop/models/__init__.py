# ORM models

from motoshop.models.customer import Customer
from motoshop.models.sales_order import SalesOrder
from motoshop.models.customer_receivable import CustomerReceivable
from motoshop.models.sales_order_payment import SalesOrderPayment, PaymentMethod
from motoshop.models.payment_status import PaymentStatus

__all__ = [
    "Customer",
    "SalesOrder",
    "CustomerReceivable",
    "SalesOrderPayment",
    "PaymentMethod",
    "PaymentStatus",
]
