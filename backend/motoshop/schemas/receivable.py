"""Customer receivable Schema"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from motoshop.models.sales_order_payment import PaymentMethod


class ReceivableResponse(BaseModel):
    """Receivable (công nợ) of one sales order"""
    id: int
    customer_id: int
    sales_order_id: int
    order_number: str = ""
    original_amount: Decimal
    paid_amount: Decimal
    balance: Decimal
    status: str
    status_display: str
    created_at: datetime


class ReceivableSummary(BaseModel):
    """Totals over all receivables of a customer"""
    total_original: Decimal = Decimal("0.00")
    total_paid: Decimal = Decimal("0.00")
    total_balance: Decimal = Decimal("0.00")
    outstanding_count: int = 0


class CustomerReceivablesResponse(BaseModel):
    customer_id: int
    receivables: List[ReceivableResponse]
    summary: ReceivableSummary


class ReceivablePaymentCreate(BaseModel):
    """Record a receivable payment

    Without sales_order_id the amount is applied to the oldest open orders first.
    """
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    payment_method: PaymentMethod
    sales_order_id: Optional[int] = None
    transaction_id: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    paid_at: Optional[datetime] = None


class PaymentRecordResponse(BaseModel):
    """Payment record"""
    id: int
    sales_order_id: int
    receivable_id: int
    order_number: str = ""
    amount: Decimal
    payment_method: str
    method_display: str
    transaction_id: Optional[str]
    notes: Optional[str]
    paid_at: datetime


class PaymentAllocationResponse(BaseModel):
    receivable_id: int
    sales_order_id: int
    amount_applied: Decimal


class ReceivablePaymentResponse(BaseModel):
    """Result of recording a receivable payment"""
    success: bool = True
    message: str
    allocations: List[PaymentAllocationResponse]
    total_applied: Decimal
    remaining_unapplied: Decimal
    receivables_updated: List[ReceivableResponse]
    payment_records: List[PaymentRecordResponse]
    updated_summary: ReceivableSummary
