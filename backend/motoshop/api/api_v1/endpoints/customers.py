"""Customer and receivable (công nợ) API"""

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from motoshop.api.errors import to_http_exception
from motoshop.core.deps import get_db
from motoshop.models.customer import Customer
from motoshop.models.payment_status import STATUS_LABELS
from motoshop.models.sales_order_payment import SalesOrderPayment
from motoshop.schemas.customer import CustomerCreate, CustomerResponse
from motoshop.schemas.receivable import (
    CustomerReceivablesResponse, PaymentAllocationResponse, PaymentRecordResponse,
    ReceivablePaymentCreate, ReceivablePaymentResponse, ReceivableResponse, ReceivableSummary
)
from motoshop.services.receivables import (
    LedgerSummary, PaymentRequest, Receivable, ReceivableLedger, ReceivablesError, SettlementService
)

router = APIRouter()


def build_receivable_response(receivable: Receivable) -> ReceivableResponse:
    """Build receivable response"""
    return ReceivableResponse(
        id=receivable.id,
        customer_id=receivable.customer_id,
        sales_order_id=receivable.sales_order_id,
        order_number=receivable.order_number,
        original_amount=receivable.original_amount,
        paid_amount=receivable.paid_amount,
        balance=receivable.balance,
        status=receivable.status.value,
        status_display=STATUS_LABELS[receivable.status],
        created_at=receivable.created_at,
    )


def build_summary_response(summary: LedgerSummary) -> ReceivableSummary:
    return ReceivableSummary(
        total_original=summary.total_original,
        total_paid=summary.total_paid,
        total_balance=summary.total_balance,
        outstanding_count=summary.outstanding_count,
    )


def build_payment_response(payment: SalesOrderPayment) -> PaymentRecordResponse:
    """Build payment record response"""
    return PaymentRecordResponse(
        id=payment.id,
        sales_order_id=payment.sales_order_id,
        receivable_id=payment.receivable_id,
        order_number=payment.sales_order.order_number if payment.sales_order else "",
        amount=payment.amount,
        payment_method=payment.payment_method,
        method_display=payment.method_display,
        transaction_id=payment.transaction_id,
        notes=payment.notes,
        paid_at=payment.paid_at,
    )


@router.post("/", response_model=CustomerResponse)
async def create_customer(
    *,
    db: AsyncSession = Depends(get_db),
    customer_in: CustomerCreate) -> Any:
    """Create customer"""
    customer = Customer(name=customer_in.name, phone=customer_in.phone)
    db.add(customer)
    await db.commit()
    return customer


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    *,
    db: AsyncSession = Depends(get_db),
    customer_id: int) -> Any:
    """Get customer"""
    customer = await db.get(Customer, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Không tìm thấy khách hàng")
    return customer


@router.get("/{customer_id}/receivables", response_model=CustomerReceivablesResponse)
async def get_receivables(
    *,
    db: AsyncSession = Depends(get_db),
    customer_id: int) -> Any:
    """Customer receivables with summary"""
    try:
        view = await ReceivableLedger(db).get_receivables(customer_id)
    except ReceivablesError as exc:
        raise to_http_exception(exc)

    return CustomerReceivablesResponse(
        customer_id=customer_id,
        receivables=[build_receivable_response(r) for r in view.receivables],
        summary=build_summary_response(view.summary),
    )


@router.post("/{customer_id}/receivables/payments", response_model=ReceivablePaymentResponse)
async def record_receivable_payment(
    *,
    db: AsyncSession = Depends(get_db),
    customer_id: int,
    payment_in: ReceivablePaymentCreate) -> Any:
    """
    Record a payment against customer receivables
    - with sales_order_id: the whole amount goes to that order
    - without: oldest unpaid/partial orders are paid first (FIFO)
    """
    request = PaymentRequest.build(
        customer_id,
        payment_in.amount,
        payment_in.payment_method,
        sales_order_id=payment_in.sales_order_id,
        transaction_id=payment_in.transaction_id,
        notes=payment_in.notes,
        paid_at=payment_in.paid_at,
    )

    try:
        outcome = await SettlementService(db).apply_payment(request)
    except ReceivablesError as exc:
        raise to_http_exception(exc)

    return ReceivablePaymentResponse(
        message=outcome.message,
        allocations=[
            PaymentAllocationResponse(
                receivable_id=a.receivable_id,
                sales_order_id=a.sales_order_id,
                amount_applied=a.amount_applied,
            )
            for a in outcome.result.allocations
        ],
        total_applied=outcome.result.total_applied,
        remaining_unapplied=outcome.result.remaining_unapplied,
        receivables_updated=[build_receivable_response(r) for r in outcome.receivables_updated],
        payment_records=[build_payment_response(p) for p in outcome.payment_records],
        updated_summary=build_summary_response(outcome.summary),
    )


@router.get("/{customer_id}/receivables/payments", response_model=List[PaymentRecordResponse])
async def get_receivable_payment_history(
    *,
    db: AsyncSession = Depends(get_db),
    customer_id: int) -> Any:
    """Receivable payment history of a customer"""
    try:
        payments = await ReceivableLedger(db).get_payment_history(customer_id)
    except ReceivablesError as exc:
        raise to_http_exception(exc)

    return [build_payment_response(p) for p in payments]
