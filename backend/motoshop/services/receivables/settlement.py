"""
Settlement applier - turns an allocation plan into persisted state.

Flow for one payment, all under the customer's lock:
1. read the customer's receivables through the ledger
2. let the allocation policy decide
3. for every allocation: conditional UPDATE of paid_amount (must still equal
   the value read in step 1), update the sales order, insert a payment record
4. commit once

Any failure rolls the whole unit back; nothing is committed partially.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from motoshop.models.customer_receivable import CustomerReceivable
from motoshop.models.payment_status import PaymentStatus
from motoshop.models.sales_order import SalesOrder
from motoshop.models.sales_order_payment import SalesOrderPayment
from motoshop.services.receivables.allocation import allocate
from motoshop.services.receivables.domain import (
    LedgerSummary, LedgerView, PaymentAllocation, PaymentRequest, Receivable, SettlementResult
)
from motoshop.services.receivables.errors import (
    ConcurrentModification, PersistenceFailure, ReceivablesError
)
from motoshop.services.receivables.ledger import ReceivableLedger, summarize
from motoshop.services.receivables.locks import CustomerLocks, customer_locks
from motoshop.services.receivables.money import format_money

logger = logging.getLogger(__name__)

NOTE_PREFIX = "[Công nợ]"
DEFAULT_NOTE = "[Thanh toán công nợ]"


@dataclass(frozen=True)
class SettlementOutcome:
    message: str
    result: SettlementResult
    receivables_updated: Tuple[Receivable, ...]
    payment_records: Tuple[SalesOrderPayment, ...]
    summary: LedgerSummary


def payment_note(notes: str = None) -> str:
    return f"{NOTE_PREFIX} {notes}" if notes else DEFAULT_NOTE


def build_message(amount: Decimal, updated: Tuple[Receivable, ...]) -> str:
    """e.g. Đã ghi nhận thanh toán 120.000 VND cho 2 đơn hàng (1 đơn đã tất toán, 1 đơn thanh toán một phần)"""
    settled = sum(1 for r in updated if r.status is PaymentStatus.PAID)
    partial = len(updated) - settled

    parts = []
    if settled:
        parts.append(f"{settled} đơn đã tất toán")
    if partial:
        parts.append(f"{partial} đơn thanh toán một phần")

    return (
        f"Đã ghi nhận thanh toán {format_money(amount)} cho {len(updated)} đơn hàng "
        f"({', '.join(parts)})"
    )


class SettlementService:
    def __init__(self, db: AsyncSession, locks: CustomerLocks = customer_locks):
        self.db = db
        self.ledger = ReceivableLedger(db)
        self.locks = locks

    async def apply_payment(self, request: PaymentRequest) -> SettlementOutcome:
        """Record one customer payment against their receivables"""
        async with self.locks.hold(request.customer_id):
            try:
                view = await self.ledger.get_receivables(request.customer_id)
                result = allocate(view.receivables, request.amount, request.mode)
                records = await self._persist(request, view, result)
                await self.db.commit()
            except ReceivablesError as exc:
                await self.db.rollback()
                logger.warning(
                    f"Payment rejected for customer {request.customer_id}: "
                    f"{type(exc).__name__}: {exc.message}"
                )
                raise
            except SQLAlchemyError as exc:
                await self.db.rollback()
                logger.exception(f"Payment for customer {request.customer_id} could not be stored")
                raise PersistenceFailure("Không thể ghi nhận thanh toán, vui lòng thử lại") from exc

        updated, summary = self._after_payment(view, result.allocations)
        message = build_message(result.total_applied, updated)
        logger.info(
            f"💰 Customer {request.customer_id}: {format_money(result.total_applied)} "
            f"applied to orders {[a.sales_order_id for a in result.allocations]}"
        )

        return SettlementOutcome(
            message=message,
            result=result,
            receivables_updated=updated,
            payment_records=tuple(records),
            summary=summary,
        )

    async def _persist(self, request: PaymentRequest, view: LedgerView,
                       result: SettlementResult) -> List[SalesOrderPayment]:
        by_id = {r.id: r for r in view.receivables}
        paid_at = request.paid_at or datetime.utcnow()
        records = []

        for allocation in result.allocations:
            before = by_id[allocation.receivable_id]
            await self._increment_receivable(request.customer_id, before, allocation.amount_applied)
            order = await self._increment_sales_order(before.sales_order_id, allocation.amount_applied, paid_at)

            payment = SalesOrderPayment(
                sales_order_id=before.sales_order_id,
                receivable_id=before.id,
                amount=allocation.amount_applied,
                payment_method=request.payment_method.value,
                transaction_id=request.transaction_id,
                notes=payment_note(request.notes),
                paid_at=paid_at,
            )
            payment.sales_order = order
            self.db.add(payment)
            records.append(payment)

        await self.db.flush()
        return records

    async def _increment_receivable(self, customer_id: int, before: Receivable, amount: Decimal) -> None:
        """Optimistic write: only succeeds if nobody paid this receivable since it was read"""
        outcome = await self.db.execute(
            update(CustomerReceivable)
            .where(
                CustomerReceivable.id == before.id,
                CustomerReceivable.customer_id == customer_id,
                CustomerReceivable.paid_amount == before.paid_amount,
            )
            .values(paid_amount=before.paid_amount + amount, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        if outcome.rowcount != 1:
            raise ConcurrentModification(
                f"Công nợ đơn hàng {before.order_number or before.sales_order_id} vừa được cập nhật "
                f"bởi giao dịch khác, vui lòng tải lại và thử lại"
            )

    async def _increment_sales_order(self, sales_order_id: int, amount: Decimal,
                                     paid_at: datetime) -> SalesOrder:
        order = await self.db.get(SalesOrder, sales_order_id, populate_existing=True)
        order.paid_amount = (order.paid_amount or Decimal("0")) + amount
        if order.payment_status is PaymentStatus.PAID:
            order.payment_date = paid_at
        return order

    @staticmethod
    def _after_payment(view: LedgerView,
                       allocations: Tuple[PaymentAllocation, ...]) -> Tuple[Tuple[Receivable, ...], LedgerSummary]:
        """State after the commit, derived from the snapshot the writes were checked against"""
        applied: Dict[int, Decimal] = {a.receivable_id: a.amount_applied for a in allocations}
        after = tuple(
            replace(r, paid_amount=r.paid_amount + applied[r.id]) if r.id in applied else r
            for r in view.receivables
        )
        by_id = {r.id: r for r in after}
        updated = tuple(by_id[a.receivable_id] for a in allocations)
        return updated, summarize(after)
