"""
Receivable ledger - read side of customer receivables.

Balances and statuses are always recomputed from the persisted amounts, and
rows are re-read from the database on every call (populate_existing), so a
session that already holds older copies never serves stale balances.
"""

from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from motoshop.models.customer import Customer
from motoshop.models.customer_receivable import CustomerReceivable
from motoshop.models.sales_order import SalesOrder
from motoshop.models.sales_order_payment import SalesOrderPayment
from motoshop.services.receivables.domain import LedgerSummary, LedgerView, Receivable
from motoshop.services.receivables.errors import CustomerNotFound
from motoshop.services.receivables.money import ZERO


def summarize(receivables: Iterable[Receivable]) -> LedgerSummary:
    total_original = ZERO
    total_paid = ZERO
    outstanding = 0
    for receivable in receivables:
        total_original += receivable.original_amount
        total_paid += receivable.paid_amount
        if receivable.is_open:
            outstanding += 1

    return LedgerSummary(
        total_original=total_original,
        total_paid=total_paid,
        total_balance=total_original - total_paid,
        outstanding_count=outstanding,
    )


class ReceivableLedger:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_customer(self, customer_id: int) -> Customer:
        customer = await self.db.get(Customer, customer_id)
        if customer is None:
            raise CustomerNotFound("Không tìm thấy khách hàng")
        return customer

    async def get_receivables(self, customer_id: int) -> LedgerView:
        """All receivables of a customer, newest first, with the summary"""
        await self.get_customer(customer_id)

        result = await self.db.execute(
            select(CustomerReceivable)
            .options(selectinload(CustomerReceivable.sales_order))
            .where(CustomerReceivable.customer_id == customer_id)
            .order_by(CustomerReceivable.created_at.desc(), CustomerReceivable.id.desc())
            .execution_options(populate_existing=True)
        )
        receivables = tuple(Receivable.from_row(row) for row in result.scalars().all())

        return LedgerView(
            customer_id=customer_id,
            receivables=receivables,
            summary=summarize(receivables),
        )

    async def get_payment_history(self, customer_id: int) -> List[SalesOrderPayment]:
        """Receivable payments recorded on the customer's sales orders, newest first"""
        await self.get_customer(customer_id)

        result = await self.db.execute(
            select(SalesOrderPayment)
            .join(SalesOrder, SalesOrderPayment.sales_order_id == SalesOrder.id)
            .options(selectinload(SalesOrderPayment.sales_order))
            .where(SalesOrder.customer_id == customer_id)
            .order_by(SalesOrderPayment.paid_at.desc(), SalesOrderPayment.id.desc())
        )
        return list(result.scalars().all())
