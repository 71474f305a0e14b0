from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import select

from motoshop.models import CustomerReceivable
from motoshop.models.payment_status import PaymentStatus
from motoshop.services.receivables.errors import CustomerNotFound, InvalidAmount
from motoshop.services.sales_orders import create_sales_order, generate_order_number, get_sales_order


@pytest.mark.asyncio
async def test_order_opens_receivable_for_total(db, customer):
    order = await create_sales_order(db, customer_id=customer.id, total_amount="1500000")

    result = await db.execute(select(CustomerReceivable).where(CustomerReceivable.sales_order_id == order.id))
    receivable = result.scalar_one()
    assert receivable.customer_id == customer.id
    assert receivable.original_amount == Decimal("1500000.00")
    assert receivable.paid_amount == Decimal("0.00")
    assert receivable.status is PaymentStatus.UNPAID
    assert receivable.created_at == order.created_at


@pytest.mark.asyncio
async def test_order_numbers_follow_daily_sequence(db, customer):
    day = datetime(2024, 12, 3, 10, 0)

    first = await create_sales_order(db, customer_id=customer.id, total_amount="10", created_at=day)
    second = await create_sales_order(db, customer_id=customer.id, total_amount="20", created_at=day)

    assert first.order_number == "SO20241203001"
    assert second.order_number == "SO20241203002"
    assert await generate_order_number(db, datetime(2024, 12, 4)) == "SO20241204001"


@pytest.mark.asyncio
async def test_explicit_order_number_kept(db, customer):
    order = await create_sales_order(db, customer_id=customer.id, total_amount="10", order_number="HD-0001")

    assert order.order_number == "HD-0001"


@pytest.mark.asyncio
async def test_zero_total_order_is_already_paid(db, customer):
    order = await create_sales_order(db, customer_id=customer.id, total_amount="0")

    loaded = await get_sales_order(db, order.id)
    assert loaded.payment_status is PaymentStatus.PAID
    assert loaded.receivable.status is PaymentStatus.PAID


@pytest.mark.asyncio
async def test_negative_total_rejected(db, customer):
    with pytest.raises(InvalidAmount):
        await create_sales_order(db, customer_id=customer.id, total_amount="-1")


@pytest.mark.asyncio
async def test_unknown_customer_rejected(db):
    with pytest.raises(CustomerNotFound):
        await create_sales_order(db, customer_id=424242, total_amount="10")
