"""Sales order intake: every new order opens its receivable in the same commit."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from motoshop.core.config import settings
from motoshop.models.customer import Customer
from motoshop.models.customer_receivable import CustomerReceivable
from motoshop.models.sales_order import SalesOrder
from motoshop.services.receivables.errors import CustomerNotFound, InvalidAmount, PersistenceFailure
from motoshop.services.receivables.money import MoneyLike, ZERO, to_money

logger = logging.getLogger(__name__)


async def generate_order_number(db: AsyncSession, on: Optional[datetime] = None) -> str:
    """SO + yyyymmdd + 3 digit daily sequence"""
    prefix = settings.ORDER_NUMBER_PREFIX
    date_str = (on or datetime.now()).strftime("%Y%m%d")

    result = await db.execute(
        select(func.max(SalesOrder.order_number)).where(SalesOrder.order_number.like(f"{prefix}{date_str}%"))
    )
    max_no = result.scalar()

    if max_no:
        try:
            seq = int(max_no[-3:]) + 1
        except ValueError:
            seq = 1
    else:
        seq = 1

    return f"{prefix}{date_str}{seq:03d}"


async def create_sales_order(
    db: AsyncSession,
    *,
    customer_id: int,
    total_amount: MoneyLike,
    order_number: Optional[str] = None,
    notes: Optional[str] = None,
    created_at: Optional[datetime] = None) -> SalesOrder:
    """Create a sales order and the receivable for its total"""
    total = to_money(total_amount)
    if total < ZERO:
        raise InvalidAmount("Tổng tiền đơn hàng không được âm")

    customer = await db.get(Customer, customer_id)
    if customer is None:
        raise CustomerNotFound("Không tìm thấy khách hàng")

    created_at = created_at or datetime.utcnow()
    order = SalesOrder(
        order_number=order_number or await generate_order_number(db, created_at),
        customer_id=customer_id,
        total_amount=total,
        paid_amount=ZERO,
        notes=notes,
        created_at=created_at,
    )
    db.add(order)

    try:
        await db.flush()
        db.add(CustomerReceivable(
            customer_id=customer_id,
            sales_order_id=order.id,
            original_amount=total,
            paid_amount=ZERO,
            created_at=created_at,
        ))
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception(f"Sales order for customer {customer_id} could not be stored")
        raise PersistenceFailure("Không thể tạo đơn hàng, vui lòng thử lại") from exc

    logger.info(f"🧾 Sales order {order.order_number} created for customer {customer_id}: {total}")
    return order


async def get_sales_order(db: AsyncSession, sales_order_id: int) -> Optional[SalesOrder]:
    result = await db.execute(
        select(SalesOrder)
        .options(selectinload(SalesOrder.receivable))
        .where(SalesOrder.id == sales_order_id)
    )
    return result.scalar_one_or_none()
