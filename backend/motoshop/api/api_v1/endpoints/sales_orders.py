"""Sales order API (only what the receivables need)"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from motoshop.api.errors import to_http_exception
from motoshop.core.deps import get_db
from motoshop.models.sales_order import SalesOrder
from motoshop.schemas.sales_order import SalesOrderCreate, SalesOrderResponse
from motoshop.services.receivables import ReceivablesError
from motoshop.services.sales_orders import create_sales_order, get_sales_order

router = APIRouter()


def build_sales_order_response(order: SalesOrder) -> SalesOrderResponse:
    """Build sales order response"""
    return SalesOrderResponse(
        id=order.id,
        order_number=order.order_number,
        customer_id=order.customer_id,
        total_amount=order.total_amount,
        paid_amount=order.paid_amount,
        balance=order.total_amount - order.paid_amount,
        payment_status=order.payment_status.value,
        payment_status_display=order.payment_status_display,
        payment_date=order.payment_date,
        notes=order.notes,
        created_at=order.created_at,
    )


@router.post("/", response_model=SalesOrderResponse)
async def create_order(
    *,
    db: AsyncSession = Depends(get_db),
    order_in: SalesOrderCreate) -> Any:
    """Create sales order; its receivable is opened for the full total"""
    if order_in.order_number:
        result = await db.execute(
            select(SalesOrder.id).where(SalesOrder.order_number == order_in.order_number)
        )
        if result.scalar_one_or_none() is not None:
            raise HTTPException(status_code=400, detail="Số đơn hàng đã tồn tại")

    try:
        order = await create_sales_order(
            db,
            customer_id=order_in.customer_id,
            total_amount=order_in.total_amount,
            order_number=order_in.order_number,
            notes=order_in.notes,
            created_at=order_in.created_at,
        )
    except ReceivablesError as exc:
        raise to_http_exception(exc)

    return build_sales_order_response(order)


@router.get("/{sales_order_id}", response_model=SalesOrderResponse)
async def get_order(
    *,
    db: AsyncSession = Depends(get_db),
    sales_order_id: int) -> Any:
    """Get sales order"""
    order = await get_sales_order(db, sales_order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Không tìm thấy đơn hàng")
    return build_sales_order_response(order)
