"""Sales order Schema"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class SalesOrderCreate(BaseModel):
    """Create sales order (opens a receivable for the total)"""
    customer_id: int
    total_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    order_number: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class SalesOrderResponse(BaseModel):
    """Sales order response"""
    id: int
    order_number: str
    customer_id: int
    total_amount: Decimal
    paid_amount: Decimal
    balance: Decimal
    payment_status: str
    payment_status_display: str
    payment_date: Optional[datetime]
    notes: Optional[str]
    created_at: datetime
