"""V1 API router aggregation"""
from fastapi import APIRouter

from motoshop.api.api_v1.endpoints import customers, sales_orders

api_router = APIRouter()

api_router.include_router(customers.router, prefix="/customers", tags=["Khách hàng & công nợ"])
api_router.include_router(sales_orders.router, prefix="/sales-orders", tags=["Đơn bán hàng"])
