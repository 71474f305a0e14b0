import asyncio

from motoshop.db.session import engine
from motoshop.db.base import Base

# Import every model so its table is registered on Base.metadata
from motoshop.models import Customer, SalesOrder, CustomerReceivable, SalesOrderPayment  # noqa: F401


async def init_db() -> None:
    """
    Create all tables
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ensure_tables_exist() -> None:
    """
    Make sure the tables exist (called on application startup)
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


if __name__ == "__main__":
    asyncio.run(init_db())
