import asyncio
import logging
import sys
from datetime import datetime, timedelta
from decimal import Decimal

from motoshop.db.init_db import init_db as create_tables
from motoshop.db.session import SessionLocal
from motoshop.models.customer import Customer
from motoshop.services.sales_orders import create_sales_order

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def insert_demo_data() -> None:
    """
    One customer owing three orders, oldest first
    """
    async with SessionLocal() as db:
        customer = Customer(name="Nguyễn Văn An", phone="0901234567")
        db.add(customer)
        await db.commit()

        start = datetime.utcnow() - timedelta(days=30)
        for days, total in ((0, "1500000"), (10, "850000"), (20, "320000")):
            order = await create_sales_order(
                db,
                customer_id=customer.id,
                total_amount=Decimal(total),
                created_at=start + timedelta(days=days),
            )
            logger.info(f"Demo order {order.order_number}: {total}")


async def init_db(with_demo: bool = False) -> None:
    """
    Initialise the database
    """
    logger.info("Creating tables...")
    await create_tables()
    logger.info("Tables created")

    if with_demo:
        await insert_demo_data()
        logger.info("Demo data inserted")


if __name__ == "__main__":
    asyncio.run(init_db(with_demo="--demo" in sys.argv))
