import os
import tempfile
from collections import namedtuple
from datetime import datetime, timedelta
from decimal import Decimal

# Keep test runs from writing logs or a database into the working directory
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "motoshop-test-logs"))
os.environ.setdefault("SQLITE_DATABASE_URI", "sqlite:///" + os.path.join(tempfile.gettempdir(), "motoshop-test.db"))

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from motoshop.core.deps import get_db
from motoshop.db.base import Base
from motoshop.main import app
from motoshop.models import Customer
from motoshop.services.receivables.domain import Receivable
from motoshop.services.receivables.locks import CustomerLocks
from motoshop.services.sales_orders import create_sales_order

T0 = datetime(2024, 12, 1, 9, 0, 0)

# Plain values: a rollback inside the code under test expires ORM instances
CustomerRef = namedtuple("CustomerRef", "id name")
OrderRef = namedtuple("OrderRef", "id order_number total_amount")


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session


@pytest.fixture
def locks():
    return CustomerLocks()


@pytest_asyncio.fixture
async def client(session_factory):
    """API client bound to the in-memory database"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def customer(db) -> CustomerRef:
    customer = Customer(name="Trần Thị Bình", phone="0912345678")
    db.add(customer)
    await db.commit()
    return CustomerRef(customer.id, customer.name)


@pytest_asyncio.fixture
async def other_customer(db) -> CustomerRef:
    customer = Customer(name="Lê Văn Cường", phone="0987654321")
    db.add(customer)
    await db.commit()
    return CustomerRef(customer.id, customer.name)


@pytest.fixture
def make_orders(db):
    """Create sales orders (and their receivables) one day apart, oldest first"""
    async def _make(customer_id, *totals, start=T0):
        orders = []
        for i, total in enumerate(totals):
            order = await create_sales_order(
                db,
                customer_id=customer_id,
                total_amount=Decimal(str(total)),
                created_at=start + timedelta(days=i),
            )
            orders.append(OrderRef(order.id, order.order_number, order.total_amount))
        return orders
    return _make


@pytest.fixture
def make_receivable():
    """In-memory receivable snapshot for policy tests"""
    def _make(id, original, paid="0", days=0, sales_order_id=None, customer_id=1):
        return Receivable(
            id=id,
            sales_order_id=sales_order_id if sales_order_id is not None else 100 + id,
            customer_id=customer_id,
            original_amount=Decimal(str(original)),
            paid_amount=Decimal(str(paid)),
            created_at=T0 + timedelta(days=days),
            order_number=f"SO{id:03d}",
        )
    return _make
