import os

# Point the module-level engine at SQLite before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DATABASE_TYPE", "sqlite")

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from marketplace.main import app
from marketplace.db.database import Base, db, get_session
from marketplace.models import (
    BoostPlan,
    BoostRequest,
    Category,
    FlashSale,
    Order,
    OrderItem,
    Product,
    Vendor,
)


@pytest.fixture
def now():
    """Fixed request time for deterministic tests."""
    return datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Async test client bound to the in-memory database."""
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    # Mock the db.connect and db.disconnect
    original_connect = db.connect
    original_disconnect = db.disconnect
    db.connect = AsyncMock()
    db.disconnect = AsyncMock()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    # Restore
    app.dependency_overrides.clear()
    db.connect = original_connect
    db.disconnect = original_disconnect


def actor_headers(user_id: str, role: str) -> dict:
    return {"X-User-Id": user_id, "X-User-Role": role}


@pytest.fixture
def headers():
    return actor_headers


@pytest.fixture
def make_category():
    def _make(id, name=None, parent_id=None, is_visible=True):
        return Category(id=id, name=name or id, parent_id=parent_id, is_visible=is_visible)
    return _make


@pytest.fixture
def make_vendor():
    def _make(id, user_id=None, store_name=None, subscription_end_date=None):
        return Vendor(
            id=id,
            user_id=user_id or f"user-{id}",
            store_name=store_name or f"Store {id}",
            is_verified=True,
            subscription_end_date=subscription_end_date,
        )
    return _make


@pytest.fixture
def make_product():
    def _make(id, price="100.00", vendor_id=None, category_id=None, stock=10,
              is_boosted=False, boosted_until=None, name=None):
        return Product(
            id=id,
            name=name or id,
            price=Decimal(price),
            stock=stock,
            vendor_id=vendor_id,
            category_id=category_id,
            is_boosted=is_boosted,
            boosted_until=boosted_until,
            average_rating=0.0,
            review_count=0,
        )
    return _make


@pytest.fixture
def make_flash_sale(now):
    def _make(id, product_id, discount_type="percentage", discount_value="25",
              start_date=None, end_date=None, is_active=True, stock_cap=None, sales_count=0):
        return FlashSale(
            id=id,
            product_id=product_id,
            discount_type=discount_type,
            discount_value=Decimal(discount_value),
            start_date=start_date or now - timedelta(hours=1),
            end_date=end_date or now + timedelta(hours=1),
            is_active=is_active,
            stock_cap=stock_cap,
            sales_count=sales_count,
        )
    return _make


@pytest.fixture
def make_order(now):
    def _make(id, user_id="customer-1", status="Pending", items=(), order_date=None, updated_at=None):
        order = Order(
            id=id,
            user_id=user_id,
            status=status,
            order_date=order_date or now - timedelta(days=1),
            updated_at=updated_at or now - timedelta(days=1),
            total_amount=Decimal("0.00"),
        )
        total = Decimal("0.00")
        for index, (product_id, quantity, price) in enumerate(items):
            order.items.append(OrderItem(
                id=f"{id}-item-{index}",
                product_id=product_id,
                product_name=f"Product {product_id}",
                quantity=quantity,
                price_at_purchase=Decimal(price),
            ))
            total += Decimal(price) * quantity
        order.total_amount = total
        return order
    return _make


@pytest.fixture
def make_boost():
    def _plan(id, duration_days=7, price="40.00", is_active=True):
        return BoostPlan(id=id, name=f"Plan {id}", duration_days=duration_days,
                         price=Decimal(price), is_active=is_active)

    def _request(id, product_id, vendor_id, duration_days=7, status="pending"):
        return BoostRequest(
            id=id,
            product_id=product_id,
            vendor_id=vendor_id,
            plan_duration_days=duration_days,
            plan_price=Decimal("40.00"),
            request_status=status,
        )

    return _plan, _request
