"""
Data-access adapters against an in-memory database.
"""
import pytest
from datetime import timedelta
from unittest.mock import AsyncMock, patch

from marketplace.db import queries
from marketplace.schemas.actor import Actor, Role
from marketplace.schemas.order import OrderFilters
from marketplace.services.orders import list_for


class TestEmptyProductSets:
    """An empty product-id set must never reach the database as IN ()."""

    @pytest.mark.asyncio
    async def test_orders_with_no_products(self, session):
        with patch.object(session, "execute", AsyncMock()) as execute:
            assert await queries.fetch_orders_with_products(session, []) == []
        execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_scoped_listing_with_no_products(self, session):
        with patch.object(session, "execute", AsyncMock()) as execute:
            assert await queries.fetch_orders(session, product_ids=set()) == []
        execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_flash_sales_for_no_products(self, session):
        with patch.object(session, "execute", AsyncMock()) as execute:
            assert await queries.fetch_flash_sales(session, []) == []
        execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_vendor_without_products_lists_nothing(self, session, make_vendor, make_order, now):
        session.add_all([
            make_vendor("v-empty"),
            make_order("o1", items=[("someone-else", 1, "5.00")]),
        ])
        await session.commit()

        actor = Actor(id="user-v-empty", role=Role.VENDOR, vendor_id="v-empty")
        assert await list_for(session, actor, OrderFilters(), now) == []


class TestFetchOrders:
    """Tests for fetch_orders filtering and ordering."""

    @pytest.fixture
    async def orders(self, session, make_vendor, make_product, make_order, now):
        session.add_all([
            make_vendor("v1"),
            make_product("p1", vendor_id="v1"),
            make_order("a", user_id="c1", status="Pending", items=[("p1", 1, "5.00")],
                       order_date=now - timedelta(hours=1)),
            make_order("b", user_id="c2", status="Delivered", items=[("other", 1, "5.00")],
                       order_date=now - timedelta(hours=2), updated_at=now - timedelta(days=10)),
            make_order("c", user_id="c1", status="Delivered", items=[("p1", 1, "5.00")],
                       order_date=now - timedelta(hours=3), updated_at=now - timedelta(hours=3)),
        ])
        await session.commit()

    @pytest.mark.asyncio
    async def test_newest_first(self, session, orders):
        result = await queries.fetch_orders(session)
        assert [o.id for o in result] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_scoped_by_product(self, session, orders):
        result = await queries.fetch_orders(session, product_ids={"p1"})
        assert [o.id for o in result] == ["a", "c"]

    @pytest.mark.asyncio
    async def test_scoped_by_user(self, session, orders):
        result = await queries.fetch_orders(session, user_id="c1", status="Delivered")
        assert [o.id for o in result] == ["c"]

    @pytest.mark.asyncio
    async def test_retained_since(self, session, orders, now):
        result = await queries.fetch_orders(session, retained_since=now - timedelta(days=3))
        assert [o.id for o in result] == ["a", "c"]

    @pytest.mark.asyncio
    async def test_pagination(self, session, orders):
        result = await queries.fetch_orders(session, offset=1, limit=1)
        assert [o.id for o in result] == ["b"]

    @pytest.mark.asyncio
    async def test_items_loaded(self, session, orders):
        order = await queries.fetch_order(session, "a")
        assert [item.product_id for item in order.items] == ["p1"]

    @pytest.mark.asyncio
    async def test_vendor_product_ids(self, session, orders):
        assert await queries.fetch_vendor_product_ids(session, "v1") == {"p1"}
