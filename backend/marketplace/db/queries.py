"""
Thin data-access adapters.

Each function fetches a snapshot for one pure computation. Nothing here makes
visibility or attribution decisions.
"""
from datetime import datetime
from typing import Iterable

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

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
from marketplace.schemas.order import OrderStatus


# Catalog

async def fetch_categories(session: AsyncSession) -> list[Category]:
    result = await session.execute(select(Category).order_by(Category.name))
    return list(result.scalars().all())


async def fetch_products(session: AsyncSession) -> list[Product]:
    result = await session.execute(select(Product).order_by(Product.created_at.desc(), Product.id))
    return list(result.scalars().all())


async def fetch_product(session: AsyncSession, product_id: str) -> Product | None:
    return await session.get(Product, product_id)


async def fetch_flash_sales(session: AsyncSession, product_ids: Iterable[str] | None = None) -> list[FlashSale]:
    """Flash sales with the active flag set; the time window is checked by the resolver."""
    query = select(FlashSale).where(FlashSale.is_active.is_(True))
    if product_ids is not None:
        product_ids = list(product_ids)
        if not product_ids:
            return []
        query = query.where(FlashSale.product_id.in_(product_ids))
    result = await session.execute(query.order_by(FlashSale.end_date))
    return list(result.scalars().all())


async def fetch_flash_sales_in_window(session: AsyncSession, now: datetime) -> list[FlashSale]:
    """Candidate flash sales for the flash-sales page, soonest ending first."""
    query = (
        select(FlashSale)
        .options(selectinload(FlashSale.product))
        .where(
            FlashSale.is_active.is_(True),
            FlashSale.start_date <= now,
            FlashSale.end_date >= now,
        )
        .order_by(FlashSale.end_date)
    )
    result = await session.execute(query)
    return list(result.scalars().all())


# Vendors

async def fetch_vendor(session: AsyncSession, vendor_id: str) -> Vendor | None:
    return await session.get(Vendor, vendor_id)


async def fetch_vendor_by_user(session: AsyncSession, user_id: str) -> Vendor | None:
    result = await session.execute(select(Vendor).where(Vendor.user_id == user_id))
    return result.scalar_one_or_none()


async def fetch_vendor_products(session: AsyncSession, vendor_id: str) -> list[Product]:
    result = await session.execute(
        select(Product).where(Product.vendor_id == vendor_id).order_by(Product.name)
    )
    return list(result.scalars().all())


async def fetch_vendor_product_ids(session: AsyncSession, vendor_id: str) -> set[str]:
    result = await session.execute(select(Product.id).where(Product.vendor_id == vendor_id))
    return set(result.scalars().all())


# Orders

async def fetch_order(session: AsyncSession, order_id: str) -> Order | None:
    result = await session.execute(
        select(Order).options(selectinload(Order.items)).where(Order.id == order_id)
    )
    return result.scalar_one_or_none()


async def fetch_orders_with_products(session: AsyncSession, product_ids: Iterable[str]) -> list[Order]:
    """Orders holding at least one item for the given products.

    Returns [] for an empty id set instead of issuing an IN () query.
    """
    product_ids = list(product_ids)
    if not product_ids:
        return []

    order_ids = select(OrderItem.order_id).where(OrderItem.product_id.in_(product_ids))
    result = await session.execute(
        select(Order)
        .options(selectinload(Order.items))
        .where(Order.id.in_(order_ids))
        .order_by(Order.order_date.desc(), Order.id)
    )
    return list(result.scalars().all())


async def fetch_orders(
    session: AsyncSession,
    *,
    user_id: str | None = None,
    product_ids: Iterable[str] | None = None,
    status: str | None = None,
    retained_since: datetime | None = None,
    offset: int = 0,
    limit: int | None = None,
) -> list[Order]:
    """Deterministically ordered order listing.

    `product_ids` scopes to orders holding one of those products (an empty set
    returns []). `retained_since` hides Delivered orders last updated before it.
    """
    query = select(Order).options(selectinload(Order.items))

    if user_id is not None:
        query = query.where(Order.user_id == user_id)

    if product_ids is not None:
        product_ids = list(product_ids)
        if not product_ids:
            return []
        order_ids = select(OrderItem.order_id).where(OrderItem.product_id.in_(product_ids))
        query = query.where(Order.id.in_(order_ids))

    if status is not None:
        query = query.where(Order.status == status)

    if retained_since is not None:
        query = query.where(or_(Order.status != OrderStatus.DELIVERED.value, Order.updated_at >= retained_since))

    query = query.order_by(Order.order_date.desc(), Order.id).offset(offset)
    if limit is not None:
        query = query.limit(limit)

    result = await session.execute(query)
    return list(result.scalars().all())


# Boosts

async def fetch_boost_plan(session: AsyncSession, plan_id: str) -> BoostPlan | None:
    return await session.get(BoostPlan, plan_id)


async def fetch_boost_request(session: AsyncSession, request_id: str, for_update: bool = False) -> BoostRequest | None:
    query = select(BoostRequest).where(BoostRequest.id == request_id)
    if for_update:
        query = query.with_for_update()
    result = await session.execute(query)
    return result.scalar_one_or_none()


async def fetch_boost_requests(session: AsyncSession) -> list[BoostRequest]:
    result = await session.execute(
        select(BoostRequest).order_by(BoostRequest.created_at.desc(), BoostRequest.id)
    )
    return list(result.scalars().all())
