"""
Order attribution resolver.

An order has no single owning vendor: its items may reference products from
several vendors. A vendor is attributed an order when at least one item
references a product the vendor owns.
"""
from datetime import datetime, timedelta
from decimal import Decimal
from typing import AbstractSet, Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.clock import ensure_utc
from marketplace.config import Config
from marketplace.db import queries
from marketplace.exceptions import NotFoundError, UnauthorizedError
from marketplace.models import Order, OrderItem
from marketplace.schemas.actor import Actor, Role
from marketplace.schemas.order import OrderFilters, OrderStatus


def item_product_ids(order: Order) -> set[str]:
    return {item.product_id for item in order.items if item.product_id is not None}


def can_view(order: Order, actor: Actor, vendor_product_ids: AbstractSet[str] = frozenset()) -> bool:
    """Per-role view check.

    `vendor_product_ids` is the set of products owned by the vendor actor; it
    is ignored for other roles.
    """
    role = actor.role
    if role == Role.CUSTOMER:
        return actor.id is not None and order.user_id == actor.id
    elif role == Role.VENDOR:
        if actor.vendor_id is None:
            return False
        return not item_product_ids(order).isdisjoint(vendor_product_ids)
    elif role == Role.ADMIN:
        return True
    elif role == Role.ANONYMOUS:
        return False
    # Unhandled roles are never authorized
    return False


def visible_items(order: Order, actor: Actor, vendor_product_ids: AbstractSet[str] = frozenset()) -> list[OrderItem]:
    """Items of an order the actor may see; vendors only get their own lines."""
    if actor.role == Role.VENDOR:
        return [item for item in order.items if item.product_id in vendor_product_ids]
    return list(order.items)


def items_subtotal(items: Iterable[OrderItem]) -> Decimal:
    return sum((Decimal(item.price_at_purchase) * item.quantity for item in items), Decimal("0.00"))


def retention_cutoff(now: datetime, retention_days: int | None = None) -> datetime:
    if retention_days is None:
        retention_days = Config.DELIVERED_RETENTION_DAYS
    return now - timedelta(days=retention_days)


def shown_by_default(order: Order, now: datetime, retention_days: int | None = None) -> bool:
    """Delivered orders drop out of default listings once older than the retention window."""
    if order.status != OrderStatus.DELIVERED.value:
        return True
    return ensure_utc(order.updated_at) >= retention_cutoff(now, retention_days)


async def owned_product_ids(session: AsyncSession, actor: Actor) -> set[str]:
    if actor.role != Role.VENDOR or actor.vendor_id is None:
        return set()
    return await queries.fetch_vendor_product_ids(session, actor.vendor_id)


async def get_order_for(session: AsyncSession, order_id: str, actor: Actor) -> tuple[Order, list[OrderItem]]:
    """Load one order for an actor.

    Raises:
        NotFoundError: order does not exist
        UnauthorizedError: actor may not view it (rendered the same as not found)
    """
    order = await queries.fetch_order(session, order_id)
    if order is None:
        raise NotFoundError("Order not found")

    product_ids = await owned_product_ids(session, actor)
    if not can_view(order, actor, product_ids):
        raise UnauthorizedError(
            f"{actor.role.value} {actor.id} may not view order {order_id}",
            public_message="Order not found",
        )

    return order, visible_items(order, actor, product_ids)


async def list_for(
    session: AsyncSession, actor: Actor, filters: OrderFilters, now: datetime
) -> list[tuple[Order, list[OrderItem]]]:
    """Role-scoped order listing, newest first, with each order's visible items.

    The delivered-order retention window applies unless `filters.view_all`;
    every returned order still passes `can_view`.
    """
    page_size = filters.page_size or Config.ORDERS_PAGE_SIZE
    page = max(filters.page, 1)

    scope = {}
    product_ids: set[str] = set()
    if actor.role == Role.CUSTOMER:
        if actor.id is None:
            return []
        scope["user_id"] = actor.id
    elif actor.role == Role.VENDOR:
        product_ids = await owned_product_ids(session, actor)
        # Never join on an empty product-id set
        if not product_ids:
            return []
        scope["product_ids"] = product_ids
    elif actor.role == Role.ADMIN:
        pass
    else:
        return []

    orders = await queries.fetch_orders(
        session,
        **scope,
        status=filters.status.value if filters.status else None,
        retained_since=None if filters.view_all else retention_cutoff(now),
        offset=(page - 1) * page_size,
        limit=page_size,
    )
    return [
        (order, visible_items(order, actor, product_ids)) for order in orders
        if can_view(order, actor, product_ids) and (filters.view_all or shown_by_default(order, now))
    ]
