"""
Vendor aggregation engine - dashboard statistics for one vendor.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config import Config
from marketplace.db import queries
from marketplace.exceptions import NotFoundError
from marketplace.models import Order, Product, Vendor
from marketplace.schemas.actor import Actor, Role
from marketplace.schemas.order import OrderStatus
from marketplace.schemas.vendor import LowStockProduct, RecentOrder, VendorStats
from marketplace.services.orders import can_view, items_subtotal, visible_items

logger = logging.getLogger(__name__)


def vendor_revenue(orders: Iterable[Order], product_ids: set[str]) -> Decimal:
    """Sum of the vendor's own delivered line items.

    Uses price_at_purchase * quantity per item, never the order total, so other
    vendors' items in a shared order are not counted.
    """
    total = Decimal("0.00")
    for order in orders:
        if order.status != OrderStatus.DELIVERED.value:
            continue
        for item in order.items:
            if item.product_id in product_ids:
                total += Decimal(item.price_at_purchase) * item.quantity
    return total


def _recent_order(order: Order, actor: Actor, owned: set[str]) -> RecentOrder:
    """Dashboard row carrying the vendor's own subtotal, not the shared order total."""
    return RecentOrder(
        id=order.id,
        order_date=order.order_date,
        status=order.status,
        total_amount=items_subtotal(visible_items(order, actor, owned)),
    )


def compute_vendor_stats(
    vendor: Vendor,
    products: list[Product],
    orders: Iterable[Order],
    now: datetime,
    low_stock_threshold: int | None = None,
    recent_count: int | None = None,
) -> VendorStats:
    if low_stock_threshold is None:
        low_stock_threshold = Config.LOW_STOCK_THRESHOLD
    if recent_count is None:
        recent_count = Config.RECENT_ORDERS_COUNT

    owned = {p.id for p in products if p.vendor_id == vendor.id}
    actor = Actor(role=Role.VENDOR, vendor_id=vendor.id)
    attributed = [order for order in orders if can_view(order, actor, owned)]

    low_stock = sorted(
        (p for p in products if p.id in owned and p.stock <= low_stock_threshold),
        key=lambda p: (p.stock, p.name),
    )
    recent = sorted(attributed, key=lambda o: o.order_date, reverse=True)[:recent_count]

    return VendorStats(
        vendor_id=vendor.id,
        product_count=len(owned),
        total_orders=len(attributed),
        pending_orders=sum(1 for o in attributed if o.status == OrderStatus.PENDING.value),
        total_revenue=vendor_revenue(attributed, owned),
        low_stock=[LowStockProduct.model_validate(p) for p in low_stock],
        recent_orders=[_recent_order(o, actor, owned) for o in recent],
        subscription_active=vendor.subscription_active(now),
    )


async def aggregate(session: AsyncSession, vendor_id: str, now: datetime) -> VendorStats:
    """Dashboard stats for a vendor.

    Raises:
        NotFoundError: vendor does not exist
    """
    vendor = await queries.fetch_vendor(session, vendor_id)
    if vendor is None:
        raise NotFoundError("Vendor not found")

    products = await queries.fetch_vendor_products(session, vendor_id)
    orders = await queries.fetch_orders_with_products(session, [p.id for p in products])

    stats = compute_vendor_stats(vendor, products, orders, now)
    logger.info(
        f"Vendor {vendor_id} stats: {stats.total_orders} orders, "
        f"{stats.pending_orders} pending, revenue {stats.total_revenue}"
    )
    return stats
