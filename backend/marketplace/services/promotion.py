"""
Promotion state resolver.

Pure read-time computation of boost and flash-sale state for a product at an
explicit `now`. Stored `is_active` / `is_boosted` flags are never trusted on
their own; the time window is what gates a promotion. Nothing here writes back
expiry.
"""
from collections import defaultdict
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from marketplace.clock import ensure_utc
from marketplace.exceptions import InconsistentDataError
from marketplace.models import FlashSale, Product
from marketplace.schemas.product import PromotionState


PERCENTAGE = "percentage"
FIXED_AMOUNT = "fixed_amount"

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def is_boost_active(product: Product, now: datetime) -> bool:
    """Boosted flag set and `boosted_until` strictly after now."""
    if not product.is_boosted or product.boosted_until is None:
        return False
    return ensure_utc(product.boosted_until) > now


def validate_flash_sale(flash_sale: FlashSale) -> None:
    """Raise InconsistentDataError for a malformed flash sale row."""
    start = ensure_utc(flash_sale.start_date)
    end = ensure_utc(flash_sale.end_date)
    if start >= end:
        raise InconsistentDataError(
            f"Flash sale {flash_sale.id} has start_date {start.isoformat()} "
            f"not before end_date {end.isoformat()}"
        )
    if flash_sale.discount_type not in (PERCENTAGE, FIXED_AMOUNT):
        raise InconsistentDataError(
            f"Flash sale {flash_sale.id} has unknown discount_type '{flash_sale.discount_type}'"
        )
    if Decimal(flash_sale.discount_value) <= ZERO:
        raise InconsistentDataError(
            f"Flash sale {flash_sale.id} has non-positive discount_value {flash_sale.discount_value}"
        )


def is_flash_sale_active(flash_sale: FlashSale | None, now: datetime) -> bool:
    """Active flag set and now within [start_date, end_date], both ends inclusive."""
    if flash_sale is None or not flash_sale.is_active:
        return False
    validate_flash_sale(flash_sale)
    return ensure_utc(flash_sale.start_date) <= now <= ensure_utc(flash_sale.end_date)


def select_active_flash_sale(flash_sales: Iterable[FlashSale], now: datetime) -> FlashSale | None:
    """Return the single effective flash sale for one product, if any.

    Overlapping active sales are reported rather than resolved by picking one.
    """
    active = [sale for sale in flash_sales if is_flash_sale_active(sale, now)]
    if len(active) > 1:
        ids = ", ".join(sorted(sale.id for sale in active))
        raise InconsistentDataError(
            f"Product {active[0].product_id} has {len(active)} simultaneously active flash sales: {ids}"
        )
    return active[0] if active else None


def group_flash_sales(flash_sales: Iterable[FlashSale]) -> dict[str, list[FlashSale]]:
    grouped = defaultdict(list)
    for sale in flash_sales:
        grouped[sale.product_id].append(sale)
    return grouped


def discounted_price(price: Decimal, discount_type: str, discount_value: Decimal) -> Decimal:
    """Apply a flash sale discount, never going below zero."""
    price = Decimal(price)
    discount_value = Decimal(discount_value)

    if discount_type == PERCENTAGE:
        result = price * (1 - discount_value / 100)
    elif discount_type == FIXED_AMOUNT:
        result = price - discount_value
    else:
        raise InconsistentDataError(f"Unknown discount_type '{discount_type}'")

    return max(ZERO, result).quantize(CENTS, rounding=ROUND_HALF_UP)


def available_stock(product: Product, flash_sale: FlashSale | None) -> int:
    """Units purchasable now; a flash sale stock cap can lower product stock."""
    stock = product.stock or 0
    if flash_sale is None or flash_sale.stock_cap is None:
        return stock
    remaining = flash_sale.stock_cap - (flash_sale.sales_count or 0)
    return max(0, min(stock, remaining))


def resolve_promotion(product: Product, flash_sale: FlashSale | None, now: datetime) -> PromotionState:
    """Compute boost/flash-sale state and the effective price at `now`."""
    list_price = Decimal(product.price).quantize(CENTS, rounding=ROUND_HALF_UP)
    boost_active = is_boost_active(product, now)

    if not is_flash_sale_active(flash_sale, now):
        return PromotionState(
            product_id=product.id,
            list_price=list_price,
            effective_price=list_price,
            boost_active=boost_active,
            flash_sale_active=False,
            available_stock=available_stock(product, None),
        )

    return PromotionState(
        product_id=product.id,
        list_price=list_price,
        effective_price=discounted_price(list_price, flash_sale.discount_type, flash_sale.discount_value),
        boost_active=boost_active,
        flash_sale_active=True,
        flash_sale_id=flash_sale.id,
        discount_type=flash_sale.discount_type,
        discount_value=Decimal(flash_sale.discount_value),
        flash_sale_ends_at=ensure_utc(flash_sale.end_date),
        available_stock=available_stock(product, flash_sale),
    )


def resolve_product_promotion(product: Product, flash_sales: Iterable[FlashSale], now: datetime) -> PromotionState:
    """Resolve a product against all of its flash sale rows."""
    return resolve_promotion(product, select_active_flash_sale(flash_sales, now), now)
