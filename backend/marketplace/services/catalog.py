"""
Product eligibility classifier.

Partitions a candidate product list into disjoint merchandising buckets:
flash sale, boosted (featured), and general. Products in a hidden category are
dropped first.
"""
import random
from datetime import datetime
from typing import Iterable

from marketplace.config import Config
from marketplace.models import FlashSale, Product
from marketplace.schemas.product import CatalogBuckets, CatalogEntry, ProductOut
from marketplace.services.category_index import CategoryIndex
from marketplace.services.promotion import group_flash_sales, resolve_product_promotion


def shuffle_and_cap(entries: list, limit: int, rng: random.Random | None = None) -> list:
    """Uniform Fisher-Yates shuffle of a copy, truncated to `limit`.

    Only for display surfaces; never route a deterministic listing through here.
    """
    shuffled = list(entries)
    (rng or random).shuffle(shuffled)
    return shuffled[:limit]


def classify(
    products: Iterable[Product],
    flash_sales: Iterable[FlashSale],
    category_index: CategoryIndex,
    now: datetime,
    limit: int | None = None,
    rng: random.Random | None = None,
) -> CatalogBuckets:
    """Place every visible product in exactly one bucket.

    Order of rules: hidden category drop, active flash sale, active boost,
    everything else. `general` keeps input order; `recommendations` is a fresh
    random sample of it on every call.
    """
    if limit is None:
        limit = Config.RECOMMENDATION_COUNT

    sales_by_product = group_flash_sales(flash_sales)
    flash_sale_bucket: list[CatalogEntry] = []
    boosted: list[CatalogEntry] = []
    general: list[CatalogEntry] = []

    for product in products:
        if not category_index.is_visible(product.category_id):
            continue

        promotion = resolve_product_promotion(product, sales_by_product.get(product.id, []), now)
        entry = CatalogEntry(product=ProductOut.model_validate(product), promotion=promotion)

        if promotion.flash_sale_active:
            flash_sale_bucket.append(entry)
        elif promotion.boost_active:
            boosted.append(entry)
        else:
            general.append(entry)

    return CatalogBuckets(
        flash_sale=flash_sale_bucket,
        boosted=boosted,
        general=general,
        recommendations=shuffle_and_cap(general, limit, rng),
    )


def is_browsable(product: Product, category_index: CategoryIndex) -> bool:
    """Whether a single product may be shown on browsing surfaces."""
    return category_index.is_visible(product.category_id)
