from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    price: Decimal
    stock: int
    category_id: str | None = None
    vendor_id: str | None = None
    is_boosted: bool = False
    boosted_until: datetime | None = None
    average_rating: float = 0.0
    review_count: int = 0


class PromotionState(BaseModel):
    product_id: str
    list_price: Decimal
    effective_price: Decimal
    boost_active: bool
    flash_sale_active: bool
    flash_sale_id: str | None = None
    discount_type: str | None = None
    discount_value: Decimal | None = None
    flash_sale_ends_at: datetime | None = None
    available_stock: int


class CatalogEntry(BaseModel):
    product: ProductOut
    promotion: PromotionState


class CatalogBuckets(BaseModel):
    flash_sale: list[CatalogEntry]
    boosted: list[CatalogEntry]
    general: list[CatalogEntry]
    # Shuffled, capped view of `general`; re-rolled on every call
    recommendations: list[CatalogEntry]
