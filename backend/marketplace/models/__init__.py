"""ORM models - importing this package registers every table on Base.metadata."""
from marketplace.models.category import Category
from marketplace.models.product import Product
from marketplace.models.vendor import Vendor
from marketplace.models.flash_sale import FlashSale
from marketplace.models.boost import BoostPlan, BoostRequest
from marketplace.models.order import Order, OrderItem

__all__ = [
    "Category",
    "Product",
    "Vendor",
    "FlashSale",
    "BoostPlan",
    "BoostRequest",
    "Order",
    "OrderItem",
]
