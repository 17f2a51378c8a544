from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class LowStockProduct(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    stock: int


class RecentOrder(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_date: datetime
    status: str
    # Subtotal of the vendor's own lines
    total_amount: Decimal


class VendorStats(BaseModel):
    vendor_id: str
    product_count: int = 0
    total_orders: int = 0
    pending_orders: int = 0
    total_revenue: Decimal = Decimal("0.00")
    low_stock: list[LowStockProduct] = []
    recent_orders: list[RecentOrder] = []
    subscription_active: bool = True
