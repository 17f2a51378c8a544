from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict


class OrderStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    PAYMENT_FAILED = "Payment Failed"


class OrderFilters(BaseModel):
    status: OrderStatus | None = None
    # Bypass the delivered-order retention default
    view_all: bool = False
    page: int = 1
    page_size: int | None = None


class OrderItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str | None = None
    product_name: str
    quantity: int
    price_at_purchase: Decimal


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    total_amount: Decimal
    status: str
    order_date: datetime
    updated_at: datetime
    items: list[OrderItemOut] = []


class OrderListResponse(BaseModel):
    orders: list[OrderOut]
    page: int
    page_size: int
