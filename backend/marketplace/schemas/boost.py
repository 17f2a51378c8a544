from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict


class BoostRequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class BoostRequestCreate(BaseModel):
    product_id: str
    plan_id: str


class BoostRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str | None = None
    vendor_id: str | None = None
    plan_duration_days: int
    plan_price: Decimal
    request_status: BoostRequestStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
