from enum import Enum

from pydantic import BaseModel


class Role(str, Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"
    ADMIN = "admin"
    ANONYMOUS = "anonymous"


class Actor(BaseModel):
    """Identity and role issuing a request."""
    id: str | None = None
    role: Role = Role.ANONYMOUS
    vendor_id: str | None = None
