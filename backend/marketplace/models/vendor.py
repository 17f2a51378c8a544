from datetime import datetime

from sqlalchemy import Column, String, Text, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from marketplace.clock import ensure_utc
from marketplace.db.database import Base, generate_id


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(String(36), primary_key=True, default=generate_id)
    # Account issued by the authentication provider
    user_id = Column(String(36), nullable=False, unique=True, index=True)
    store_name = Column(String(255), nullable=False)
    description = Column(Text)
    is_verified = Column(Boolean, nullable=False, default=False)
    subscription_end_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    products = relationship("Product", back_populates="vendor")

    def subscription_active(self, now: datetime) -> bool:
        """Null or future end date means the subscription is active."""
        if self.subscription_end_date is None:
            return True
        return ensure_utc(self.subscription_end_date) > now

    def __repr__(self):
        return f"<Vendor(id={self.id}, store_name='{self.store_name}', user_id={self.user_id})>"
