from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, ForeignKey, DateTime, func
from marketplace.db.database import Base, generate_id


class BoostPlan(Base):
    __tablename__ = "boost_plans"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    duration_days = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class BoostRequest(Base):
    __tablename__ = "boost_requests"

    id = Column(String(36), primary_key=True, default=generate_id)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)
    vendor_id = Column(String(36), ForeignKey("vendors.id", ondelete="SET NULL"), nullable=True, index=True)
    user_id = Column(String(36), nullable=True)
    # Snapshot of the plan at request time
    plan_duration_days = Column(Integer, nullable=False)
    plan_price = Column(Numeric(10, 2), nullable=False)
    request_status = Column(String(20), nullable=False, default="pending")  # pending | approved | rejected
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<BoostRequest(id={self.id}, product_id={self.product_id}, status='{self.request_status}')>"
