from sqlalchemy import Column, Integer, String, Numeric, Boolean, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from marketplace.db.database import Base, generate_id


class FlashSale(Base):
    __tablename__ = "flash_sales"

    id = Column(String(36), primary_key=True, default=generate_id)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    discount_type = Column(String(20), nullable=False)  # percentage | fixed_amount
    discount_value = Column(Numeric(10, 2), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    stock_cap = Column(Integer, nullable=True)
    sales_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    product = relationship("Product", back_populates="flash_sales")

    def __repr__(self):
        return (
            f"<FlashSale(id={self.id}, product_id={self.product_id}, "
            f"{self.discount_type}={self.discount_value}, is_active={self.is_active})>"
        )
