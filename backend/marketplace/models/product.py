from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, Float, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from marketplace.db.database import Base, generate_id


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    # Null vendor means a platform-owned product
    vendor_id = Column(String(36), ForeignKey("vendors.id", ondelete="SET NULL"), nullable=True, index=True)

    # Boost fields are only written by the boost approval flow
    is_boosted = Column(Boolean, nullable=False, default=False)
    boosted_until = Column(DateTime(timezone=True), nullable=True)

    average_rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    vendor = relationship("Vendor", back_populates="products")
    flash_sales = relationship("FlashSale", back_populates="product", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price}, vendor_id={self.vendor_id})>"
