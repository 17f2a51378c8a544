from sqlalchemy import Column, String, Boolean, ForeignKey, DateTime, func
from marketplace.db.database import Base, generate_id


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    # No cascade: orphaned children are tolerated when a parent is removed
    parent_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    is_visible = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}', parent_id={self.parent_id}, is_visible={self.is_visible})>"
