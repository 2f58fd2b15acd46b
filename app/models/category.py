"""
Category model for product categorization
Supports one level of parent-child nesting
"""

from sqlalchemy import Column, String, Boolean, ForeignKey, Text, Uuid, Index
from sqlalchemy.orm import relationship

from .base import BaseModel, TimestampedModel, UUIDModel

class Category(BaseModel, TimestampedModel, UUIDModel):
    """Product category with optional parent"""

    __tablename__ = "categories"

    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    image = Column(String(500), nullable=True)
    parent_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id"), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    parent = relationship("Category", remote_side="Category.id")
    products = relationship("Product", back_populates="category")

    __table_args__ = (
        Index("idx_categories_parent_active", "parent_id", "is_active"),
    )
