"""Store model: the grocery stores customers order from"""

from sqlalchemy import Column, String, Text, Numeric, Boolean, JSON, Index
from sqlalchemy.orm import relationship

from .base import BaseModel, TimestampedModel, UUIDModel

class Store(BaseModel, TimestampedModel, UUIDModel):
    """Store that owns products and carts"""

    __tablename__ = "stores"

    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    logo = Column(String(500), nullable=True)

    # {street, city, state, zipCode}
    address = Column(JSON, nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)

    delivery_fee = Column(Numeric(10, 2), default=0, nullable=False)
    minimum_order = Column(Numeric(10, 2), default=0, nullable=False)

    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    products = relationship("Product", back_populates="store")
    carts = relationship("Cart", back_populates="store")
    orders = relationship("Order", back_populates="store")

    __table_args__ = (
        Index("idx_stores_active", "is_active"),
    )
