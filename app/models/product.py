"""Product model"""

from sqlalchemy import Column, String, Text, Numeric, Integer, Boolean, JSON, ForeignKey, Index, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from decimal import Decimal

from .base import BaseModel, TimestampedModel, UUIDModel

PRODUCT_UNITS = ("each", "lb", "oz", "kg", "g", "l", "ml")

class Product(BaseModel, TimestampedModel, UUIDModel):
    """Product sold by a single store"""

    __tablename__ = "products"

    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    brand = Column(String(100), nullable=True)

    store_id = Column(Uuid(as_uuid=True), ForeignKey("stores.id"), nullable=False)
    category_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id"), nullable=True)

    # Pricing
    price = Column(Numeric(10, 2), nullable=False)
    sale_price = Column(Numeric(10, 2), nullable=True)
    on_sale = Column(Boolean, default=False, nullable=False)

    # Inventory
    stock = Column(Integer, default=0, nullable=False)
    unit = Column(String(10), default="each", nullable=False)

    images = Column(JSON, default=list)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    # Relationships
    store = relationship("Store", back_populates="products")
    category = relationship("Category", back_populates="products")

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_non_negative_price"),
        CheckConstraint("stock >= 0", name="check_non_negative_stock"),
        CheckConstraint(
            "unit IN ('each', 'lb', 'oz', 'kg', 'g', 'l', 'ml')",
            name="check_product_unit"
        ),
        Index("idx_products_store_active", "store_id", "is_active"),
        Index("idx_products_category_active", "category_id", "is_active"),
    )

    @property
    def effective_price(self) -> Decimal:
        """Sale price while on sale, list price otherwise"""
        if self.on_sale and self.sale_price is not None and self.sale_price > 0:
            return Decimal(self.sale_price)
        return Decimal(self.price)

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity
