"""
Shopping cart model
One active cart per user and store
"""

from sqlalchemy import Column, Integer, Numeric, Boolean, ForeignKey, Index, UniqueConstraint, CheckConstraint, Text, Uuid, text
from sqlalchemy.orm import relationship

from .base import BaseModel, TimestampedModel, UUIDModel

class Cart(BaseModel, TimestampedModel, UUIDModel):
    """Per-store shopping cart with derived totals"""

    __tablename__ = "carts"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    store_id = Column(Uuid(as_uuid=True), ForeignKey("stores.id"), nullable=False)

    # Totals
    subtotal = Column(Numeric(10, 2), default=0, nullable=False)
    tax = Column(Numeric(10, 2), default=0, nullable=False)
    delivery_fee = Column(Numeric(10, 2), default=0, nullable=False)
    service_fee = Column(Numeric(10, 2), default=0, nullable=False)
    tip = Column(Numeric(10, 2), default=0, nullable=False)
    total = Column(Numeric(10, 2), default=0, nullable=False)

    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    user = relationship("User", back_populates="carts")
    store = relationship("Store", back_populates="carts")
    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.position",
        lazy="selectin",
    )

    __table_args__ = (
        Index(
            "uq_carts_active_user_store",
            "user_id",
            "store_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
        Index("idx_carts_user_active", "user_id", "is_active"),
    )

class CartItem(BaseModel, TimestampedModel, UUIDModel):
    """Cart line with the price captured when it was added"""

    __tablename__ = "cart_items"

    cart_id = Column(Uuid(as_uuid=True), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)

    # Relationships
    cart = relationship("Cart", back_populates="items")
    product = relationship("Product", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_product"),
        CheckConstraint("quantity > 0", name="check_positive_cart_quantity"),
    )
