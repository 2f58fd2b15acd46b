"""Order model with status history"""

from sqlalchemy import Column, String, Numeric, Integer, Enum, ForeignKey, Index, Text, DateTime, JSON, Uuid
from sqlalchemy.orm import relationship
import enum

from .base import BaseModel, TimestampedModel, UUIDModel, utcnow

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHOPPING = "shopping"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"

order_status_type = Enum(OrderStatus, name="order_status")

class Order(BaseModel, TimestampedModel, UUIDModel):
    """Immutable snapshot of a checked-out cart plus its fulfilment state"""

    __tablename__ = "orders"

    order_number = Column(String(20), unique=True, nullable=False, index=True)

    # Parties
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)
    store_id = Column(Uuid(as_uuid=True), ForeignKey("stores.id"), nullable=False)
    shopper_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)

    # Status
    status = Column(order_status_type, default=OrderStatus.PENDING, nullable=False, index=True)
    payment_status = Column(Enum(PaymentStatus, name="payment_status"), default=PaymentStatus.PENDING, nullable=False)

    # Amounts, copied from the cart
    subtotal = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    delivery_fee = Column(Numeric(10, 2), default=0, nullable=False)
    service_fee = Column(Numeric(10, 2), default=0, nullable=False)
    tip = Column(Numeric(10, 2), default=0, nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    # Payment
    # {type, details: {cardType, lastFourDigits}}
    payment_method = Column(JSON, nullable=False)
    payment_id = Column(String(200), nullable=True)
    payment_provider = Column(String(20), nullable=True)
    payment_reference = Column(String(200), nullable=True, index=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)

    # Delivery
    # {street, city, state, zipCode}
    delivery_address = Column(JSON, nullable=False)
    delivery_instructions = Column(Text, nullable=True)
    delivery_time = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", foreign_keys=[user_id], back_populates="orders")
    shopper = relationship("User", foreign_keys=[shopper_id], back_populates="assigned_orders")
    store = relationship("Store", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
        lazy="selectin",
    )
    status_history = relationship(
        "OrderStatusHistory",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderStatusHistory.sequence",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_orders_user_created", "user_id", "created_at"),
        Index("idx_orders_shopper_status", "shopper_id", "status"),
        Index("idx_orders_payment_status", "payment_status"),
    )

    def record_status(self, status: OrderStatus, note: str = None) -> "OrderStatusHistory":
        """Append a history entry; entries are never edited or removed"""
        entry = OrderStatusHistory(
            status=status,
            note=note,
            timestamp=utcnow(),
            sequence=len(self.status_history),
        )
        self.status_history.append(entry)
        return entry

class OrderItem(BaseModel, UUIDModel):
    """Line of an order (snapshot at time of order)"""

    __tablename__ = "order_items"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id"), nullable=False)

    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)

    # Relationships
    order = relationship("Order", back_populates="items")
    product = relationship("Product")

    __table_args__ = (
        Index("idx_order_items_order_product", "order_id", "product_id"),
    )

class OrderStatusHistory(BaseModel, UUIDModel):
    """Append-only log of order status changes"""

    __tablename__ = "order_status_history"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False)
    status = Column(order_status_type, nullable=False)
    note = Column(String(500), nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    sequence = Column(Integer, nullable=False, default=0)

    # Relationships
    order = relationship("Order", back_populates="status_history")

    __table_args__ = (
        Index("idx_order_status_history_order", "order_id", "sequence"),
    )
