"""
Payment attempt model
One row per provider transaction opened for an order
"""

from sqlalchemy import Column, String, Numeric, ForeignKey, Index, Enum, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import BaseModel, TimestampedModel, UUIDModel
from .order import PaymentStatus

class PaymentAttempt(BaseModel, TimestampedModel, UUIDModel):
    """Provider transaction opened for an order"""

    __tablename__ = "payment_attempts"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False)

    # Gateway details
    provider = Column(String(20), nullable=False)
    reference = Column(String(200), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(Enum(PaymentStatus, name="payment_attempt_status"), default=PaymentStatus.PENDING, nullable=False)

    # Relationships
    order = relationship("Order")

    __table_args__ = (
        UniqueConstraint("provider", "reference", name="uq_payment_attempts_provider_reference"),
        Index("idx_payment_attempts_order", "order_id"),
    )

    def __str__(self):
        return f"{self.provider} payment {self.reference} ({self.status})"
