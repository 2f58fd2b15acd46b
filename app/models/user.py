"""
User model
Handles authentication and the customer / shopper / admin roles
"""

from sqlalchemy import Column, String, Boolean, Enum, DateTime, Index
from sqlalchemy.orm import relationship
import enum

from .base import BaseModel, TimestampedModel, UUIDModel

class UserRole(str, enum.Enum):
    CUSTOMER = "customer"
    SHOPPER = "shopper"
    ADMIN = "admin"

class User(BaseModel, TimestampedModel, UUIDModel):
    """Application user"""

    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(20), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(UserRole, name="user_role"), default=UserRole.CUSTOMER, nullable=False)

    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    carts = relationship("Cart", back_populates="user")
    orders = relationship("Order", foreign_keys="Order.user_id", back_populates="user")
    assigned_orders = relationship("Order", foreign_keys="Order.shopper_id", back_populates="shopper")

    __table_args__ = (
        Index("idx_users_role_active", "role", "is_active"),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_shopper(self) -> bool:
        return self.role == UserRole.SHOPPER
