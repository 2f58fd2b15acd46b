"""
Authentication schemas for request/response validation
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional
import uuid

from app.core.config import settings
from app.models import UserRole
from app.schemas.base import BaseSchema

class RegisterRequest(BaseSchema):
    """Request to create a customer account"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., max_length=128)
    phone: Optional[str] = Field(None, max_length=20)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if len(v) < settings.PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long"
            )
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Abebe Bikila",
                "email": "abebe@example.com",
                "password": "password123",
                "phone": "+251911000000"
            }
        }
    }

class LoginRequest(BaseSchema):
    """Email and password login"""
    email: EmailStr
    password: str = Field(..., min_length=1)

class UserResponse(BaseSchema):
    """Public user data"""
    id: uuid.UUID
    name: str
    email: str
    phone: Optional[str] = None
    role: UserRole
    is_active: bool

class AuthResponse(BaseSchema):
    """Token plus the user it was issued for"""
    token: str
    user: UserResponse
