"""
Category schemas
"""

from pydantic import Field
from typing import Optional
import uuid

from app.schemas.base import BaseSchema

class CategoryCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[uuid.UUID] = Field(None, alias="parent")

class CategoryResponse(BaseSchema):
    id: uuid.UUID
    name: str
    slug: str
    description: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[uuid.UUID] = Field(None, serialization_alias="parent")
    is_active: bool
