"""Base schemas shared by the API modules"""

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional
from decimal import Decimal

# Decimal in the database, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(lambda v: float(v), return_type=float, when_used="json")]

class BaseSchema(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

class MessageResponse(BaseSchema):
    """Plain {"message": ...} response"""
    message: str

class Address(BaseSchema):
    """Postal address used by stores and deliveries"""
    street: str
    city: str
    state: str
    zip_code: str

class PaginationMeta(BaseSchema):
    """Pagination block returned by list endpoints"""
    total: int
    page: int
    limit: int
    pages: int
