"""
Custom exception classes and error handlers
Provides consistent {"message": ...} error responses across the application
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

class AddiscartException(HTTPException):
    """Base exception class for Addiscart application"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

class BadRequestException(AddiscartException):
    """400 Bad Request"""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )

class UnauthorizedException(AddiscartException):
    """401 Unauthorized"""

    def __init__(self, detail: str = "Unauthorized", error_code: str = "UNAUTHORIZED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code,
            headers={"WWW-Authenticate": "Bearer"}
        )

class ForbiddenException(AddiscartException):
    """403 Forbidden"""

    def __init__(self, detail: str = "Forbidden", error_code: str = "FORBIDDEN"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code=error_code
        )

class NotFoundException(AddiscartException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class BadGatewayException(AddiscartException):
    """502 Bad Gateway"""

    def __init__(
        self,
        detail: str = "Upstream service error",
        error_code: str = "BAD_GATEWAY"
    ):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            error_code=error_code
        )

# Business logic exceptions
class InsufficientStockException(BadRequestException):
    """Product stock insufficient"""

    def __init__(self, product_name: str, available: int):
        super().__init__(
            detail=f"Not enough stock for product {product_name}. Available: {available}",
            error_code="INSUFFICIENT_STOCK"
        )

class ProductUnavailableException(BadRequestException):
    """Product deleted or deactivated since it was added to a cart"""

    def __init__(self, product_name: str):
        super().__init__(
            detail=f"Product {product_name} is no longer available",
            error_code="PRODUCT_UNAVAILABLE"
        )

class InvalidStatusTransitionException(BadRequestException):
    """Order status change rejected by the state machine"""

    def __init__(self, current: str, new: str):
        super().__init__(
            detail=f"Cannot transition order from {current} to {new}",
            error_code="INVALID_STATUS_TRANSITION"
        )

class DuplicateResourceException(BadRequestException):
    """Resource already exists"""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            error_code="DUPLICATE_RESOURCE"
        )

class InvalidWebhookSignatureException(UnauthorizedException):
    """Webhook signature check failed"""

    def __init__(self, detail: str = "Invalid webhook signature"):
        super().__init__(
            detail=detail,
            error_code="INVALID_WEBHOOK_SIGNATURE"
        )

class PaymentGatewayException(BadGatewayException):
    """Payment provider call failed"""

    def __init__(self, detail: str = "Payment provider error"):
        super().__init__(
            detail=detail,
            error_code="PAYMENT_GATEWAY_ERROR"
        )

# Handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as {"message": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation errors as 400 with field-level detail"""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation failed", "errors": errors},
    )

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and hide the internals from the client"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Server error"},
    )

def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers to the application"""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
