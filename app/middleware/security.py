"""Security middleware and input sanitization"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Any, Dict, Optional
import bleach
import logging

logger = logging.getLogger(__name__)

class SecurityMiddleware(BaseHTTPMiddleware):
    """Adds security headers to every response"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        path = request.url.path
        if path.startswith("/api/docs") or path.startswith("/api/redoc") or path.startswith("/api/openapi.json"):
            # Swagger UI loads its assets from a CDN
            response.headers["Content-Security-Policy"] = (
                "default-src 'self' 'unsafe-inline' https: data:; "
                "img-src 'self' data: https:"
            )
        else:
            response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        return response

class InputSanitizer:
    """Input sanitization for free-text fields"""

    @staticmethod
    def sanitize_text(value: Optional[str], max_length: int = 500) -> Optional[str]:
        """Strip all HTML, collapse whitespace and cap the length"""
        if value is None:
            return None

        value = value.replace("\x00", "")
        value = bleach.clean(value, tags=[], strip=True)
        value = " ".join(value.split())

        return value[:max_length]

    @staticmethod
    def sanitize_note(note: Optional[str]) -> Optional[str]:
        """Sanitize a cart line note"""
        return InputSanitizer.sanitize_text(note, max_length=500)

    @staticmethod
    def sanitize_instructions(instructions: Optional[str]) -> Optional[str]:
        """Sanitize delivery instructions"""
        return InputSanitizer.sanitize_text(instructions, max_length=1000)

    @staticmethod
    def sanitize_product_data(data: Dict[str, Any]) -> Dict[str, Any]:
        """Sanitize product input data"""
        if data.get("name"):
            data["name"] = bleach.clean(data["name"], tags=[], strip=True)[:255]

        if data.get("description"):
            # Allow some HTML in description
            data["description"] = bleach.clean(
                data["description"],
                tags=["p", "br", "strong", "em", "u", "ul", "ol", "li"],
                strip=True
            )[:5000]

        return data
