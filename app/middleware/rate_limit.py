"""Rate limiting using slowapi"""

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

def get_rate_limit_key(request: Request) -> str:
    """Get rate limit key based on the client IP"""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        ip = forwarded.split(",")[0].strip()
    elif request.client:
        ip = request.client.host
    else:
        ip = "unknown"

    return f"ip:{ip}"

limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)

async def custom_rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    logger.warning(f"Rate limit exceeded for {get_rate_limit_key(request)} on {request.url.path}")
    return JSONResponse(
        status_code=429,
        content={"message": f"Too many requests. {exc.detail}"}
    )

# Login and registration
auth_limiter = limiter.limit(settings.RATE_LIMIT_AUTH)
