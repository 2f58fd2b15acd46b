"""Health check endpoint"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any
import logging

from app.core.database import get_db
from app.core.config import settings
from app.models.base import utcnow

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health", tags=["Health"])
async def health_check(db: AsyncSession = Depends(get_db)) -> Dict[str, Any]:
    """Service status with a database round trip"""
    database = "healthy"
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = "unhealthy"

    return {
        "status": "healthy" if database == "healthy" else "degraded",
        "version": settings.APP_VERSION,
        "timestamp": utcnow().isoformat(),
        "components": {"database": database},
    }
