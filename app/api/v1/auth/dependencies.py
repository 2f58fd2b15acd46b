"""
Authentication dependencies
"""

from typing import Optional, Iterable
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import uuid

from app.core.database import get_db
from app.core.security import SecurityUtils
from app.core.exceptions import UnauthorizedException, ForbiddenException
from app.models import User, UserRole

security = HTTPBearer(auto_error=False)

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Get current authenticated user (required)
    Raises 401 if the token is missing or invalid, or the account is gone or inactive
    """
    if credentials is None:
        raise UnauthorizedException("No token, authorization denied")

    payload = SecurityUtils.decode_token(credentials.credentials)

    if payload.get("type") != "access":
        raise UnauthorizedException("Invalid token type")

    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        raise UnauthorizedException("Token is not valid")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None:
        raise UnauthorizedException("Token is not valid")

    if not user.is_active:
        raise UnauthorizedException("Account is deactivated")

    return user

def require_role(allowed_roles: Iterable[UserRole]):
    """Dependency factory that admits only the given roles"""
    allowed = set(allowed_roles)

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise ForbiddenException("Not authorized to perform this action")
        return current_user

    return role_checker

require_admin = require_role([UserRole.ADMIN])
require_staff = require_role([UserRole.ADMIN, UserRole.SHOPPER])
