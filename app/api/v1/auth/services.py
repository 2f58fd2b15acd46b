"""
Authentication service layer
Handles business logic for authentication
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from app.models import User, UserRole
from app.models.base import utcnow
from app.core.security import SecurityUtils
from app.core.exceptions import BadRequestException, UnauthorizedException
from .schemas import RegisterRequest, LoginRequest

logger = logging.getLogger(__name__)

class AuthService:
    """Authentication service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> User:
        result = await self.db.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def register(self, request: RegisterRequest) -> User:
        """
        Register a new customer

        Args:
            request: Registration request data

        Returns:
            Created user

        Raises:
            BadRequestException: If the email is already registered
        """
        if await self.get_by_email(request.email):
            raise BadRequestException("User already exists", error_code="USER_EXISTS")

        user = User(
            name=request.name,
            email=request.email.lower(),
            phone=request.phone,
            password_hash=SecurityUtils.hash_password(request.password),
            role=UserRole.CUSTOMER,
            is_active=True,
        )
        self.db.add(user)
        await self.db.flush()

        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, request: LoginRequest) -> User:
        """
        Check credentials and record the login

        Raises:
            BadRequestException: Unknown email or wrong password
            UnauthorizedException: Account deactivated
        """
        user = await self.get_by_email(request.email)

        if not user or not SecurityUtils.verify_password(request.password, user.password_hash):
            raise BadRequestException("Invalid credentials", error_code="INVALID_CREDENTIALS")

        if not user.is_active:
            raise UnauthorizedException("Account is deactivated")

        user.last_login = utcnow()
        await self.db.flush()

        return user

    @staticmethod
    def generate_token(user: User) -> str:
        """Issue an access token for the user"""
        return SecurityUtils.create_access_token({
            "sub": str(user.id),
            "role": user.role.value,
        })
