"""
Authentication API routes
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.middleware.rate_limit import auth_limiter
from app.models import User
from .dependencies import get_current_user
from .schemas import RegisterRequest, LoginRequest, AuthResponse, UserResponse
from .services import AuthService

router = APIRouter()

@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create a customer account and return an access token"
)
@auth_limiter
async def register(
    request: Request,
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    service = AuthService(db)
    user = await service.register(payload)
    return AuthResponse(token=service.generate_token(user), user=UserResponse.model_validate(user))

@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login",
    description="Exchange email and password for an access token"
)
@auth_limiter
async def login(
    request: Request,
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    service = AuthService(db)
    user = await service.authenticate(payload)
    return AuthResponse(token=service.generate_token(user), user=UserResponse.model_validate(user))

@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user"
)
async def get_me(current_user: User = Depends(get_current_user)):
    return current_user
