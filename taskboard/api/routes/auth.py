"""Authentication routes."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ...schemas.auth import RegisterRequest, LoginRequest, TokenResponse
from ...core.auth import auth_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    register_request: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """Register a new user."""
    return await auth_service.register(
        db, register_request.email, register_request.password
    )


@router.post("/login", response_model=TokenResponse)
async def login_user(
    login_request: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Login user and return a token."""
    return await auth_service.login(
        db, login_request.email, login_request.password
    )
