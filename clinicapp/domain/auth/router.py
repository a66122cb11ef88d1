"""Auth router - Login, registration, profile and token refresh"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_admin
from ...database import get_db
from ...models import User
from ...shared.schemas import ApiResponse
from .schemas import AuthResult, LoginRequest, RegisterRequest, TokenResult, UserPublic
from .service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


@router.post("/login", response_model=ApiResponse[AuthResult])
async def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Exchange email and password for an access token"""
    return ApiResponse(data=service.login(data.email, data.password), message="Login successful")


@router.post("/register", response_model=ApiResponse[AuthResult], status_code=201)
async def register(
    data: RegisterRequest,
    _admin: User = Depends(require_admin),
    service: AuthService = Depends(get_auth_service),
):
    """Create a user account (admins only)"""
    return ApiResponse(data=service.register(data), message="User registered successfully")


@router.get("/me", response_model=ApiResponse[UserPublic])
async def get_profile(
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return ApiResponse(data=service.get_profile(current_user.id))


@router.post("/refresh", response_model=ApiResponse[TokenResult])
async def refresh_token(
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return ApiResponse(data=service.refresh_token(current_user.id))
