"""Auth service - Login, registration and token refresh"""

import logging

from sqlalchemy.orm import Session

from ...errors import ConflictError, NotFoundError, UnauthorizedError
from ...models import User
from ...security_utils import create_access_token, hash_password, verify_password
from .repository import UserRepository
from .schemas import AuthResult, RegisterRequest, TokenResult, UserPublic

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _issue_token(user: User) -> str:
    return create_access_token(user.id, user.email, user.role)


class AuthService:
    """Service layer for authentication"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def login(self, email: str, password: str) -> AuthResult:
        user = self.repo.get_user_by_email(self.db, email)

        if not user:
            logger.warning(f"🚫 Login failed for unknown email {email}")
            raise UnauthorizedError(INVALID_CREDENTIALS, code="INVALID_CREDENTIALS")

        if not user.is_active:
            raise UnauthorizedError("User account is deactivated", code="ACCOUNT_DEACTIVATED")

        if not verify_password(password, user.password_hash):
            logger.warning(f"🚫 Login failed for {email}: wrong password")
            raise UnauthorizedError(INVALID_CREDENTIALS, code="INVALID_CREDENTIALS")

        logger.info(f"🔑 User {user.id} logged in")
        return AuthResult(user=UserPublic.model_validate(user), token=_issue_token(user))

    def register(self, data: RegisterRequest) -> AuthResult:
        if self.repo.get_user_by_email(self.db, data.email):
            raise ConflictError("Email already registered", code="DUPLICATE_EMAIL")

        user = self.repo.create_user(
            self.db,
            email=data.email,
            password_hash=hash_password(data.password),
            full_name=data.full_name,
            role=data.role.value,
            is_active=True,
        )
        logger.info(f"✅ User registered: {user.email} ({user.role})")
        return AuthResult(user=UserPublic.model_validate(user), token=_issue_token(user))

    def get_profile(self, user_id: str) -> UserPublic:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserPublic.model_validate(user)

    def refresh_token(self, user_id: str) -> TokenResult:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFoundError("User not found")
        if not user.is_active:
            raise UnauthorizedError("User account is deactivated", code="ACCOUNT_DEACTIVATED")
        return TokenResult(token=_issue_token(user))
