import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .errors import ForbiddenError, UnauthorizedError
from .models import User, UserRole
from .security_utils import verify_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the authenticated actor from the Bearer token"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token provided", code="NO_TOKEN")

    payload = verify_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise UnauthorizedError("Invalid token", code="INVALID_TOKEN")

    user = (
        db.query(User)
        .filter(User.id == payload["sub"], User.deleted_at.is_(None))
        .first()
    )
    if not user:
        logger.warning(f"🚫 Token for unknown user {payload['sub']}")
        raise UnauthorizedError("User not found")

    if not user.is_active:
        raise UnauthorizedError("User account is deactivated", code="ACCOUNT_DEACTIVATED")

    return user


def require_role(*allowed_roles: UserRole):
    """Dependency factory rejecting users whose role is not in `allowed_roles`"""
    allowed = {role.value for role in allowed_roles}

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            logger.warning(
                f"🚫 Access denied: user {current_user.id} with role {current_user.role} "
                f"needs one of {sorted(allowed)}"
            )
            raise ForbiddenError("You do not have permission to access this resource")
        return current_user

    return checker


require_admin = require_role(UserRole.ADMIN)
