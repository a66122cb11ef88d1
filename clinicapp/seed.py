"""
Seed the initial admin account
Usage: python -m clinicapp.seed

Creates the admin user, or resets its password when it already exists.
"""
import logging
import sys

from sqlalchemy.orm import Session

from .config import SEED_ADMIN_EMAIL, SEED_ADMIN_PASSWORD
from .database import Base, SessionLocal, engine
from .domain.auth.repository import UserRepository
from .models import User, UserRole
from .security_utils import hash_password

logger = logging.getLogger(__name__)


def seed_admin(db: Session, email: str = SEED_ADMIN_EMAIL, password: str = SEED_ADMIN_PASSWORD) -> User:
    """Create or reset the admin user"""
    existing = UserRepository.get_user_by_email(db, email)

    if existing:
        logger.info("Admin user already exists. Updating password...")
        user = UserRepository.update_user(
            db, existing, password_hash=hash_password(password), is_active=True
        )
        logger.info("✅ Password updated successfully!")
        return user

    logger.info("Creating admin user...")
    user = UserRepository.create_user(
        db,
        email=email,
        password_hash=hash_password(password),
        full_name="Administrador",
        role=UserRole.ADMIN.value,
        is_active=True,
    )
    logger.info("✅ Admin user created successfully!")
    return user


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_admin(db)

        logger.info("\nExisting users:")
        for user in UserRepository.get_users(db):
            logger.info(f"  {user.email:<32} {user.full_name:<24} {user.role:<14} active={user.is_active}")

        logger.info("\n=================================")
        logger.info("Login credentials:")
        logger.info(f"Email: {SEED_ADMIN_EMAIL}")
        logger.info(f"Password: {SEED_ADMIN_PASSWORD}")
        logger.info("=================================\n")
    finally:
        db.close()


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        logger.error(f"❌ Seeding failed: {e}")
        sys.exit(1)
