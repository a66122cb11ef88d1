"""
Shared pytest fixtures.

Every test gets a fresh in-memory SQLite database. The FastAPI app shares the
test's session through a `get_db` override, so rows created by fixtures are
visible to requests and vice versa.
"""

import os
from datetime import date, timedelta

# Must be set before clinicapp.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinicapp.database import Base, get_db
from clinicapp.domain.appointment_types.repository import AppointmentTypeRepository
from clinicapp.domain.appointments.service import AppointmentService
from clinicapp.domain.auth.repository import UserRepository
from clinicapp.domain.clients.repository import ClientRepository
from clinicapp.main import app
from clinicapp.models import UserRole
from clinicapp.rate_limiter import memory_cache
from clinicapp.security_utils import create_access_token, hash_password

TEST_PASSWORD = "Password123"

# Fixed "today" for service-level tests
FIXED_TODAY = date(2030, 1, 15)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    memory_cache.clear()
    yield
    memory_cache.clear()


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def api(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def password_hash():
    # bcrypt is slow; hash once per run
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def admin_user(db_session, password_hash):
    return UserRepository.create_user(
        db_session,
        email="admin@appointments.com",
        password_hash=password_hash,
        full_name="Admin User",
        role=UserRole.ADMIN.value,
        is_active=True,
    )


@pytest.fixture
def staff_user(db_session, password_hash):
    return UserRepository.create_user(
        db_session,
        email="reception@appointments.com",
        password_hash=password_hash,
        full_name="Front Desk",
        role=UserRole.RECEPTIONIST.value,
        is_active=True,
    )


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email, user.role)}"}


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)


@pytest.fixture
def staff_headers(staff_user):
    return bearer(staff_user)


@pytest.fixture
def patient(db_session, admin_user):
    return ClientRepository.create_client(
        db_session,
        admin_user.id,
        first_name="Maria",
        last_name="Garcia",
        email="maria.garcia@example.com",
        phone="5551234567",
        preferred_contact="email",
    )


@pytest.fixture
def other_patient(db_session, admin_user):
    return ClientRepository.create_client(
        db_session,
        admin_user.id,
        first_name="Juan",
        last_name="Perez",
        email="juan.perez@example.com",
        phone="5559876543",
        preferred_contact="phone",
    )


@pytest.fixture
def consult_type(db_session):
    """30-minute type"""
    return AppointmentTypeRepository.create_type(
        db_session, name="Consulta General", duration_minutes=30, color="#4CAF50", is_active=True
    )


@pytest.fixture
def long_type(db_session):
    """60-minute type"""
    return AppointmentTypeRepository.create_type(
        db_session, name="Revision Completa", duration_minutes=60, color="#2196F3", is_active=True
    )


@pytest.fixture
def inactive_type(db_session):
    return AppointmentTypeRepository.create_type(
        db_session, name="Retired Service", duration_minutes=45, is_active=False
    )


@pytest.fixture
def future_date():
    return date.today() + timedelta(days=30)


@pytest.fixture
def booking_day():
    return FIXED_TODAY


@pytest.fixture
def appointment_service(db_session):
    return AppointmentService(db_session, clock=lambda: FIXED_TODAY)


@pytest.fixture
def user_password():
    return TEST_PASSWORD
