"""
Two bookings for the same client and slot racing on a file-backed SQLite
database. The first request stalls between its overlap scan and its insert;
the second must wait for it and then see the clash.
"""

import threading
import time
from datetime import date

import pytest
from sqlalchemy.orm import sessionmaker

from clinicapp.database import Base, build_engine
from clinicapp.domain.appointment_types.repository import AppointmentTypeRepository
from clinicapp.domain.appointments import service as appointment_service_module
from clinicapp.domain.appointments.repository import AppointmentRepository
from clinicapp.domain.appointments.schemas import AppointmentCreate
from clinicapp.domain.appointments.service import AppointmentService
from clinicapp.domain.auth.repository import UserRepository
from clinicapp.domain.clients.repository import ClientRepository
from clinicapp.errors import SchedulingConflictError

TODAY = date(2030, 1, 15)


@pytest.fixture
def file_sessions(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'bookings.db'}")
    Base.metadata.create_all(bind=engine)
    SessionFactory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield SessionFactory
    engine.dispose()


@pytest.fixture
def seeded(file_sessions, password_hash):
    db = file_sessions()
    try:
        user = UserRepository.create_user(
            db,
            email="desk@appointments.com",
            password_hash=password_hash,
            full_name="Desk",
            role="receptionist",
            is_active=True,
        )
        client = ClientRepository.create_client(
            db,
            user.id,
            first_name="Ana",
            last_name="Lopez",
            email="ana.lopez@example.com",
            phone="5550001111",
            preferred_contact="email",
        )
        appointment_type = AppointmentTypeRepository.create_type(
            db, name="Consulta General", duration_minutes=30, color="#4CAF50", is_active=True
        )
        return user.id, client.id, appointment_type.id
    finally:
        db.close()


def test_concurrent_bookings_for_same_slot_only_one_wins(file_sessions, seeded, monkeypatch):
    user_id, client_id, type_id = seeded
    first_scanned = threading.Event()
    real_check = appointment_service_module.check_for_overlap

    def stalling_check(*args, **kwargs):
        real_check(*args, **kwargs)
        if not first_scanned.is_set():
            first_scanned.set()
            time.sleep(0.3)

    monkeypatch.setattr(appointment_service_module, "check_for_overlap", stalling_check)

    outcomes = []

    def book():
        db = file_sessions()
        try:
            AppointmentService(db, clock=lambda: TODAY).create(
                AppointmentCreate(
                    client_id=client_id,
                    appointment_type_id=type_id,
                    appointment_date=TODAY,
                    start_time="10:00",
                ),
                user_id,
            )
            outcomes.append("booked")
        except SchedulingConflictError:
            outcomes.append("conflict")
        finally:
            db.close()

    first = threading.Thread(target=book)
    first.start()
    assert first_scanned.wait(timeout=5)
    second = threading.Thread(target=book)
    second.start()
    first.join(timeout=10)
    second.join(timeout=10)

    assert sorted(outcomes) == ["booked", "conflict"]

    db = file_sessions()
    try:
        booked = AppointmentRepository.get_active_for_client_on_date(db, client_id, TODAY)
        assert len(booked) == 1
    finally:
        db.close()
