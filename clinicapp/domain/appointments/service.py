"""Appointment service - Booking rules and lifecycle for appointments"""

import logging
from datetime import date
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ...errors import BadRequestError, NotFoundError
from ...models import Appointment, AppointmentStatus, AppointmentType, is_valid_status
from ...shared.schemas import Pagination
from ..appointment_types.repository import AppointmentTypeRepository
from ..scheduling.overlap import check_for_overlap
from ..scheduling.time_calculator import format_time, is_past_date, to_interval, today
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentUpdate

logger = logging.getLogger(__name__)

# Changing any of these re-runs the overlap check
SCHEDULE_FIELDS = ("appointment_date", "start_time", "client_id")


class AppointmentService:
    """Service layer for appointment business logic.

    Every mutation validates referenced entities first, then the date, then
    the overlap scan, and only then writes. The client row is locked for the
    duration of the scan and the write so two bookings for the same client
    cannot both pass the check. Any error rolls the session back.
    """

    def __init__(self, db: Session, clock: Callable[[], date] = today):
        self.db = db
        self.clock = clock
        self.repo = AppointmentRepository()
        self.type_repo = AppointmentTypeRepository()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_all(
        self,
        page: int = 1,
        limit: int = 10,
        appointment_date: Optional[date] = None,
        status: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> tuple[list[Appointment], Pagination]:
        """Get a page of appointments with optional filters"""
        offset = (page - 1) * limit
        appointments = self.repo.get_appointments(
            self.db, offset, limit, appointment_date, status, client_id
        )
        total = self.repo.count_appointments(self.db, appointment_date, status, client_id)
        return appointments, Pagination.build(total, page, limit)

    def find_by_id(self, appointment_id: str) -> Appointment:
        """Get a specific appointment"""
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------

    def _resolve_client(self, client_id: str) -> None:
        if not self.repo.lock_client(self.db, client_id):
            raise NotFoundError("Client not found")

    def _resolve_bookable_type(self, appointment_type_id: str) -> AppointmentType:
        appointment_type = self.type_repo.get_type_by_id(self.db, appointment_type_id)
        if not appointment_type:
            raise NotFoundError("Appointment type not found")
        if not appointment_type.is_active:
            logger.warning(f"⚠️ Booking rejected: appointment type {appointment_type_id} is inactive")
            raise BadRequestError("This appointment type is not active")
        return appointment_type

    def _ensure_not_past(self, appointment_date: date) -> None:
        if is_past_date(appointment_date, self.clock()):
            logger.warning(f"⚠️ Booking rejected: {appointment_date} is in the past")
            raise BadRequestError("Appointment date cannot be in the past")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, data: AppointmentCreate, actor_id: str) -> Appointment:
        """Book a new appointment; it always starts as pending"""
        client_id = str(data.client_id)
        appointment_type_id = str(data.appointment_type_id)

        try:
            self._resolve_client(client_id)
            appointment_type = self._resolve_bookable_type(appointment_type_id)
            self._ensure_not_past(data.appointment_date)

            check_for_overlap(
                self.db,
                client_id,
                data.appointment_date,
                data.start_time,
                appointment_type.duration_minutes,
            )

            _, end_minutes = to_interval(data.start_time, appointment_type.duration_minutes)
            appointment = self.repo.create_appointment(
                self.db,
                client_id=client_id,
                appointment_type_id=appointment_type_id,
                appointment_date=data.appointment_date,
                start_time=data.start_time,
                end_time=format_time(end_minutes),
                notes=data.notes,
                status=AppointmentStatus.PENDING.value,
                created_by=actor_id,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"📅 Appointment {appointment.id} booked for client {client_id} "
            f"on {data.appointment_date} at {data.start_time} by user {actor_id}"
        )
        return self.find_by_id(appointment.id)

    def update(self, appointment_id: str, data: AppointmentUpdate) -> Appointment:
        """Apply a partial update, re-validating whatever the change touches"""
        appointment = self.find_by_id(appointment_id)

        updates = {}
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key != "notes":
                continue
            if key in ("client_id", "appointment_type_id"):
                value = str(value)
            updates[key] = value

        try:
            new_client_id = updates.get("client_id")
            if new_client_id and new_client_id != appointment.client_id:
                self._resolve_client(new_client_id)

            # Current type supplies the duration unless a different one is requested
            appointment_type = appointment.appointment_type
            new_type_id = updates.get("appointment_type_id")
            if new_type_id and new_type_id != appointment.appointment_type_id:
                appointment_type = self._resolve_bookable_type(new_type_id)

            if "appointment_date" in updates:
                self._ensure_not_past(updates["appointment_date"])

            effective_start = updates.get("start_time", appointment.start_time)

            if any(field in updates for field in SCHEDULE_FIELDS):
                effective_client = updates.get("client_id", appointment.client_id)
                if effective_client == appointment.client_id:
                    self.repo.lock_client(self.db, effective_client)
                check_for_overlap(
                    self.db,
                    effective_client,
                    updates.get("appointment_date", appointment.appointment_date),
                    effective_start,
                    appointment_type.duration_minutes,
                    exclude_appointment_id=appointment.id,
                )

            if "start_time" in updates or "appointment_type_id" in updates:
                _, end_minutes = to_interval(effective_start, appointment_type.duration_minutes)
                updates["end_time"] = format_time(end_minutes)

            self.repo.update_appointment(self.db, appointment, **updates)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"✏️ Appointment {appointment_id} updated: {sorted(updates)}")
        return self.find_by_id(appointment_id)

    def update_status(self, appointment_id: str, status: str) -> Appointment:
        """Set any status from any other; only the value itself is checked"""
        new_status = status.value if isinstance(status, AppointmentStatus) else status
        if not is_valid_status(new_status):
            raise BadRequestError(f"Invalid status: {new_status}", code="INVALID_STATUS")

        appointment = self.find_by_id(appointment_id)
        previous = appointment.status

        try:
            self.repo.update_appointment(self.db, appointment, status=new_status)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"🔄 Appointment {appointment_id} status {previous} -> {new_status}")
        return self.find_by_id(appointment_id)

    def delete(self, appointment_id: str) -> None:
        """Soft delete an appointment"""
        appointment = self.find_by_id(appointment_id)

        try:
            self.repo.soft_delete_appointment(self.db, appointment)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"🗑️ Appointment {appointment_id} soft-deleted")
