"""Appointment repository - Database operations for appointments"""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import NON_BLOCKING_STATUSES, Appointment, Client


class AppointmentRepository:
    """Repository for appointment database operations.

    Soft-deleted rows (``deleted_at`` set) are excluded unless a lookup is
    made with ``include_deleted=True``. Mutating helpers only flush; the
    service commits once per operation.
    """

    @staticmethod
    def _with_joins(query):
        return query.options(
            joinedload(Appointment.client),
            joinedload(Appointment.appointment_type),
            joinedload(Appointment.creator),
        )

    @staticmethod
    def _filtered(
        db: Session,
        appointment_date: Optional[date] = None,
        status: Optional[str] = None,
        client_id: Optional[str] = None,
    ):
        query = db.query(Appointment).filter(Appointment.deleted_at.is_(None))

        if appointment_date:
            query = query.filter(Appointment.appointment_date == appointment_date)

        if status:
            query = query.filter(Appointment.status == status)

        if client_id:
            query = query.filter(Appointment.client_id == client_id)

        return query

    @classmethod
    def get_appointments(
        cls,
        db: Session,
        offset: int = 0,
        limit: int = 10,
        appointment_date: Optional[date] = None,
        status: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> list[Appointment]:
        """Get a page of appointments ordered by date and start time"""
        query = cls._filtered(db, appointment_date, status, client_id)
        return (
            cls._with_joins(query)
            .order_by(Appointment.appointment_date.asc(), Appointment.start_time.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    @classmethod
    def count_appointments(
        cls,
        db: Session,
        appointment_date: Optional[date] = None,
        status: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> int:
        return cls._filtered(db, appointment_date, status, client_id).count()

    @classmethod
    def get_appointment_by_id(
        cls, db: Session, appointment_id: str, include_deleted: bool = False
    ) -> Optional[Appointment]:
        """Get a specific appointment with client, type and creator loaded"""
        query = db.query(Appointment).filter(Appointment.id == appointment_id)
        if not include_deleted:
            query = query.filter(Appointment.deleted_at.is_(None))
        return cls._with_joins(query).first()

    @staticmethod
    def get_active_for_client_on_date(
        db: Session,
        client_id: str,
        appointment_date: date,
        exclude_appointment_id: Optional[str] = None,
    ) -> list[Appointment]:
        """Appointments that can block a booking: same client and day, not cancelled/no-show"""
        query = (
            db.query(Appointment)
            .options(joinedload(Appointment.appointment_type))
            .filter(
                Appointment.client_id == client_id,
                Appointment.appointment_date == appointment_date,
                Appointment.status.notin_(NON_BLOCKING_STATUSES),
                Appointment.deleted_at.is_(None),
            )
        )

        if exclude_appointment_id:
            query = query.filter(Appointment.id != exclude_appointment_id)

        return query.order_by(Appointment.start_time.asc()).all()

    @staticmethod
    def get_recent_for_client(db: Session, client_id: str, limit: int = 10) -> list[Appointment]:
        """Most recent appointments of a client (date desc, time desc)"""
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.appointment_type))
            .filter(Appointment.client_id == client_id, Appointment.deleted_at.is_(None))
            .order_by(Appointment.appointment_date.desc(), Appointment.start_time.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def lock_client(db: Session, client_id: str) -> Optional[Client]:
        """Row-lock a client so concurrent bookings for it are serialised"""
        return (
            db.query(Client)
            .filter(Client.id == client_id, Client.deleted_at.is_(None))
            .with_for_update()
            .first()
        )

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        """Create a new appointment"""
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.flush()
        return appointment

    @staticmethod
    def update_appointment(db: Session, appointment: Appointment, **updates) -> Appointment:
        """Update an appointment with provided fields"""
        for key, value in updates.items():
            if hasattr(appointment, key):
                setattr(appointment, key, value)

        db.flush()
        return appointment

    @staticmethod
    def soft_delete_appointment(db: Session, appointment: Appointment) -> None:
        """Mark an appointment as deleted; the row is kept"""
        appointment.deleted_at = datetime.now(timezone.utc)
        db.flush()
