"""Appointment type repository - Database operations for appointment types"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import AppointmentType


class AppointmentTypeRepository:
    """Repository for appointment type database operations"""

    @staticmethod
    def get_types(db: Session, include_inactive: bool = False) -> list[AppointmentType]:
        """Get appointment types ordered by name"""
        query = db.query(AppointmentType)

        if not include_inactive:
            query = query.filter(AppointmentType.is_active.is_(True))

        return query.order_by(AppointmentType.name.asc()).all()

    @staticmethod
    def get_type_by_id(db: Session, type_id: str) -> Optional[AppointmentType]:
        """Get a specific appointment type, active or not"""
        return db.query(AppointmentType).filter(AppointmentType.id == type_id).first()

    @staticmethod
    def get_type_by_name(
        db: Session, name: str, exclude_id: Optional[str] = None
    ) -> Optional[AppointmentType]:
        """Exact, case-sensitive name match across active and inactive types"""
        query = db.query(AppointmentType).filter(AppointmentType.name == name)
        if exclude_id:
            query = query.filter(AppointmentType.id != exclude_id)
        return query.first()

    @staticmethod
    def create_type(db: Session, **type_data) -> AppointmentType:
        """Create a new appointment type"""
        appointment_type = AppointmentType(**type_data)
        db.add(appointment_type)
        db.commit()
        db.refresh(appointment_type)
        return appointment_type

    @staticmethod
    def update_type(db: Session, appointment_type: AppointmentType, **updates) -> AppointmentType:
        """Update an appointment type; an explicit None clears a nullable field"""
        for key, value in updates.items():
            if hasattr(appointment_type, key):
                setattr(appointment_type, key, value)

        db.commit()
        db.refresh(appointment_type)
        return appointment_type
