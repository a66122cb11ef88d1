"""Appointment type service - Business logic for appointment type operations"""

import logging

from sqlalchemy.orm import Session

from ...errors import ConflictError, NotFoundError
from ...models import AppointmentType
from .repository import AppointmentTypeRepository
from .schemas import AppointmentTypeCreate, AppointmentTypeUpdate

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "An appointment type with this name already exists"


class AppointmentTypeService:
    """Service layer for appointment type business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentTypeRepository()

    def find_all(self, include_inactive: bool = False) -> list[AppointmentType]:
        """Active types by default; the caller decides who may see inactive ones"""
        return self.repo.get_types(self.db, include_inactive)

    def find_by_id(self, type_id: str) -> AppointmentType:
        appointment_type = self.repo.get_type_by_id(self.db, type_id)
        if not appointment_type:
            raise NotFoundError("Appointment type not found")
        return appointment_type

    def create(self, data: AppointmentTypeCreate) -> AppointmentType:
        """Create a new appointment type; names are unique across active and inactive"""
        if self.repo.get_type_by_name(self.db, data.name):
            logger.warning(f"⚠️ Duplicate appointment type name rejected: {data.name}")
            raise ConflictError(DUPLICATE_NAME_MESSAGE, code="DUPLICATE_NAME")

        appointment_type = self.repo.create_type(
            self.db,
            name=data.name,
            description=data.description,
            duration_minutes=data.duration_minutes,
            color=data.color,
            is_active=True,
        )
        logger.info(f"✅ Appointment type created: {appointment_type.name} ({appointment_type.id})")
        return appointment_type

    def update(self, type_id: str, data: AppointmentTypeUpdate) -> AppointmentType:
        appointment_type = self.find_by_id(type_id)

        if data.name and data.name != appointment_type.name:
            if self.repo.get_type_by_name(self.db, data.name, exclude_id=type_id):
                raise ConflictError(DUPLICATE_NAME_MESSAGE, code="DUPLICATE_NAME")

        updates = data.model_dump(exclude_unset=True)
        return self.repo.update_type(self.db, appointment_type, **updates)

    def delete(self, type_id: str) -> None:
        """Soft delete: the type is deactivated, never removed"""
        appointment_type = self.find_by_id(type_id)
        self.repo.update_type(self.db, appointment_type, is_active=False)
        logger.info(f"🗑️ Appointment type {type_id} deactivated")
