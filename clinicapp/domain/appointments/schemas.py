"""Appointment schemas - Request and response models"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...models import AppointmentStatus
from ...shared.schemas import Pagination
from ...shared.validators import validate_time_of_day
from ..scheduling.time_calculator import normalize_time


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment. Any status in the payload is ignored."""

    client_id: UUID
    appointment_type_id: UUID
    appointment_date: date
    start_time: str
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, v):
        return normalize_time(validate_time_of_day(v))


class AppointmentUpdate(BaseModel):
    """Partial update; at least one field is required"""

    client_id: Optional[UUID] = None
    appointment_type_id: Optional[UUID] = None
    appointment_date: Optional[date] = None
    start_time: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, v):
        if v is None:
            return v
        return normalize_time(validate_time_of_day(v))

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class ClientSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    address: Optional[str] = None
    preferred_contact: Optional[str] = None


class AppointmentTypeSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    duration_minutes: int
    color: Optional[str] = None


class CreatorSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str


class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str
    appointment_type_id: str
    appointment_date: date
    start_time: str
    end_time: Optional[str] = None
    status: str
    notes: Optional[str] = None
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    client: Optional[ClientSummary] = None
    appointment_type: Optional[AppointmentTypeSummary] = None
    creator: Optional[CreatorSummary] = None


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentResponse]
    pagination: Pagination
