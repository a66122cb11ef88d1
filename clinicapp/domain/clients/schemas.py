"""Client schemas - Request and response models for client operations"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...models import PreferredContact
from ...shared.schemas import Pagination
from ...shared.validators import validate_email
from ..appointments.schemas import AppointmentTypeSummary, CreatorSummary


def _validate_birth_date(v: Optional[date]) -> Optional[date]:
    if v is not None and v >= date.today():
        raise ValueError("Birth date must be in the past")
    return v


class ClientCreate(BaseModel):
    """Schema for creating a client"""

    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    email: str
    phone: str = Field(..., min_length=7, max_length=20)
    birth_date: Optional[date] = None
    address: Optional[str] = Field(None, max_length=500)
    preferred_contact: PreferredContact = PreferredContact.EMAIL
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, v):
        return _validate_birth_date(v)


class ClientUpdate(BaseModel):
    """Schema for updating a client"""

    first_name: Optional[str] = Field(None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[str] = None
    phone: Optional[str] = Field(None, min_length=7, max_length=20)
    birth_date: Optional[date] = None
    address: Optional[str] = Field(None, max_length=500)
    preferred_contact: Optional[PreferredContact] = None
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, v):
        return _validate_birth_date(v)

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class ClientAppointmentSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    appointment_date: date
    start_time: str
    end_time: Optional[str] = None
    status: str
    appointment_type: Optional[AppointmentTypeSummary] = None


class ClientResponse(BaseModel):
    """Schema for client response"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    birth_date: Optional[date] = None
    address: Optional[str] = None
    preferred_contact: str
    notes: Optional[str] = None
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[CreatorSummary] = None


class ClientDetailResponse(ClientResponse):
    appointments: list[ClientAppointmentSummary] = []


class ClientListResponse(BaseModel):
    clients: list[ClientResponse]
    pagination: Pagination
