"""Appointment type router - Catalogue of bookable services"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_admin
from ...database import get_db
from ...models import User, UserRole
from ...shared.schemas import ApiResponse
from .schemas import AppointmentTypeCreate, AppointmentTypeResponse, AppointmentTypeUpdate
from .service import AppointmentTypeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointment-types", tags=["Appointment Types"])


def get_appointment_type_service(db: Session = Depends(get_db)) -> AppointmentTypeService:
    """Dependency injection for AppointmentTypeService"""
    return AppointmentTypeService(db)


@router.get("", response_model=ApiResponse[list[AppointmentTypeResponse]])
async def get_appointment_types(
    include_inactive: bool = Query(False),
    current_user: User = Depends(get_current_user),
    service: AppointmentTypeService = Depends(get_appointment_type_service),
):
    """List appointment types; inactive ones are only visible to admins"""
    show_inactive = include_inactive and current_user.role == UserRole.ADMIN.value
    types = service.find_all(include_inactive=show_inactive)
    return ApiResponse(data=[AppointmentTypeResponse.model_validate(t) for t in types])


@router.get("/{type_id}", response_model=ApiResponse[AppointmentTypeResponse])
async def get_appointment_type(
    type_id: UUID,
    _user: User = Depends(get_current_user),
    service: AppointmentTypeService = Depends(get_appointment_type_service),
):
    return ApiResponse(data=AppointmentTypeResponse.model_validate(service.find_by_id(str(type_id))))


@router.post("", response_model=ApiResponse[AppointmentTypeResponse], status_code=201)
async def create_appointment_type(
    data: AppointmentTypeCreate,
    _admin: User = Depends(require_admin),
    service: AppointmentTypeService = Depends(get_appointment_type_service),
):
    appointment_type = service.create(data)
    return ApiResponse(
        data=AppointmentTypeResponse.model_validate(appointment_type),
        message="Appointment type created successfully",
    )


@router.put("/{type_id}", response_model=ApiResponse[AppointmentTypeResponse])
async def update_appointment_type(
    type_id: UUID,
    data: AppointmentTypeUpdate,
    _admin: User = Depends(require_admin),
    service: AppointmentTypeService = Depends(get_appointment_type_service),
):
    appointment_type = service.update(str(type_id), data)
    return ApiResponse(
        data=AppointmentTypeResponse.model_validate(appointment_type),
        message="Appointment type updated successfully",
    )


@router.delete("/{type_id}", status_code=204)
async def delete_appointment_type(
    type_id: UUID,
    _admin: User = Depends(require_admin),
    service: AppointmentTypeService = Depends(get_appointment_type_service),
):
    """Deactivate an appointment type"""
    service.delete(str(type_id))
    return Response(status_code=204)
