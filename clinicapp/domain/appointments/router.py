"""Appointment router - FastAPI endpoints for appointment operations"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import AppointmentStatus, User
from ...shared.schemas import ApiResponse
from .schemas import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AppointmentUpdate,
)
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


@router.get("", response_model=ApiResponse[AppointmentListResponse])
async def get_appointments(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    appointment_date: Optional[date] = Query(None, alias="date"),
    status: Optional[AppointmentStatus] = Query(None),
    client_id: Optional[UUID] = Query(None),
    _user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """List appointments ordered by date and start time"""
    appointments, pagination = service.find_all(
        page,
        limit,
        appointment_date=appointment_date,
        status=status.value if status else None,
        client_id=str(client_id) if client_id else None,
    )
    return ApiResponse(
        data=AppointmentListResponse(
            appointments=[AppointmentResponse.model_validate(a) for a in appointments],
            pagination=pagination,
        )
    )


@router.get("/{appointment_id}", response_model=ApiResponse[AppointmentResponse])
async def get_appointment(
    appointment_id: UUID,
    _user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    appointment = service.find_by_id(str(appointment_id))
    return ApiResponse(data=AppointmentResponse.model_validate(appointment))


@router.post("", response_model=ApiResponse[AppointmentResponse], status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment; rejects past dates and overlaps with the client's other bookings"""
    appointment = service.create(data, current_user.id)
    return ApiResponse(
        data=AppointmentResponse.model_validate(appointment),
        message="Appointment created successfully",
    )


@router.put("/{appointment_id}", response_model=ApiResponse[AppointmentResponse])
async def update_appointment(
    appointment_id: UUID,
    data: AppointmentUpdate,
    _user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    appointment = service.update(str(appointment_id), data)
    return ApiResponse(
        data=AppointmentResponse.model_validate(appointment),
        message="Appointment updated successfully",
    )


@router.patch("/{appointment_id}/status", response_model=ApiResponse[AppointmentResponse])
async def update_appointment_status(
    appointment_id: UUID,
    data: AppointmentStatusUpdate,
    _user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    appointment = service.update_status(str(appointment_id), data.status)
    return ApiResponse(
        data=AppointmentResponse.model_validate(appointment),
        message="Appointment status updated successfully",
    )


@router.delete("/{appointment_id}", status_code=204)
async def delete_appointment(
    appointment_id: UUID,
    _user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Soft delete an appointment"""
    service.delete(str(appointment_id))
    return Response(status_code=204)
