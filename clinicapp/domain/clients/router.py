"""Client router - FastAPI endpoints for client operations"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.schemas import ApiResponse
from .schemas import (
    ClientAppointmentSummary,
    ClientCreate,
    ClientDetailResponse,
    ClientListResponse,
    ClientResponse,
    ClientUpdate,
)
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


@router.get("", response_model=ApiResponse[ClientListResponse])
async def get_clients(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    _user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    """List clients, newest first"""
    clients, pagination = service.get_clients(page, limit, search)
    return ApiResponse(
        data=ClientListResponse(
            clients=[ClientResponse.model_validate(c) for c in clients],
            pagination=pagination,
        )
    )


@router.get("/{client_id}", response_model=ApiResponse[ClientDetailResponse])
async def get_client(
    client_id: UUID,
    _user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    """Get a client with its most recent appointments"""
    client, appointments = service.get_client_with_appointments(str(client_id))
    detail = ClientDetailResponse(
        **ClientResponse.model_validate(client).model_dump(),
        appointments=[ClientAppointmentSummary.model_validate(a) for a in appointments],
    )
    return ApiResponse(data=detail)


@router.post("", response_model=ApiResponse[ClientResponse], status_code=201)
async def create_client(
    data: ClientCreate,
    current_user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    client = service.create_client(data, current_user.id)
    return ApiResponse(
        data=ClientResponse.model_validate(client),
        message="Client created successfully",
    )


@router.put("/{client_id}", response_model=ApiResponse[ClientResponse])
async def update_client(
    client_id: UUID,
    data: ClientUpdate,
    _user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    client = service.update_client(str(client_id), data)
    return ApiResponse(
        data=ClientResponse.model_validate(client),
        message="Client updated successfully",
    )


@router.delete("/{client_id}", status_code=204)
async def delete_client(
    client_id: UUID,
    _user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    """Soft delete a client"""
    service.delete_client(str(client_id))
    return Response(status_code=204)
