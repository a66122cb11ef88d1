"""Client service - Business logic for client operations"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import ConflictError, NotFoundError
from ...models import Appointment, Client
from ...shared.schemas import Pagination
from ..appointments.repository import AppointmentRepository
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)

RECENT_APPOINTMENTS_LIMIT = 10


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(
        self, page: int = 1, limit: int = 10, search: Optional[str] = None
    ) -> tuple[list[Client], Pagination]:
        """Get a page of clients, optionally filtered by name, email or phone"""
        offset = (page - 1) * limit
        clients = self.repo.get_clients(self.db, offset, limit, search)
        total = self.repo.count_clients(self.db, search)
        return clients, Pagination.build(total, page, limit)

    def get_client(self, client_id: str, include_deleted: bool = False) -> Client:
        """Get a specific client"""
        client = self.repo.get_client_by_id(self.db, client_id, include_deleted=include_deleted)
        if not client:
            raise NotFoundError("Client not found")
        return client

    def get_client_with_appointments(self, client_id: str) -> tuple[Client, list[Appointment]]:
        """Get a client together with its most recent appointments"""
        client = self.get_client(client_id)
        appointments = AppointmentRepository.get_recent_for_client(
            self.db, client_id, RECENT_APPOINTMENTS_LIMIT
        )
        return client, appointments

    def create_client(self, data: ClientCreate, actor_id: str) -> Client:
        """Create a new client; emails of deleted clients stay reserved"""
        logger.info(f"📥 Creating client for user_id: {actor_id}")

        existing = self.repo.get_client_by_email(self.db, data.email, include_deleted=True)
        if existing:
            if existing.deleted_at is not None:
                logger.warning(f"⚠️ Email {data.email} belongs to a deleted client")
                raise ConflictError(
                    "A client with this email was previously deleted. Contact support to restore.",
                    code="CLIENT_EMAIL_DELETED",
                )
            raise ConflictError("A client with this email already exists", code="DUPLICATE_EMAIL")

        client_data = data.model_dump()
        client_data["preferred_contact"] = data.preferred_contact.value

        client = self.repo.create_client(self.db, actor_id, **client_data)
        return self.get_client(client.id)

    def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        """Update a client"""
        client = self.get_client(client_id)

        if data.email and data.email != client.email:
            if self.repo.get_client_by_email(self.db, data.email, exclude_id=client_id):
                raise ConflictError("A client with this email already exists", code="DUPLICATE_EMAIL")

        updates = {}
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key in ("first_name", "last_name", "email", "phone", "preferred_contact"):
                continue
            updates[key] = value
        if data.preferred_contact is not None:
            updates["preferred_contact"] = data.preferred_contact.value

        self.repo.update_client(self.db, client, **updates)
        return self.get_client(client_id)

    def delete_client(self, client_id: str) -> None:
        """Soft delete a client"""
        client = self.get_client(client_id)
        self.repo.soft_delete_client(self.db, client)
        logger.info(f"🗑️ Client {client_id} soft-deleted")
