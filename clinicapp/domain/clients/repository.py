"""Client repository - Database operations for clients"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from ...models import Client


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def _search(db: Session, search: Optional[str] = None):
        query = db.query(Client).filter(Client.deleted_at.is_(None))

        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(Client.first_name).like(pattern),
                    func.lower(Client.last_name).like(pattern),
                    func.lower(Client.email).like(pattern),
                    Client.phone.like(pattern),
                )
            )

        return query

    @classmethod
    def get_clients(
        cls, db: Session, offset: int = 0, limit: int = 10, search: Optional[str] = None
    ) -> list[Client]:
        """Get a page of clients, newest first"""
        return (
            cls._search(db, search)
            .options(joinedload(Client.creator))
            .order_by(Client.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    @classmethod
    def count_clients(cls, db: Session, search: Optional[str] = None) -> int:
        return cls._search(db, search).count()

    @staticmethod
    def get_client_by_id(
        db: Session, client_id: str, include_deleted: bool = False
    ) -> Optional[Client]:
        """Get a specific client by ID"""
        query = db.query(Client).options(joinedload(Client.creator)).filter(Client.id == client_id)
        if not include_deleted:
            query = query.filter(Client.deleted_at.is_(None))
        return query.first()

    @staticmethod
    def get_client_by_email(
        db: Session,
        email: str,
        include_deleted: bool = False,
        exclude_id: Optional[str] = None,
    ) -> Optional[Client]:
        query = db.query(Client).filter(Client.email == email)
        if not include_deleted:
            query = query.filter(Client.deleted_at.is_(None))
        if exclude_id:
            query = query.filter(Client.id != exclude_id)
        return query.first()

    @staticmethod
    def create_client(db: Session, created_by: str, **client_data) -> Client:
        """Create a new client"""
        client = Client(created_by=created_by, **client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def soft_delete_client(db: Session, client: Client) -> None:
        """Mark a client as deleted; appointments keep referencing it"""
        client.deleted_at = datetime.now(timezone.utc)
        db.commit()
