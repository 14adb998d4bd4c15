"""Client service - Business logic for client profiles"""

import logging
from typing import Optional

from sqlalchemy import false
from sqlalchemy.orm import Session

from ...auth import ensure_client_access, is_client_user
from ...exceptions import ConflictError, InvalidInputError, NotFoundError
from ...models import Client, User
from ...shared.pagination import PaginationParams, paginate
from ..pets.repository import PetRepository
from ..sales.repository import SaleRepository
from ..scheduling.repository import AppointmentRepository
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def list_clients(
        self,
        params: PaginationParams,
        current_user: User,
        name: Optional[str] = None,
        cpf: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
    ):
        query = self.repo.query_clients(self.db, name=name, cpf=cpf, city=city, state=state)
        if is_client_user(current_user):
            own = current_user.client
            query = query.filter(Client.id == own.id) if own else query.filter(false())
        return paginate(query, params)

    def get_client(self, client_id: int, current_user: User) -> Client:
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise NotFoundError("Client not found")
        ensure_client_access(current_user, client.id)
        return client

    def create_client(self, data: ClientCreate) -> Client:
        """
        Attach a client profile to an existing user.

        Raises:
            NotFoundError: If the user doesn't exist
            ConflictError: If the user already has a client profile or the cpf is taken
        """
        if not self.repo.get_user(self.db, data.user_id):
            raise NotFoundError("User not found")
        if self.repo.get_client_by_user_id(self.db, data.user_id):
            raise ConflictError("User already has a client profile")
        if data.cpf and self.repo.get_client_by_cpf(self.db, data.cpf):
            raise ConflictError("CPF already in use")

        client = self.repo.create_client(self.db, **data.model_dump())
        logger.info(f"✅ Created client {client.id} for user {client.user_id}")
        return client

    def update_client(self, client_id: int, data: ClientUpdate, current_user: User) -> Client:
        client = self.get_client(client_id, current_user)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)

        if "cpf" in updates and updates["cpf"] != client.cpf:
            if self.repo.get_client_by_cpf(self.db, updates["cpf"]):
                raise ConflictError("CPF already in use")

        return self.repo.update_client(self.db, client, **updates)

    def delete_client(self, client_id: int) -> None:
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise NotFoundError("Client not found")
        if self.repo.has_appointments(self.db, client.id):
            raise InvalidInputError("Cannot delete a client with appointments")
        if self.repo.has_sales(self.db, client.id):
            raise InvalidInputError("Cannot delete a client with purchases")

        pet_count = len(client.pets)
        self.repo.delete_client(self.db, client)
        logger.info(f"🗑️ Deleted client {client_id} and {pet_count} pet(s)")

    # ------------------------------------------------------------------
    # Related records
    # ------------------------------------------------------------------

    def list_pets(self, client_id: int, params: PaginationParams, current_user: User):
        client = self.get_client(client_id, current_user)
        return paginate(PetRepository.query_pets(self.db, client_id=client.id), params)

    def list_appointments(
        self,
        client_id: int,
        params: PaginationParams,
        current_user: User,
        status: Optional[str] = None,
    ):
        client = self.get_client(client_id, current_user)
        query = AppointmentRepository.query_appointments(self.db, client_id=client.id, status=status)
        return paginate(query, params)

    def list_purchases(
        self,
        client_id: int,
        params: PaginationParams,
        current_user: User,
        status: Optional[str] = None,
    ):
        client = self.get_client(client_id, current_user)
        query = SaleRepository.query_sales(self.db, client_id=client.id, status=status)
        return paginate(query, params)
