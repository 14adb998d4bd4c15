"""Pet service - Business logic for pets"""

import logging
from typing import Optional

from sqlalchemy import false
from sqlalchemy.orm import Session

from ...auth import ensure_client_access, is_client_user
from ...exceptions import InvalidInputError, NotFoundError
from ...models import Pet, User
from ...shared.pagination import PaginationParams, paginate
from ..scheduling.repository import AppointmentRepository
from .repository import PetRepository
from .schemas import PetCreate, PetUpdate

logger = logging.getLogger(__name__)


class PetService:
    """Service layer for pet business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PetRepository()

    def _ensure_client_exists(self, client_id: int) -> None:
        if not self.repo.get_client(self.db, client_id):
            raise NotFoundError("Client not found")

    def list_pets(
        self,
        params: PaginationParams,
        current_user: User,
        client_id: Optional[int] = None,
        name: Optional[str] = None,
        species: Optional[str] = None,
        breed: Optional[str] = None,
    ):
        if is_client_user(current_user):
            if current_user.client is None:
                return paginate(self.db.query(Pet).filter(false()), params)
            client_id = current_user.client.id
        query = self.repo.query_pets(
            self.db, client_id=client_id, name=name, species=species, breed=breed
        )
        return paginate(query, params)

    def get_pet(self, pet_id: int, current_user: User) -> Pet:
        pet = self.repo.get_pet_by_id(self.db, pet_id)
        if not pet:
            raise NotFoundError("Pet not found")
        ensure_client_access(current_user, pet.client_id)
        return pet

    def create_pet(self, data: PetCreate, current_user: User) -> Pet:
        self._ensure_client_exists(data.client_id)
        ensure_client_access(current_user, data.client_id)

        pet = self.repo.create_pet(self.db, **data.model_dump())
        logger.info(f"🐾 Registered pet {pet.id} ({pet.species}) for client {pet.client_id}")
        return pet

    def update_pet(self, pet_id: int, data: PetUpdate, current_user: User) -> Pet:
        pet = self.get_pet(pet_id, current_user)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)

        if "client_id" in updates and updates["client_id"] != pet.client_id:
            self._ensure_client_exists(updates["client_id"])
            ensure_client_access(current_user, updates["client_id"])

        return self.repo.update_pet(self.db, pet, **updates)

    def delete_pet(self, pet_id: int, current_user: User) -> None:
        pet = self.get_pet(pet_id, current_user)
        if self.repo.has_appointments(self.db, pet.id):
            raise InvalidInputError("Cannot delete a pet with appointments")
        self.repo.delete_pet(self.db, pet)
        logger.info(f"🗑️ Deleted pet {pet_id}")

    def list_pet_appointments(
        self,
        pet_id: int,
        params: PaginationParams,
        current_user: User,
        status: Optional[str] = None,
    ):
        pet = self.get_pet(pet_id, current_user)
        query = AppointmentRepository.query_appointments(self.db, pet_id=pet.id, status=status)
        return paginate(query, params)
