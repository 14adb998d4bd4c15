"""Pet repository - Database operations for pets"""

from typing import Optional

from sqlalchemy.orm import Query, Session

from ...models import Appointment, Client, Pet


class PetRepository:
    """Repository for pet database operations"""

    @staticmethod
    def query_pets(
        db: Session,
        client_id: Optional[int] = None,
        name: Optional[str] = None,
        species: Optional[str] = None,
        breed: Optional[str] = None,
    ) -> Query:
        query = db.query(Pet)
        if client_id is not None:
            query = query.filter(Pet.client_id == client_id)
        if name:
            query = query.filter(Pet.name.ilike(f"%{name}%"))
        if species:
            query = query.filter(Pet.species.ilike(f"%{species}%"))
        if breed:
            query = query.filter(Pet.breed.ilike(f"%{breed}%"))
        return query.order_by(Pet.name.asc())

    @staticmethod
    def get_pet_by_id(db: Session, pet_id: int) -> Optional[Pet]:
        return db.query(Pet).filter(Pet.id == pet_id).first()

    @staticmethod
    def get_client(db: Session, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def has_appointments(db: Session, pet_id: int) -> bool:
        return db.query(Appointment.id).filter(Appointment.pet_id == pet_id).first() is not None

    @staticmethod
    def create_pet(db: Session, **pet_data) -> Pet:
        pet = Pet(**pet_data)
        db.add(pet)
        db.commit()
        db.refresh(pet)
        return pet

    @staticmethod
    def update_pet(db: Session, pet: Pet, **updates) -> Pet:
        for key, value in updates.items():
            if hasattr(pet, key):
                setattr(pet, key, value)
        db.commit()
        db.refresh(pet)
        return pet

    @staticmethod
    def delete_pet(db: Session, pet: Pet) -> None:
        db.delete(pet)
        db.commit()
