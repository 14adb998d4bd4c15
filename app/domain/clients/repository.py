"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy.orm import Query, Session, joinedload

from ...models import Appointment, Client, Sale, User


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def query_clients(
        db: Session,
        name: Optional[str] = None,
        cpf: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
    ) -> Query:
        """Clients joined to their user so the list can filter and sort by name"""
        query = db.query(Client).join(User, Client.user_id == User.id).options(joinedload(Client.user))
        if name:
            query = query.filter(User.name.ilike(f"%{name}%"))
        if cpf:
            query = query.filter(Client.cpf.contains(cpf))
        if city:
            query = query.filter(Client.city.ilike(f"%{city}%"))
        if state:
            query = query.filter(Client.state == state.upper())
        return query.order_by(User.name.asc())

    @staticmethod
    def get_client_by_id(db: Session, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def get_client_by_user_id(db: Session, user_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.user_id == user_id).first()

    @staticmethod
    def get_client_by_cpf(db: Session, cpf: str) -> Optional[Client]:
        return db.query(Client).filter(Client.cpf == cpf).first()

    @staticmethod
    def get_user(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def has_appointments(db: Session, client_id: int) -> bool:
        return db.query(Appointment.id).filter(Appointment.client_id == client_id).first() is not None

    @staticmethod
    def has_sales(db: Session, client_id: int) -> bool:
        return db.query(Sale.id).filter(Sale.client_id == client_id).first() is not None

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        client = Client(**client_data)
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
    def delete_client(db: Session, client: Client) -> None:
        """Delete a client; its pets go with it"""
        db.delete(client)
        db.commit()
