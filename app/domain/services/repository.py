"""Service catalogue repository - Database operations for services and categories"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from ...models import Appointment, Service, ServiceCategory


class ServiceRepository:
    """Repository for service and service category database operations"""

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    @staticmethod
    def query_categories(db: Session, name: Optional[str] = None) -> Query:
        query = db.query(ServiceCategory)
        if name:
            query = query.filter(ServiceCategory.name.ilike(f"%{name}%"))
        return query.order_by(ServiceCategory.name.asc())

    @staticmethod
    def get_category_by_id(db: Session, category_id: int) -> Optional[ServiceCategory]:
        return db.query(ServiceCategory).filter(ServiceCategory.id == category_id).first()

    @staticmethod
    def get_category_by_name(db: Session, name: str) -> Optional[ServiceCategory]:
        return (
            db.query(ServiceCategory)
            .filter(func.lower(ServiceCategory.name) == name.lower())
            .first()
        )

    @staticmethod
    def category_has_services(db: Session, category_id: int) -> bool:
        return db.query(Service.id).filter(Service.category_id == category_id).first() is not None

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    @staticmethod
    def query_services(
        db: Session,
        name: Optional[str] = None,
        category_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> Query:
        query = db.query(Service)
        if name:
            query = query.filter(Service.name.ilike(f"%{name}%"))
        if category_id is not None:
            query = query.filter(Service.category_id == category_id)
        if status:
            query = query.filter(Service.status == status)
        return query.order_by(Service.name.asc())

    @staticmethod
    def get_service_by_id(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def service_has_appointments(db: Session, service_id: int) -> bool:
        return (
            db.query(Appointment.id).filter(Appointment.service_id == service_id).first()
            is not None
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @staticmethod
    def save(db: Session, obj):
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    @staticmethod
    def update(db: Session, obj, **updates):
        for key, value in updates.items():
            if hasattr(obj, key):
                setattr(obj, key, value)
        db.commit()
        db.refresh(obj)
        return obj

    @staticmethod
    def delete(db: Session, obj) -> None:
        db.delete(obj)
        db.commit()
