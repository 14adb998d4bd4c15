"""Appointment repository - Database operations for scheduling"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Query, Session

from ...models import Appointment, Client, Pet, Service, Staff


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def query_appointments(
        db: Session,
        client_id: Optional[int] = None,
        pet_id: Optional[int] = None,
        service_id: Optional[int] = None,
        staff_id: Optional[int] = None,
        on_date: Optional[date] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        status: Optional[str] = None,
    ) -> Query:
        query = db.query(Appointment)
        if client_id is not None:
            query = query.filter(Appointment.client_id == client_id)
        if pet_id is not None:
            query = query.filter(Appointment.pet_id == pet_id)
        if service_id is not None:
            query = query.filter(Appointment.service_id == service_id)
        if staff_id is not None:
            query = query.filter(Appointment.staff_id == staff_id)
        if on_date is not None:
            query = query.filter(Appointment.date == on_date)
        if date_from is not None:
            query = query.filter(Appointment.date >= date_from)
        if date_to is not None:
            query = query.filter(Appointment.date <= date_to)
        if status:
            query = query.filter(Appointment.status == status)
        return query.order_by(Appointment.date.asc(), Appointment.start_time.asc())

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: int) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def get_client(db: Session, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def get_pet(db: Session, pet_id: int) -> Optional[Pet]:
        return db.query(Pet).filter(Pet.id == pet_id).first()

    @staticmethod
    def get_service(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def get_staff(db: Session, staff_id: int) -> Optional[Staff]:
        return db.query(Staff).filter(Staff.id == staff_id).first()

    @staticmethod
    def create_appointment(db: Session, **data) -> Appointment:
        """Adds and flushes; the caller commits"""
        appointment = Appointment(**data)
        db.add(appointment)
        db.flush()
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.commit()
