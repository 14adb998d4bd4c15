"""Appointment service - booking, rescheduling and status changes"""

import logging
from datetime import date
from typing import Optional

from fastapi import BackgroundTasks
from sqlalchemy import false
from sqlalchemy.orm import Session

from ...auth import ensure_client_access, is_client_user
from ...exceptions import InvalidInputError, NotFoundError
from ...models import Appointment, Client, Pet, Service, Staff, User
from ...services.notification_service import (
    notify_appointment_cancelled,
    notify_appointment_scheduled,
    notify_appointment_status,
)
from ...shared.pagination import PaginationParams, paginate
from .conflicts import (
    ensure_slot_available,
    is_blocking_status,
    validate_not_in_past,
    validate_time_range,
)
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentUpdate

logger = logging.getLogger(__name__)

# Fields that move an appointment in time or between staff members
SLOT_FIELDS = {"date", "start_time", "end_time", "staff_id", "status"}
# Fields that may be explicitly cleared with null
NULLABLE_FIELDS = {"staff_id", "notes"}


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()

    # ------------------------------------------------------------------
    # Reference checks
    # ------------------------------------------------------------------

    def _get_client(self, client_id: int) -> Client:
        client = self.repo.get_client(self.db, client_id)
        if not client:
            raise NotFoundError("Client not found")
        return client

    def _get_pet_for_client(self, pet_id: int, client_id: int) -> Pet:
        pet = self.repo.get_pet(self.db, pet_id)
        if not pet:
            raise NotFoundError("Pet not found")
        if pet.client_id != client_id:
            raise InvalidInputError("Pet does not belong to this client")
        return pet

    def _get_active_service(self, service_id: int) -> Service:
        service = self.repo.get_service(self.db, service_id)
        if not service:
            raise NotFoundError("Service not found")
        if service.status != "active":
            raise InvalidInputError("Service is inactive")
        return service

    def _get_active_staff(self, staff_id: int) -> Staff:
        staff = self.repo.get_staff(self.db, staff_id)
        if not staff:
            raise NotFoundError("Staff member not found")
        if staff.user.status != "active":
            raise InvalidInputError("Staff member is inactive")
        return staff

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_appointments(self, params: PaginationParams, current_user: User, **filters):
        if is_client_user(current_user):
            own = current_user.client
            if own is None:
                return paginate(self.db.query(Appointment).filter(false()), params)
            filters["client_id"] = own.id
        return paginate(self.repo.query_appointments(self.db, **filters), params)

    def get_appointment(self, appointment_id: int, current_user: User) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        ensure_client_access(current_user, appointment.client_id)
        return appointment

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_appointment(
        self,
        data: AppointmentCreate,
        current_user: User,
        background_tasks: BackgroundTasks,
        today: Optional[date] = None,
    ) -> Appointment:
        client = self._get_client(data.client_id)
        ensure_client_access(current_user, client.id)
        self._get_pet_for_client(data.pet_id, client.id)
        self._get_active_service(data.service_id)
        if data.staff_id is not None:
            self._get_active_staff(data.staff_id)

        validate_time_range(data.start_time, data.end_time)
        validate_not_in_past(data.date, today)

        if is_blocking_status(data.status):
            ensure_slot_available(
                self.db, data.staff_id, data.date, data.start_time, data.end_time
            )

        appointment = self.repo.create_appointment(self.db, **data.model_dump())
        self.db.commit()
        self.db.refresh(appointment)
        logger.info(
            f"✅ Appointment {appointment.id} booked for client {client.id} on "
            f"{appointment.date} {appointment.start_time}-{appointment.end_time}"
        )

        notify_appointment_scheduled(background_tasks, appointment)
        return appointment

    def update_appointment(
        self,
        appointment_id: int,
        data: AppointmentUpdate,
        current_user: User,
        background_tasks: BackgroundTasks,
        today: Optional[date] = None,
    ) -> Appointment:
        appointment = self.get_appointment(appointment_id, current_user)
        updates = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FIELDS
        }
        previous_status = appointment.status

        client_id = updates.get("client_id", appointment.client_id)
        if "client_id" in updates:
            self._get_client(client_id)
            ensure_client_access(current_user, client_id)
        if "client_id" in updates or "pet_id" in updates:
            self._get_pet_for_client(updates.get("pet_id", appointment.pet_id), client_id)
        if "service_id" in updates:
            self._get_active_service(updates["service_id"])
        if updates.get("staff_id") is not None:
            self._get_active_staff(updates["staff_id"])

        new_date = updates.get("date", appointment.date)
        new_start = updates.get("start_time", appointment.start_time)
        new_end = updates.get("end_time", appointment.end_time)
        new_staff = updates.get("staff_id", appointment.staff_id)
        new_status = updates.get("status", appointment.status)

        validate_time_range(new_start, new_end)
        if "date" in updates:
            validate_not_in_past(new_date, today)

        if SLOT_FIELDS & updates.keys() and is_blocking_status(new_status):
            ensure_slot_available(
                self.db, new_staff, new_date, new_start, new_end, exclude_id=appointment.id
            )

        for key, value in updates.items():
            setattr(appointment, key, value)
        self.db.commit()
        self.db.refresh(appointment)
        logger.info(f"✅ Appointment {appointment.id} updated: {sorted(updates)}")

        if appointment.status != previous_status:
            notify_appointment_status(background_tasks, appointment)
        return appointment

    def delete_appointment(
        self, appointment_id: int, current_user: User, background_tasks: BackgroundTasks
    ) -> None:
        appointment = self.get_appointment(appointment_id, current_user)
        notify_appointment_cancelled(background_tasks, appointment)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"🗑️ Appointment {appointment_id} deleted")
