"""Staff service - Business logic for employees"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import ConflictError, InvalidInputError, NotFoundError
from ...models import Staff
from ...shared.pagination import PaginationParams, paginate
from ..scheduling.repository import AppointmentRepository
from ..tasks.repository import TaskRepository
from .repository import StaffRepository
from .schemas import StaffCreate, StaffUpdate

logger = logging.getLogger(__name__)


class StaffService:
    """Service layer for staff business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = StaffRepository()

    def list_staff(
        self,
        params: PaginationParams,
        name: Optional[str] = None,
        position: Optional[str] = None,
        specialty: Optional[str] = None,
    ):
        query = self.repo.query_staff(self.db, name=name, position=position, specialty=specialty)
        return paginate(query, params)

    def get_staff(self, staff_id: int) -> Staff:
        staff = self.repo.get_staff_by_id(self.db, staff_id)
        if not staff:
            raise NotFoundError("Staff member not found")
        return staff

    def create_staff(self, data: StaffCreate) -> Staff:
        if not self.repo.get_user(self.db, data.user_id):
            raise NotFoundError("User not found")
        if self.repo.get_staff_by_user_id(self.db, data.user_id):
            raise ConflictError("User already has a staff record")

        staff = self.repo.create_staff(self.db, **data.model_dump())
        logger.info(f"✅ Created staff {staff.id} ({staff.position}) for user {staff.user_id}")
        return staff

    def update_staff(self, staff_id: int, data: StaffUpdate) -> Staff:
        staff = self.get_staff(staff_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        return self.repo.update_staff(self.db, staff, **updates)

    def delete_staff(self, staff_id: int) -> None:
        staff = self.get_staff(staff_id)
        dependents = self.repo.count_dependents(self.db, staff.id)
        blocking = [name for name, count in dependents.items() if count]
        if blocking:
            raise InvalidInputError(
                f"Cannot delete a staff member with linked {', '.join(blocking)}"
            )
        self.repo.delete_staff(self.db, staff)
        logger.info(f"🗑️ Deleted staff {staff_id}")

    def list_appointments(
        self,
        staff_id: int,
        params: PaginationParams,
        on_date: Optional[date] = None,
        status: Optional[str] = None,
    ):
        staff = self.get_staff(staff_id)
        query = AppointmentRepository.query_appointments(
            self.db, staff_id=staff.id, on_date=on_date, status=status
        )
        return paginate(query, params)

    def list_tasks(
        self,
        staff_id: int,
        params: PaginationParams,
        on_date: Optional[date] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
    ):
        staff = self.get_staff(staff_id)
        query = TaskRepository.query_tasks(
            self.db, staff_id=staff.id, on_date=on_date, status=status, priority=priority
        )
        return paginate(query, params)
