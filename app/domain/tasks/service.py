"""Task service - Business logic for staff tasks"""

import logging

from sqlalchemy.orm import Session

from ...exceptions import InvalidInputError, NotFoundError
from ...models import Task
from ...shared.pagination import PaginationParams, paginate
from .repository import TaskRepository
from .schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

# Fields that may be explicitly cleared with null
NULLABLE_FIELDS = {"staff_id", "description"}


class TaskService:
    """Service layer for task business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TaskRepository()

    def _ensure_active_staff(self, staff_id: int) -> None:
        staff = self.repo.get_staff(self.db, staff_id)
        if not staff:
            raise NotFoundError("Staff member not found")
        if staff.user.status != "active":
            raise InvalidInputError("Staff member is inactive")

    def list_tasks(self, params: PaginationParams, **filters):
        return paginate(self.repo.query_tasks(self.db, **filters), params)

    def get_task(self, task_id: int) -> Task:
        task = self.repo.get_task_by_id(self.db, task_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    def create_task(self, data: TaskCreate) -> Task:
        if data.staff_id is not None:
            self._ensure_active_staff(data.staff_id)
        task = self.repo.create_task(self.db, **data.model_dump())
        logger.info(f"📝 Created task {task.id} '{task.title}' for {task.date}")
        return task

    def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        task = self.get_task(task_id)
        updates = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FIELDS
        }
        if updates.get("staff_id") is not None and updates["staff_id"] != task.staff_id:
            self._ensure_active_staff(updates["staff_id"])
        return self.repo.update_task(self.db, task, **updates)

    def delete_task(self, task_id: int) -> None:
        task = self.get_task(task_id)
        self.repo.delete_task(self.db, task)
        logger.info(f"🗑️ Deleted task {task_id}")
