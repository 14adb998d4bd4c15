"""Task repository - Database operations for tasks"""

from datetime import date
from typing import Optional

from sqlalchemy import case
from sqlalchemy.orm import Query, Session

from ...models import Staff, Task

# high first when sorting ascending
PRIORITY_RANK = case(
    (Task.priority == "high", 0),
    (Task.priority == "medium", 1),
    (Task.priority == "low", 2),
    else_=3,
)


class TaskRepository:
    """Repository for task database operations"""

    @staticmethod
    def query_tasks(
        db: Session,
        staff_id: Optional[int] = None,
        title: Optional[str] = None,
        on_date: Optional[date] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        priority: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Query:
        """Tasks ordered by date, time, then priority high to low"""
        query = db.query(Task)
        if staff_id is not None:
            query = query.filter(Task.staff_id == staff_id)
        if title:
            query = query.filter(Task.title.ilike(f"%{title}%"))
        if on_date is not None:
            query = query.filter(Task.date == on_date)
        else:
            if date_from is not None:
                query = query.filter(Task.date >= date_from)
            if date_to is not None:
                query = query.filter(Task.date <= date_to)
        if priority:
            query = query.filter(Task.priority == priority)
        if status:
            query = query.filter(Task.status == status)
        return query.order_by(Task.date.asc(), Task.time.asc(), PRIORITY_RANK.asc(), Task.id.asc())

    @staticmethod
    def get_task_by_id(db: Session, task_id: int) -> Optional[Task]:
        return db.query(Task).filter(Task.id == task_id).first()

    @staticmethod
    def get_staff(db: Session, staff_id: int) -> Optional[Staff]:
        return db.query(Staff).filter(Staff.id == staff_id).first()

    @staticmethod
    def create_task(db: Session, **task_data) -> Task:
        task = Task(**task_data)
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def update_task(db: Session, task: Task, **updates) -> Task:
        for key, value in updates.items():
            if hasattr(task, key):
                setattr(task, key, value)
        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def delete_task(db: Session, task: Task) -> None:
        db.delete(task)
        db.commit()
