"""Task router - FastAPI endpoints for staff tasks"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.pagination import PaginationParams, pagination_params
from .schemas import (
    TaskCreate,
    TaskListResponse,
    TaskPriority,
    TaskResponse,
    TaskStatus,
    TaskUpdate,
)
from .service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Dependency injection for TaskService"""
    return TaskService(db)


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    staff_id: Optional[int] = Query(None),
    title: Optional[str] = Query(None),
    on_date: Optional[date] = Query(None, alias="date"),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    priority: Optional[TaskPriority] = Query(None),
    status: Optional[TaskStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """List tasks by date and time, most urgent first within a slot"""
    tasks, meta = service.list_tasks(
        params,
        staff_id=staff_id,
        title=title,
        on_date=on_date,
        date_from=date_from,
        date_to=date_to,
        priority=priority,
        status=status,
    )
    return {"items": tasks, "pagination": meta}


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    _: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return service.get_task(task_id)


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    data: TaskCreate,
    _: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return service.create_task(data)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    data: TaskUpdate,
    _: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return service.update_task(task_id, data)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: int,
    _: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    service.delete_task(task_id)
    return Response(status_code=204)


__all__ = ["router"]
