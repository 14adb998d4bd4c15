"""Staff router - FastAPI endpoints for employees"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import require_roles
from ...database import get_db
from ...models import User
from ...shared.pagination import PaginationParams, pagination_params
from ..scheduling.schemas import AppointmentListResponse, AppointmentStatus
from ..tasks.schemas import TaskListResponse, TaskPriority, TaskStatus
from .schemas import StaffCreate, StaffListResponse, StaffResponse, StaffUpdate
from .service import StaffService

router = APIRouter(prefix="/staff", tags=["Staff"])


def get_staff_service(db: Session = Depends(get_db)) -> StaffService:
    """Dependency injection for StaffService"""
    return StaffService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=StaffListResponse)
async def list_staff(
    name: Optional[str] = Query(None),
    position: Optional[str] = Query(None),
    specialty: Optional[str] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(require_roles("admin")),
    service: StaffService = Depends(get_staff_service),
):
    staff, meta = service.list_staff(params, name=name, position=position, specialty=specialty)
    return {"items": staff, "pagination": meta}


@router.get("/{staff_id}", response_model=StaffResponse)
async def get_staff(
    staff_id: int,
    _: User = Depends(require_roles("admin", "staff")),
    service: StaffService = Depends(get_staff_service),
):
    return service.get_staff(staff_id)


@router.post("", response_model=StaffResponse, status_code=201)
async def create_staff(
    data: StaffCreate,
    _: User = Depends(require_roles("admin")),
    service: StaffService = Depends(get_staff_service),
):
    return service.create_staff(data)


@router.put("/{staff_id}", response_model=StaffResponse)
async def update_staff(
    staff_id: int,
    data: StaffUpdate,
    _: User = Depends(require_roles("admin")),
    service: StaffService = Depends(get_staff_service),
):
    return service.update_staff(staff_id, data)


@router.delete("/{staff_id}", status_code=204)
async def delete_staff(
    staff_id: int,
    _: User = Depends(require_roles("admin")),
    service: StaffService = Depends(get_staff_service),
):
    service.delete_staff(staff_id)
    return Response(status_code=204)


# ============================================================================
# RELATED RECORDS
# ============================================================================


@router.get("/{staff_id}/appointments", response_model=AppointmentListResponse)
async def list_staff_appointments(
    staff_id: int,
    on_date: Optional[date] = Query(None, alias="date"),
    status: Optional[AppointmentStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(require_roles("admin", "staff")),
    service: StaffService = Depends(get_staff_service),
):
    appointments, meta = service.list_appointments(staff_id, params, on_date=on_date, status=status)
    return {"items": appointments, "pagination": meta}


@router.get("/{staff_id}/tasks", response_model=TaskListResponse)
async def list_staff_tasks(
    staff_id: int,
    on_date: Optional[date] = Query(None, alias="date"),
    status: Optional[TaskStatus] = Query(None),
    priority: Optional[TaskPriority] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(require_roles("admin", "staff")),
    service: StaffService = Depends(get_staff_service),
):
    tasks, meta = service.list_tasks(
        staff_id, params, on_date=on_date, status=status, priority=priority
    )
    return {"items": tasks, "pagination": meta}


__all__ = ["router"]
