"""Scheduling router - FastAPI endpoints for appointments"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import User
from ...shared.pagination import PaginationParams, pagination_params
from .schemas import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentStatus,
    AppointmentUpdate,
)
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=AppointmentListResponse)
async def list_appointments(
    client_id: Optional[int] = Query(None),
    pet_id: Optional[int] = Query(None),
    service_id: Optional[int] = Query(None),
    staff_id: Optional[int] = Query(None),
    on_date: Optional[date] = Query(None, alias="date"),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    status: Optional[AppointmentStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """List appointments ordered by date and start time"""
    appointments, meta = service.list_appointments(
        params,
        current_user,
        client_id=client_id,
        pet_id=pet_id,
        service_id=service_id,
        staff_id=staff_id,
        on_date=on_date,
        date_from=date_from,
        date_to=date_to,
        status=status,
    )
    return {"items": appointments, "pagination": meta}


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.get_appointment(appointment_id, current_user)


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment; rejects overlapping slots for the same staff member"""
    return service.create_appointment(data, current_user, background_tasks)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.update_appointment(appointment_id, data, current_user, background_tasks)


@router.delete("/{appointment_id}", status_code=204)
async def delete_appointment(
    appointment_id: int,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(require_roles("admin", "staff")),
    service: AppointmentService = Depends(get_appointment_service),
):
    service.delete_appointment(appointment_id, current_user, background_tasks)
    return Response(status_code=204)


__all__ = ["router"]
