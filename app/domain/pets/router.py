"""Pet router - FastAPI endpoints for pets"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.pagination import PaginationParams, pagination_params
from ..scheduling.schemas import AppointmentListResponse, AppointmentStatus
from .schemas import PetCreate, PetListResponse, PetResponse, PetUpdate
from .service import PetService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pets", tags=["Pets"])


def get_pet_service(db: Session = Depends(get_db)) -> PetService:
    """Dependency injection for PetService"""
    return PetService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=PetListResponse)
async def list_pets(
    client_id: Optional[int] = Query(None),
    name: Optional[str] = Query(None),
    species: Optional[str] = Query(None),
    breed: Optional[str] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    pets, meta = service.list_pets(
        params, current_user, client_id=client_id, name=name, species=species, breed=breed
    )
    return {"items": pets, "pagination": meta}


@router.get("/{pet_id}", response_model=PetResponse)
async def get_pet(
    pet_id: int,
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    return service.get_pet(pet_id, current_user)


@router.post("", response_model=PetResponse, status_code=201)
async def create_pet(
    data: PetCreate,
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    return service.create_pet(data, current_user)


@router.put("/{pet_id}", response_model=PetResponse)
async def update_pet(
    pet_id: int,
    data: PetUpdate,
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    return service.update_pet(pet_id, data, current_user)


@router.delete("/{pet_id}", status_code=204)
async def delete_pet(
    pet_id: int,
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    service.delete_pet(pet_id, current_user)
    return Response(status_code=204)


# ============================================================================
# RELATED RECORDS
# ============================================================================


@router.get("/{pet_id}/appointments", response_model=AppointmentListResponse)
async def list_pet_appointments(
    pet_id: int,
    status: Optional[AppointmentStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    appointments, meta = service.list_pet_appointments(pet_id, params, current_user, status=status)
    return {"items": appointments, "pagination": meta}


__all__ = ["router"]
