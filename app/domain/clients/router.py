"""Client router - FastAPI endpoints for client operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import User
from ...shared.pagination import PaginationParams, pagination_params
from ..pets.schemas import PetListResponse
from ..sales.schemas import SaleListResponse, SaleStatus
from ..scheduling.schemas import AppointmentListResponse, AppointmentStatus
from .schemas import ClientCreate, ClientListResponse, ClientResponse, ClientUpdate
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=ClientListResponse)
async def list_clients(
    name: Optional[str] = Query(None),
    cpf: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    """List clients ordered by name; client accounts only see themselves"""
    clients, meta = service.list_clients(
        params, current_user, name=name, cpf=cpf, city=city, state=state
    )
    return {"items": clients, "pagination": meta}


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int,
    current_user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    return service.get_client(client_id, current_user)


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    data: ClientCreate,
    _: User = Depends(require_roles("admin")),
    service: ClientService = Depends(get_client_service),
):
    return service.create_client(data)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    data: ClientUpdate,
    current_user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    return service.update_client(client_id, data, current_user)


@router.delete("/{client_id}", status_code=204)
async def delete_client(
    client_id: int,
    _: User = Depends(require_roles("admin")),
    service: ClientService = Depends(get_client_service),
):
    service.delete_client(client_id)
    return Response(status_code=204)


# ============================================================================
# RELATED RECORDS
# ============================================================================


@router.get("/{client_id}/pets", response_model=PetListResponse)
async def list_client_pets(
    client_id: int,
    params: PaginationParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    pets, meta = service.list_pets(client_id, params, current_user)
    return {"items": pets, "pagination": meta}


@router.get("/{client_id}/appointments", response_model=AppointmentListResponse)
async def list_client_appointments(
    client_id: int,
    status: Optional[AppointmentStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    appointments, meta = service.list_appointments(client_id, params, current_user, status=status)
    return {"items": appointments, "pagination": meta}


@router.get("/{client_id}/purchases", response_model=SaleListResponse)
async def list_client_purchases(
    client_id: int,
    status: Optional[SaleStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    sales, meta = service.list_purchases(client_id, params, current_user, status=status)
    return {"items": sales, "pagination": meta}


__all__ = ["router"]
