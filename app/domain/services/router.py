"""Service catalogue routers - /service-categories and /services"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import User
from ...shared.pagination import PaginationParams, pagination_params
from ..scheduling.schemas import AppointmentListResponse, AppointmentStatus
from .schemas import (
    CatalogStatus,
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
    ServiceCreate,
    ServiceListResponse,
    ServiceResponse,
    ServiceUpdate,
)
from .service import CatalogService, ServiceCategoryService

categories_router = APIRouter(prefix="/service-categories", tags=["Service Categories"])
router = APIRouter(prefix="/services", tags=["Services"])


def get_category_service(db: Session = Depends(get_db)) -> ServiceCategoryService:
    """Dependency injection for ServiceCategoryService"""
    return ServiceCategoryService(db)


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


# ============================================================================
# SERVICE CATEGORIES
# ============================================================================


@categories_router.get("", response_model=CategoryListResponse)
async def list_service_categories(
    name: Optional[str] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(get_current_user),
    service: ServiceCategoryService = Depends(get_category_service),
):
    categories, meta = service.list_categories(params, name=name)
    return {"items": categories, "pagination": meta}


@categories_router.get("/{category_id}", response_model=CategoryResponse)
async def get_service_category(
    category_id: int,
    _: User = Depends(get_current_user),
    service: ServiceCategoryService = Depends(get_category_service),
):
    return service.get_category(category_id)


@categories_router.post("", response_model=CategoryResponse, status_code=201)
async def create_service_category(
    data: CategoryCreate,
    _: User = Depends(require_roles("admin", "staff")),
    service: ServiceCategoryService = Depends(get_category_service),
):
    return service.create_category(data)


@categories_router.put("/{category_id}", response_model=CategoryResponse)
async def update_service_category(
    category_id: int,
    data: CategoryUpdate,
    _: User = Depends(require_roles("admin", "staff")),
    service: ServiceCategoryService = Depends(get_category_service),
):
    return service.update_category(category_id, data)


@categories_router.delete("/{category_id}", status_code=204)
async def delete_service_category(
    category_id: int,
    _: User = Depends(require_roles("admin")),
    service: ServiceCategoryService = Depends(get_category_service),
):
    service.delete_category(category_id)
    return Response(status_code=204)


@categories_router.get("/{category_id}/services", response_model=ServiceListResponse)
async def list_category_services(
    category_id: int,
    status: Optional[CatalogStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(get_current_user),
    service: ServiceCategoryService = Depends(get_category_service),
):
    services, meta = service.list_category_services(category_id, params, status=status)
    return {"items": services, "pagination": meta}


# ============================================================================
# SERVICES
# ============================================================================


@router.get("", response_model=ServiceListResponse)
async def list_services(
    name: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None),
    status: Optional[CatalogStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    services, meta = service.list_services(
        params, name=name, category_id=category_id, status=status
    )
    return {"items": services, "pagination": meta}


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    _: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.get_service(service_id)


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    _: User = Depends(require_roles("admin", "staff")),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.create_service(data)


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    _: User = Depends(require_roles("admin", "staff")),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_service(service_id, data)


@router.delete("/{service_id}", status_code=204)
async def delete_service(
    service_id: int,
    _: User = Depends(require_roles("admin")),
    service: CatalogService = Depends(get_catalog_service),
):
    service.delete_service(service_id)
    return Response(status_code=204)


@router.get("/{service_id}/appointments", response_model=AppointmentListResponse)
async def list_service_appointments(
    service_id: int,
    status: Optional[AppointmentStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(require_roles("admin", "staff")),
    service: CatalogService = Depends(get_catalog_service),
):
    appointments, meta = service.list_service_appointments(service_id, params, status=status)
    return {"items": appointments, "pagination": meta}


__all__ = ["router", "categories_router"]
