"""Sales router - FastAPI endpoints for sales and sale items"""

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
    PaymentMethod,
    SaleCreate,
    SaleItemCreate,
    SaleItemListResponse,
    SaleItemResponse,
    SaleItemUpdate,
    SaleListResponse,
    SaleResponse,
    SaleStatus,
    SaleUpdate,
)
from .service import SaleItemService, SaleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sales", tags=["Sales"])
items_router = APIRouter(prefix="/sale-items", tags=["Sale Items"])


def get_sale_service(db: Session = Depends(get_db)) -> SaleService:
    """Dependency injection for SaleService"""
    return SaleService(db)


def get_sale_item_service(db: Session = Depends(get_db)) -> SaleItemService:
    """Dependency injection for SaleItemService"""
    return SaleItemService(db)


# ============================================================================
# SALES
# ============================================================================


@router.get("", response_model=SaleListResponse)
async def list_sales(
    client_id: Optional[int] = Query(None),
    staff_id: Optional[int] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    payment_method: Optional[PaymentMethod] = Query(None),
    status: Optional[SaleStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    service: SaleService = Depends(get_sale_service),
):
    """List sales, newest first"""
    sales, meta = service.list_sales(
        params,
        current_user,
        client_id=client_id,
        staff_id=staff_id,
        date_from=date_from,
        date_to=date_to,
        payment_method=payment_method,
        status=status,
    )
    return {"items": sales, "pagination": meta}


@router.get("/{sale_id}", response_model=SaleResponse)
async def get_sale(
    sale_id: int,
    current_user: User = Depends(get_current_user),
    service: SaleService = Depends(get_sale_service),
):
    return service.get_sale(sale_id, current_user)


@router.post("", response_model=SaleResponse, status_code=201)
async def create_sale(
    data: SaleCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    service: SaleService = Depends(get_sale_service),
):
    """Check out products; all lines succeed or the sale is rejected"""
    return service.create_sale(data, current_user, background_tasks)


@router.put("/{sale_id}", response_model=SaleResponse)
async def update_sale(
    sale_id: int,
    data: SaleUpdate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(require_roles("admin", "staff")),
    service: SaleService = Depends(get_sale_service),
):
    """Update payment, notes or status; cancelling returns items to stock"""
    return service.update_sale(sale_id, data, current_user, background_tasks)


@router.delete("/{sale_id}", status_code=204)
async def delete_sale(
    sale_id: int,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(require_roles("admin")),
    service: SaleService = Depends(get_sale_service),
):
    service.delete_sale(sale_id, background_tasks)
    return Response(status_code=204)


# ============================================================================
# SALE ITEMS
# ============================================================================


@items_router.get("", response_model=SaleItemListResponse)
async def list_sale_items(
    sale_id: Optional[int] = Query(None),
    product_id: Optional[int] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    service: SaleItemService = Depends(get_sale_item_service),
):
    items, meta = service.list_items(params, current_user, sale_id=sale_id, product_id=product_id)
    return {"items": items, "pagination": meta}


@items_router.get("/{item_id}", response_model=SaleItemResponse)
async def get_sale_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    service: SaleItemService = Depends(get_sale_item_service),
):
    return service.get_item(item_id, current_user)


@items_router.post("", response_model=SaleItemResponse, status_code=201)
async def create_sale_item(
    data: SaleItemCreate,
    current_user: User = Depends(require_roles("admin", "staff")),
    service: SaleItemService = Depends(get_sale_item_service),
):
    """Add a line to an open sale, taking the units out of stock"""
    return service.create_item(data)


@items_router.put("/{item_id}", response_model=SaleItemResponse)
async def update_sale_item(
    item_id: int,
    data: SaleItemUpdate,
    current_user: User = Depends(require_roles("admin", "staff")),
    service: SaleItemService = Depends(get_sale_item_service),
):
    return service.update_item(item_id, data)


@items_router.delete("/{item_id}", status_code=204)
async def delete_sale_item(
    item_id: int,
    current_user: User = Depends(require_roles("admin", "staff")),
    service: SaleItemService = Depends(get_sale_item_service),
):
    service.delete_item(item_id)
    return Response(status_code=204)


__all__ = ["router", "items_router"]
