"""Inventory routers - /product-categories, /suppliers and /products"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import User
from ...shared.pagination import PaginationParams, pagination_params
from ..services.schemas import (
    CatalogStatus,
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
)
from .schemas import (
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
    StockAdjustment,
    SupplierCreate,
    SupplierListResponse,
    SupplierResponse,
    SupplierUpdate,
)
from .service import ProductCategoryService, ProductService, SupplierService

logger = logging.getLogger(__name__)

categories_router = APIRouter(prefix="/product-categories", tags=["Product Categories"])
suppliers_router = APIRouter(prefix="/suppliers", tags=["Suppliers"])
router = APIRouter(prefix="/products", tags=["Products"])


def get_category_service(db: Session = Depends(get_db)) -> ProductCategoryService:
    """Dependency injection for ProductCategoryService"""
    return ProductCategoryService(db)


def get_supplier_service(db: Session = Depends(get_db)) -> SupplierService:
    """Dependency injection for SupplierService"""
    return SupplierService(db)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency injection for ProductService"""
    return ProductService(db)


# ============================================================================
# PRODUCT CATEGORIES
# ============================================================================


@categories_router.get("", response_model=CategoryListResponse)
async def list_product_categories(
    name: Optional[str] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(get_current_user),
    service: ProductCategoryService = Depends(get_category_service),
):
    categories, meta = service.list_categories(params, name=name)
    return {"items": categories, "pagination": meta}


@categories_router.get("/{category_id}", response_model=CategoryResponse)
async def get_product_category(
    category_id: int,
    _: User = Depends(get_current_user),
    service: ProductCategoryService = Depends(get_category_service),
):
    return service.get_category(category_id)


@categories_router.post("", response_model=CategoryResponse, status_code=201)
async def create_product_category(
    data: CategoryCreate,
    _: User = Depends(require_roles("admin", "staff")),
    service: ProductCategoryService = Depends(get_category_service),
):
    return service.create_category(data)


@categories_router.put("/{category_id}", response_model=CategoryResponse)
async def update_product_category(
    category_id: int,
    data: CategoryUpdate,
    _: User = Depends(require_roles("admin", "staff")),
    service: ProductCategoryService = Depends(get_category_service),
):
    return service.update_category(category_id, data)


@categories_router.delete("/{category_id}", status_code=204)
async def delete_product_category(
    category_id: int,
    _: User = Depends(require_roles("admin")),
    service: ProductCategoryService = Depends(get_category_service),
):
    """Delete an empty category; categories with products are kept"""
    service.delete_category(category_id)
    return Response(status_code=204)


@categories_router.get("/{category_id}/products", response_model=ProductListResponse)
async def list_category_products(
    category_id: int,
    status: Optional[CatalogStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(get_current_user),
    service: ProductCategoryService = Depends(get_category_service),
):
    products, meta = service.list_category_products(category_id, params, status=status)
    return {"items": products, "pagination": meta}


# ============================================================================
# SUPPLIERS
# ============================================================================


@suppliers_router.get("", response_model=SupplierListResponse)
async def list_suppliers(
    name: Optional[str] = Query(None),
    cnpj: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(require_roles("admin", "staff")),
    service: SupplierService = Depends(get_supplier_service),
):
    suppliers, meta = service.list_suppliers(params, name=name, cnpj=cnpj, city=city, state=state)
    return {"items": suppliers, "pagination": meta}


@suppliers_router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(
    supplier_id: int,
    _: User = Depends(require_roles("admin", "staff")),
    service: SupplierService = Depends(get_supplier_service),
):
    return service.get_supplier(supplier_id)


@suppliers_router.post("", response_model=SupplierResponse, status_code=201)
async def create_supplier(
    data: SupplierCreate,
    _: User = Depends(require_roles("admin", "staff")),
    service: SupplierService = Depends(get_supplier_service),
):
    return service.create_supplier(data)


@suppliers_router.put("/{supplier_id}", response_model=SupplierResponse)
async def update_supplier(
    supplier_id: int,
    data: SupplierUpdate,
    _: User = Depends(require_roles("admin", "staff")),
    service: SupplierService = Depends(get_supplier_service),
):
    return service.update_supplier(supplier_id, data)


@suppliers_router.delete("/{supplier_id}", status_code=204)
async def delete_supplier(
    supplier_id: int,
    _: User = Depends(require_roles("admin")),
    service: SupplierService = Depends(get_supplier_service),
):
    service.delete_supplier(supplier_id)
    return Response(status_code=204)


@suppliers_router.get("/{supplier_id}/products", response_model=ProductListResponse)
async def list_supplier_products(
    supplier_id: int,
    status: Optional[CatalogStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(require_roles("admin", "staff")),
    service: SupplierService = Depends(get_supplier_service),
):
    products, meta = service.list_supplier_products(supplier_id, params, status=status)
    return {"items": products, "pagination": meta}


# ============================================================================
# PRODUCTS
# ============================================================================


@router.get("", response_model=ProductListResponse)
async def list_products(
    name: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None),
    supplier_id: Optional[int] = Query(None),
    barcode: Optional[str] = Query(None),
    low_stock: bool = Query(False, description="Only products at or below their minimum stock"),
    status: Optional[CatalogStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(get_current_user),
    service: ProductService = Depends(get_product_service),
):
    products, meta = service.list_products(
        params,
        name=name,
        category_id=category_id,
        supplier_id=supplier_id,
        barcode=barcode,
        low_stock=low_stock,
        status=status,
    )
    return {"items": products, "pagination": meta}


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    _: User = Depends(get_current_user),
    service: ProductService = Depends(get_product_service),
):
    return service.get_product(product_id)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    data: ProductCreate,
    _: User = Depends(require_roles("admin", "staff")),
    service: ProductService = Depends(get_product_service),
):
    return service.create_product(data)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    data: ProductUpdate,
    _: User = Depends(require_roles("admin", "staff")),
    service: ProductService = Depends(get_product_service),
):
    return service.update_product(product_id, data)


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: int,
    _: User = Depends(require_roles("admin")),
    service: ProductService = Depends(get_product_service),
):
    service.delete_product(product_id)
    return Response(status_code=204)


@router.post("/{product_id}/stock", response_model=ProductResponse)
async def adjust_product_stock(
    product_id: int,
    data: StockAdjustment,
    _: User = Depends(require_roles("admin", "staff")),
    service: ProductService = Depends(get_product_service),
):
    """Add or remove units by hand (deliveries, losses, counts)"""
    return service.adjust_stock(product_id, data)


__all__ = ["router", "categories_router", "suppliers_router"]
