"""Inventory domain schemas - products, suppliers and product categories"""

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.pagination import PaginationMeta
from ...shared.validators import validate_email, validate_money, validate_state
from ..services.schemas import CatalogStatus

StockOperation = Literal["add", "remove"]


def _blank_to_none(v):
    if v is not None and not v.strip():
        return None
    return v.strip() if v else v


# ============================================================================
# SUPPLIERS
# ============================================================================


class SupplierBase(BaseModel):
    cnpj: Optional[str] = Field(None, max_length=18)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = None
    zip_code: Optional[str] = Field(None, max_length=9)
    contact: Optional[str] = Field(None, max_length=100)

    @field_validator("cnpj")
    @classmethod
    def blank_cnpj(cls, v):
        return _blank_to_none(v)

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return validate_email(_blank_to_none(v))

    @field_validator("state")
    @classmethod
    def validate_state_code(cls, v):
        return validate_state(v)


class SupplierCreate(SupplierBase):
    name: str = Field(..., min_length=1, max_length=100)


class SupplierUpdate(SupplierBase):
    name: Optional[str] = Field(None, min_length=1, max_length=100)


class SupplierResponse(BaseModel):
    id: int
    name: str
    cnpj: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    contact: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class SupplierListResponse(BaseModel):
    items: list[SupplierResponse]
    pagination: PaginationMeta


# ============================================================================
# PRODUCTS
# ============================================================================


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    price: Decimal
    cost_price: Optional[Decimal] = None
    stock: int = Field(0, ge=0)
    min_stock: int = Field(0, ge=0)
    category_id: int
    supplier_id: Optional[int] = None
    barcode: Optional[str] = Field(None, max_length=50)
    status: CatalogStatus = "active"

    @field_validator("price", "cost_price")
    @classmethod
    def validate_amount(cls, v):
        return validate_money(v)

    @field_validator("barcode")
    @classmethod
    def blank_barcode(cls, v):
        return _blank_to_none(v)


class ProductUpdate(BaseModel):
    """Stock is not editable here; use the stock adjustment endpoint"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    price: Optional[Decimal] = None
    cost_price: Optional[Decimal] = None
    min_stock: Optional[int] = Field(None, ge=0)
    category_id: Optional[int] = None
    supplier_id: Optional[int] = None
    barcode: Optional[str] = Field(None, max_length=50)
    status: Optional[CatalogStatus] = None

    @field_validator("price", "cost_price")
    @classmethod
    def validate_amount(cls, v):
        return validate_money(v)

    @field_validator("barcode")
    @classmethod
    def blank_barcode(cls, v):
        return _blank_to_none(v)


class StockAdjustment(BaseModel):
    quantity: int = Field(..., gt=0)
    operation: StockOperation


class ProductResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    cost_price: Optional[Decimal] = None
    stock: int
    min_stock: int
    category_id: int
    supplier_id: Optional[int] = None
    barcode: Optional[str] = None
    status: str
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class ProductListResponse(BaseModel):
    items: list[ProductResponse]
    pagination: PaginationMeta
