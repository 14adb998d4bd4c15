"""Service catalogue schemas - grooming/vet services and their categories"""

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.pagination import PaginationMeta
from ...shared.validators import validate_money

CatalogStatus = Literal["active", "inactive"]


class CategoryCreate(BaseModel):
    """Shared by service and product categories"""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class CategoryListResponse(BaseModel):
    items: list[CategoryResponse]
    pagination: PaginationMeta


class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    price: Decimal
    duration: int = Field(..., gt=0, description="Minutes")
    category_id: int
    status: CatalogStatus = "active"

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        return validate_money(v)


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    price: Optional[Decimal] = None
    duration: Optional[int] = Field(None, gt=0)
    category_id: Optional[int] = None
    status: Optional[CatalogStatus] = None

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        return validate_money(v)


class ServiceResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    duration: int
    category_id: int
    status: str
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class ServiceListResponse(BaseModel):
    items: list[ServiceResponse]
    pagination: PaginationMeta
