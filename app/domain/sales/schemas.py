"""Sales domain schemas - Pydantic models for sales and line items"""

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.pagination import PaginationMeta
from ...shared.validators import validate_money

SaleStatus = Literal["pending", "completed", "cancelled"]
PaymentMethod = Literal["cash", "credit_card", "debit_card", "pix", "boleto"]


class SaleLineInput(BaseModel):
    """One product line inside a new sale"""

    product_id: int
    quantity: int = Field(..., gt=0)
    unit_price: Optional[Decimal] = None
    discount: Decimal = Decimal("0")

    @field_validator("unit_price", "discount")
    @classmethod
    def validate_amount(cls, v):
        return validate_money(v)


class SaleCreate(BaseModel):
    client_id: int
    staff_id: Optional[int] = None
    items: list[SaleLineInput] = Field(..., min_length=1)
    discount: Decimal = Decimal("0")
    payment_method: PaymentMethod
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("discount")
    @classmethod
    def validate_amount(cls, v):
        return validate_money(v)


class SaleUpdate(BaseModel):
    """Only payment, status and notes change after checkout"""

    payment_method: Optional[PaymentMethod] = None
    status: Optional[SaleStatus] = None
    notes: Optional[str] = Field(None, max_length=2000)


class SaleItemCreate(BaseModel):
    sale_id: int
    product_id: int
    quantity: int = Field(..., gt=0)
    unit_price: Optional[Decimal] = None
    discount: Decimal = Decimal("0")

    @field_validator("unit_price", "discount")
    @classmethod
    def validate_amount(cls, v):
        return validate_money(v)


class SaleItemUpdate(BaseModel):
    quantity: Optional[int] = Field(None, gt=0)
    unit_price: Optional[Decimal] = None
    discount: Optional[Decimal] = None

    @field_validator("unit_price", "discount")
    @classmethod
    def validate_amount(cls, v):
        return validate_money(v)


class SaleItemResponse(BaseModel):
    id: int
    sale_id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    discount: Decimal
    total: Decimal
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class SaleResponse(BaseModel):
    id: int
    client_id: int
    staff_id: Optional[int] = None
    date: Optional[dt.datetime] = None
    total: Decimal
    discount: Decimal
    payment_method: str
    status: str
    notes: Optional[str] = None
    items: list[SaleItemResponse] = []
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class SaleListResponse(BaseModel):
    items: list[SaleResponse]
    pagination: PaginationMeta


class SaleItemListResponse(BaseModel):
    items: list[SaleItemResponse]
    pagination: PaginationMeta
