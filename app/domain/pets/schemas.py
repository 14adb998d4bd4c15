"""Pet domain schemas - Pydantic models for validation"""

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

from ...shared.pagination import PaginationMeta

PetSex = Literal["male", "female"]


class PetCreate(BaseModel):
    client_id: int
    name: str = Field(..., min_length=1, max_length=100)
    species: str = Field(..., min_length=1, max_length=50)
    breed: Optional[str] = Field(None, max_length=100)
    birth_date: Optional[dt.date] = None
    weight: Optional[Decimal] = Field(None, ge=0, max_digits=6, decimal_places=2)
    sex: Optional[PetSex] = None
    color: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=2000)


class PetUpdate(BaseModel):
    client_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    species: Optional[str] = Field(None, min_length=1, max_length=50)
    breed: Optional[str] = Field(None, max_length=100)
    birth_date: Optional[dt.date] = None
    weight: Optional[Decimal] = Field(None, ge=0, max_digits=6, decimal_places=2)
    sex: Optional[PetSex] = None
    color: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=2000)


class PetResponse(BaseModel):
    id: int
    client_id: int
    name: str
    species: str
    breed: Optional[str] = None
    birth_date: Optional[dt.date] = None
    weight: Optional[Decimal] = None
    sex: Optional[str] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class PetListResponse(BaseModel):
    items: list[PetResponse]
    pagination: PaginationMeta
