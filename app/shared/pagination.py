"""Pagination helpers shared by the list endpoints"""

import math
from typing import Any

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy.orm import Query as SAQuery

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class PaginationParams(BaseModel):
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginationMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


def pagination_params(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> PaginationParams:
    """FastAPI dependency reading ?page=&limit="""
    return PaginationParams(page=page, limit=limit)


def paginate(query: SAQuery, params: PaginationParams) -> tuple[list[Any], PaginationMeta]:
    """Run an ordered query for one page and return (rows, meta)"""
    total = query.order_by(None).count()
    rows = query.offset(params.offset).limit(params.limit).all()
    meta = PaginationMeta(
        total=total,
        page=params.page,
        limit=params.limit,
        pages=math.ceil(total / params.limit) if total else 0,
    )
    return rows, meta
