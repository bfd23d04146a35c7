"""
Page-numbered listing for the admin back office.

    GET /api/admin/bets?page=2&per_page=20

    page = await paginate(db, select(Bet), page=2, per_page=20)
"""

from math import ceil
from typing import Generic, Sequence, TypeVar

from fastapi import Query
from pydantic import BaseModel, Field
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")

DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100


class PageRequest(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE)


class OffsetPage(BaseModel, Generic[T]):
    """One page of a scoped listing, with totals for the admin table footer."""

    items: list[T]
    total: int
    page: int
    per_page: int
    pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def create(cls, items: Sequence[T], total: int, page: int, per_page: int) -> "OffsetPage[T]":
        pages = ceil(total / per_page) if per_page else 0
        return cls(
            items=list(items),
            total=total,
            page=page,
            per_page=per_page,
            pages=pages,
            has_next=page < pages,
            has_prev=page > 1,
        )


async def paginate(
    db: AsyncSession,
    query: Select,
    page: int = 1,
    per_page: int = DEFAULT_PER_PAGE,
) -> OffsetPage:
    """Count the filtered rows, then fetch the requested page of ORM objects."""
    total = await db.scalar(select(func.count()).select_from(query.order_by(None).subquery()))

    rows = await db.execute(query.offset((page - 1) * per_page).limit(per_page))
    return OffsetPage.create(
        items=rows.scalars().all(),
        total=total or 0,
        page=page,
        per_page=per_page,
    )


def get_page_request(
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
) -> PageRequest:
    return PageRequest(page=page, per_page=per_page)
