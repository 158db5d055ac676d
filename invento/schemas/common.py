# File: invento/schemas/common.py
import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PageParams(BaseModel):
    """Offset pagination, 1-indexed."""

    page: int = 1
    page_size: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, items: List[T], total: int, params: PageParams) -> "Page[T]":
        return cls(
            items=items,
            total=total,
            page=params.page,
            page_size=params.page_size,
            total_pages=math.ceil(total / params.page_size) if total else 0,
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class Message(BaseModel):
    success: bool = True
    message: str
    data: Optional[dict] = None


def pagination_of(page: Page) -> Pagination:
    return Pagination(
        page=page.page,
        limit=page.page_size,
        total=page.total,
        totalPages=page.total_pages,
    )


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: T


class ListResponse(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    pagination: Pagination
