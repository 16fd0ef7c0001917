"""Shared schema components."""

from typing import TypeVar, Generic, List
from pydantic import BaseModel

T = TypeVar('T')


class BaseListResponse(BaseModel, Generic[T]):
    """List response dengan info halaman (page mulai dari 1)."""

    items: List[T]
    total: int
    page: int
    size: int
    pages: int
    has_next: bool = False

    @classmethod
    def create(cls, items: List[T], total: int, page: int, size: int):
        pages = (total + size - 1) // size if total > 0 else 0
        return cls(items=items, total=total, page=page, size=size, pages=pages, has_next=page < pages)
