"""Offset pagination over in-memory sequences."""

import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

from skillswap.domain.exceptions import ValidationError

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of results plus the size of the full result set."""

    items: List[T]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit)


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """Slice ``items`` to the requested 1-based page.

    Raises:
        ValidationError: If page or limit is below 1
    """
    if page < 1:
        raise ValidationError("page must be at least 1", field="page")
    if limit < 1:
        raise ValidationError("limit must be at least 1", field="limit")

    start = (page - 1) * limit
    return Page(items=list(items[start:start + limit]), page=page, limit=limit, total=len(items))
