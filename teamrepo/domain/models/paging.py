"""Sorting and pagination value objects.

PageRequest describes which slice of a collection to read (offset/size plus
an optional Sort); Page is the slice that comes back, together with the total
element count at the time of the read.  Neither is ever persisted.

Pages are not snapshot-consistent: concurrent writes between two page
fetches may shift elements across page boundaries.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from teamrepo.domain.exceptions import InvalidArgument

from .enums import Direction

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE_SIZE = 20


class Order(BaseModel):
    """Sort instruction for a single entity property."""

    model_config = ConfigDict(frozen=True)

    property: str
    direction: Direction = Direction.ASC

    @classmethod
    def asc(cls, property: str) -> Order:
        return cls(property=property, direction=Direction.ASC)

    @classmethod
    def desc(cls, property: str) -> Order:
        return cls(property=property, direction=Direction.DESC)


class Sort(BaseModel):
    """Ordered list of sort instructions; earlier orders take precedence."""

    model_config = ConfigDict(frozen=True)

    orders: tuple[Order, ...] = ()

    @classmethod
    def by(cls, *properties: str, direction: Direction = Direction.ASC) -> Sort:
        return cls(orders=tuple(Order(property=p, direction=direction) for p in properties))

    @classmethod
    def unsorted(cls) -> Sort:
        return cls()

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)

    @property
    def properties(self) -> list[str]:
        return [order.property for order in self.orders]

    def and_(self, other: Sort) -> Sort:
        return Sort(orders=self.orders + other.orders)

    def descending(self) -> Sort:
        return Sort(orders=tuple(Order.desc(o.property) for o in self.orders))


class PageRequest(BaseModel):
    """Offset-based page descriptor.

    Field values are not range-checked on plain construction; use of() /
    of_page() to fail fast, repositories re-check before querying.
    """

    model_config = ConfigDict(frozen=True)

    offset: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: Sort = Field(default_factory=Sort.unsorted)

    @classmethod
    def of(cls, offset: int = 0, size: int = DEFAULT_PAGE_SIZE, sort: Sort | None = None) -> PageRequest:
        request = cls(offset=offset, size=size, sort=sort or Sort.unsorted())
        request.validate_bounds()
        return request

    @classmethod
    def of_page(cls, page_number: int, size: int = DEFAULT_PAGE_SIZE, sort: Sort | None = None) -> PageRequest:
        """Page-number style constructor: page 0 starts at offset 0."""
        if page_number < 0:
            raise InvalidArgument(f"page_number must be >= 0, got {page_number}")
        return cls.of(offset=page_number * size, size=size, sort=sort)

    def validate_bounds(self) -> None:
        if self.offset < 0:
            raise InvalidArgument(f"offset must be >= 0, got {self.offset}")
        if self.size < 1:
            raise InvalidArgument(f"size must be >= 1, got {self.size}")

    @property
    def page_number(self) -> int:
        return self.offset // self.size if self.size > 0 else 0

    def next(self) -> PageRequest:
        return self.model_copy(update={"offset": self.offset + self.size})

    def previous_or_first(self) -> PageRequest:
        return self.model_copy(update={"offset": max(self.offset - self.size, 0)})

    def first(self) -> PageRequest:
        return self.model_copy(update={"offset": 0})


class Page(BaseModel, Generic[T]):
    """A bounded slice of a collection plus total-count metadata."""

    model_config = ConfigDict(frozen=True)

    content: list[T]
    total_elements: int
    offset: int
    size: int = Field(ge=1)
    sort: Sort = Field(default_factory=Sort.unsorted)

    @property
    def number(self) -> int:
        return self.offset // self.size

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.total_elements else 0

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    @property
    def has_next(self) -> bool:
        return self.offset + self.size < self.total_elements

    @property
    def has_previous(self) -> bool:
        return self.offset > 0

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    def page_request(self) -> PageRequest:
        return PageRequest(offset=self.offset, size=self.size, sort=self.sort)

    def next_page_request(self) -> PageRequest | None:
        return self.page_request().next() if self.has_next else None

    def map(self, fn: Callable[[T], U]) -> Page[Any]:
        return Page(
            content=[fn(item) for item in self.content],
            total_elements=self.total_elements,
            offset=self.offset,
            size=self.size,
            sort=self.sort,
        )
