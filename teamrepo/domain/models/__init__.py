"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .enums import Direction
from .paging import DEFAULT_PAGE_SIZE, Order, Page, PageRequest, Sort
from .team import Team

__all__ = [
    # enums
    "Direction",
    # paging
    "DEFAULT_PAGE_SIZE",
    "Order",
    "Page",
    "PageRequest",
    "Sort",
    # entities
    "Team",
]
