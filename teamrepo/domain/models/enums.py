"""Domain enumerations for the team repository.

All string-valued enums use str mixin so they serialize cleanly to JSON
and remain comparable to plain strings (Pydantic default behaviour).
"""

from enum import Enum


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def is_ascending(self) -> bool:
        return self is Direction.ASC
