"""Domain repository interfaces.

All abstractions are defined here with abc.ABC and @abstractmethod.
Concrete implementations live in teamrepo/infrastructure/persistence/ and
are wired at the application boundary via dependency injection.

Import from this package rather than individual modules to avoid coupling
callers to specific repository module paths.
"""

from .base import Repository
from .teams import TeamRepository

__all__ = [
    "Repository",
    "TeamRepository",
]
