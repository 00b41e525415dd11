"""Persistence package.

Importing this package registers every ORM mapper with Base.metadata
(required for Alembic autogenerate and SQLAlchemy mapper configuration)
and exports all repository implementations and the DI factory.
"""

from teamrepo.infrastructure.persistence.models import *  # noqa: F401, F403
from teamrepo.infrastructure.persistence.models import __all__ as _orm_all
from teamrepo.infrastructure.persistence.repositories import (
    Repositories,
    SqlRepository,
    SqlTeamRepository,
    get_repositories,
)

__all__ = _orm_all + [
    "Repositories",
    "SqlRepository",
    "SqlTeamRepository",
    "get_repositories",
]
