"""ORM model registry: imports every mapper class so it is registered with
Base.metadata before Alembic or SQLAlchemy runs.
"""

from teamrepo.infrastructure.persistence.models.team import Team

__all__ = [
    "Team",
]
