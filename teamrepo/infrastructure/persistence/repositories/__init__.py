"""Concrete SQLAlchemy repository implementations.

Exports all SqlRepository classes and the get_repositories() factory function
for wiring at the application boundary.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session, sessionmaker

from teamrepo.infrastructure.database import SessionLocal

from .base import SqlRepository
from .teams import SqlTeamRepository


@dataclass(frozen=True)
class Repositories:
    """All repository instances bound to a single session factory."""

    teams: SqlTeamRepository


def get_repositories(
    session_factory: sessionmaker[Session] | None = None,
    fetch_size: int | None = None,
) -> Repositories:
    """Construct all repositories bound to the given session factory.

    Defaults to the application-wide SessionLocal and configured fetch size:

        repos = get_repositories()
        team = repos.teams.save(Team.create("Arsenal"))
    """
    factory = session_factory or SessionLocal
    return Repositories(
        teams=SqlTeamRepository(factory, fetch_size=fetch_size),
    )


__all__ = [
    "SqlRepository",
    "SqlTeamRepository",
    "Repositories",
    "get_repositories",
]
