"""SQLAlchemy implementation of TeamRepository."""

from __future__ import annotations

from teamrepo.domain.models.team import Team as DomainTeam
from teamrepo.domain.repositories.teams import TeamRepository
from teamrepo.infrastructure.persistence.models.team import Team as OrmTeam

from .base import SqlRepository


class SqlTeamRepository(SqlRepository[DomainTeam, int], TeamRepository):
    model = OrmTeam

    @staticmethod
    def _to_domain(row: OrmTeam) -> DomainTeam:
        return DomainTeam(team_id=row.team_id, name=row.name)

    @staticmethod
    def _to_row(entity: DomainTeam) -> OrmTeam:
        return OrmTeam(team_id=entity.team_id, name=entity.name)

    @staticmethod
    def _key_of(entity: DomainTeam) -> int | None:
        return entity.team_id
