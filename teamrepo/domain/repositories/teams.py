"""Team repository interface."""

from __future__ import annotations

from teamrepo.domain.models.team import Team

from .base import Repository


class TeamRepository(Repository[Team, int]):
    """Read/write interface for Team entities keyed by team_id.

    Adds no queries beyond the base contract.  save() raises
    ConstraintViolation when the team name is already taken by another team.
    """

    entity_name = "Team"
