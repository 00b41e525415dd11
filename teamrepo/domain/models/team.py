"""Team domain model.

Pure domain object with no ORM or persistence concerns.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Team(BaseModel):
    """A team, identified by an integer surrogate key.

    team_id is None until the team has been saved; the store assigns it.
    name is unique across all stored teams (enforced by the store, surfaced
    as ConstraintViolation).
    """

    model_config = ConfigDict(frozen=True)

    team_id: int | None = None
    name: str = Field(min_length=1)

    @classmethod
    def create(cls, name: str) -> Team:
        """Named constructor for an unsaved team."""
        return cls(name=name)

    @property
    def is_new(self) -> bool:
        return self.team_id is None

    def with_id(self, team_id: int) -> Team:
        return self.model_copy(update={"team_id": team_id})
