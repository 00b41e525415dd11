"""Team ORM model."""

from __future__ import annotations

from sqlalchemy import Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from teamrepo.infrastructure.database import Base


class Team(Base):
    """A team row.  team_id is assigned by the database on insert."""

    __tablename__ = "team"
    __table_args__ = (UniqueConstraint("name", name="uq_team_name"),)

    team_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"Team(team_id={self.team_id!r}, name={self.name!r})"
