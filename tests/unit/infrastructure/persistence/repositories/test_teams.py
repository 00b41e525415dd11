"""Tests for SqlTeamRepository: mapping and session interaction."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from teamrepo.domain.exceptions import (
    ConstraintViolation,
    InvalidArgument,
    NotFound,
    StoreConnectionError,
)
from teamrepo.domain.models.paging import PageRequest, Sort
from teamrepo.domain.models.team import Team
from teamrepo.infrastructure.database import settings
from teamrepo.infrastructure.persistence.models.team import Team as OrmTeam
from teamrepo.infrastructure.persistence.repositories.teams import SqlTeamRepository


def _orm_team(**overrides):
    defaults = {"team_id": 1, "name": "Arsenal"}
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _mock_factory(scalar_result=None):
    session = MagicMock()
    session.execute.return_value = MagicMock(
        scalar_one_or_none=MagicMock(return_value=scalar_result)
    )
    factory = MagicMock()
    factory.return_value.__enter__.return_value = session
    return factory, session


def _repo(scalar_result=None):
    factory, session = _mock_factory(scalar_result)
    return SqlTeamRepository(factory), factory, session


# --- mapping ---

def test_to_domain_maps_key_and_name():
    result = SqlTeamRepository._to_domain(_orm_team(team_id=5, name="Chelsea"))
    assert result == Team(team_id=5, name="Chelsea")


def test_to_row_builds_orm_team():
    row = SqlTeamRepository._to_row(Team(team_id=3, name="Leeds"))
    assert isinstance(row, OrmTeam)
    assert (row.team_id, row.name) == (3, "Leeds")


def test_to_row_leaves_key_unset_for_new_team():
    assert SqlTeamRepository._to_row(Team.create("Leeds")).team_id is None


def test_key_of_reads_team_id():
    assert SqlTeamRepository._key_of(Team(team_id=9, name="x")) == 9
    assert SqlTeamRepository._key_of(Team.create("x")) is None


def test_primary_key_and_sortable_properties_come_from_mapper():
    repo, _, _ = _repo()
    assert repo._pk_name == "team_id"
    assert repo._sortable == {"team_id", "name"}


def test_fetch_size_defaults_to_setting():
    factory, _ = _mock_factory()
    assert SqlTeamRepository(factory)._fetch_size == settings.repository_fetch_size


def test_fetch_size_must_be_positive():
    factory, _ = _mock_factory()
    with pytest.raises(ValueError):
        SqlTeamRepository(factory, fetch_size=0)


# --- session interaction ---

def test_find_by_id_returns_none_when_not_found():
    repo, _, _ = _repo(scalar_result=None)
    assert repo.find_by_id(1) is None


def test_find_by_id_returns_domain_object_when_found():
    repo, _, _ = _repo(scalar_result=_orm_team(name="Spurs"))
    assert repo.find_by_id(1) == Team(team_id=1, name="Spurs")


def test_each_call_opens_its_own_session():
    repo, factory, _ = _repo()
    repo.find_by_id(1)
    repo.find_by_id(2)
    assert factory.call_count == 2


def test_exists_by_id_reads_scalar():
    repo, _, session = _repo()
    session.execute.return_value = MagicMock(scalar=MagicMock(return_value=True))
    assert repo.exists_by_id(1) is True


def test_save_new_team_adds_row_and_flushes():
    repo, _, session = _repo()
    repo.save(Team.create("Arsenal"))
    session.add.assert_called_once()
    session.flush.assert_called_once()
    session.merge.assert_not_called()


def test_save_existing_team_merges():
    repo, _, session = _repo()
    session.merge.return_value = _orm_team(team_id=4, name="Arsenal")
    result = repo.save(Team(team_id=4, name="Arsenal"))
    session.merge.assert_called_once()
    session.add.assert_not_called()
    assert result.team_id == 4


def test_save_translates_integrity_error():
    repo, _, session = _repo()
    session.flush.side_effect = IntegrityError(
        "INSERT INTO team", {}, Exception("UNIQUE constraint failed: team.name")
    )
    with pytest.raises(ConstraintViolation) as info:
        repo.save(Team.create("Arsenal"))
    assert isinstance(info.value.cause, IntegrityError)


def test_count_translates_operational_error():
    repo, _, session = _repo()
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
    with pytest.raises(StoreConnectionError):
        repo.count()


def test_delete_unsaved_team_raises_without_opening_session():
    repo, factory, _ = _repo()
    with pytest.raises(NotFound):
        repo.delete(Team.create("Arsenal"))
    factory.assert_not_called()


def test_delete_raises_not_found_when_no_row_removed():
    repo, _, session = _repo()
    session.execute.return_value = MagicMock(rowcount=0)
    with pytest.raises(NotFound):
        repo.delete(Team(team_id=8, name="Arsenal"))


def test_delete_by_id_absent_is_not_an_error():
    repo, _, session = _repo()
    session.execute.return_value = MagicMock(rowcount=0)
    repo.delete_by_id(8)


def test_find_page_rejects_negative_offset_before_querying():
    repo, factory, _ = _repo()
    with pytest.raises(InvalidArgument):
        repo.find_page(PageRequest(offset=-1, size=2))
    factory.assert_not_called()


def test_find_page_rejects_unknown_sort_property():
    repo, factory, _ = _repo()
    with pytest.raises(InvalidArgument, match="colour"):
        repo.find_page(PageRequest.of(size=2, sort=Sort.by("colour")))
    factory.assert_not_called()


def test_find_page_rejects_empty_sort_property():
    repo, factory, _ = _repo()
    with pytest.raises(InvalidArgument):
        repo.find_page(PageRequest.of(size=2, sort=Sort.by("")))
    factory.assert_not_called()


def test_find_all_rejects_unknown_sort_property_eagerly():
    repo, _, _ = _repo()
    with pytest.raises(InvalidArgument):
        repo.find_all(Sort.by("colour"))


def test_empty_batches_skip_the_store():
    repo, factory, _ = _repo()
    assert repo.save_all([]) == []
    assert repo.find_all_by_id([]) == []
    repo.delete_all_by_id([])
    repo.delete_all([])
    factory.assert_not_called()
