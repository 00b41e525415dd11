"""Fixtures backed by a real in-memory SQLite database."""

import pytest
from sqlalchemy.orm import sessionmaker

import teamrepo.infrastructure.persistence  # noqa: F401  registers all mappers
from teamrepo.infrastructure.database import Base, build_engine
from teamrepo.infrastructure.persistence.repositories import get_repositories


@pytest.fixture
def engine():
    engine = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def teams(session_factory):
    # small fetch size so find_all() streams across several batches
    return get_repositories(session_factory, fetch_size=2).teams
