"""SQLAlchemy engine, session factory, unit-of-work scope and logging setup."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+pysqlite:///./teams.db"
    database_echo: bool = False
    database_pool_pre_ping: bool = True
    repository_fetch_size: int = 500  # rows buffered per batch by find_all()
    log_level: str = "INFO"


settings = Settings()


def build_engine(url: str, echo: bool = False, pool_pre_ping: bool = True) -> Engine:
    """Create an engine; SQLite URLs are configured for multi-thread access.

    In-memory SQLite shares a single connection (StaticPool) so every session
    sees the same database.
    """
    kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": pool_pre_ping}
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


engine = build_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=settings.database_pool_pre_ping,
)

SessionLocal = sessionmaker(
    bind=engine,
    class_=Session,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


@contextmanager
def session_scope(session_factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """One unit of work: commit on success, roll back on error, always close."""
    factory = session_factory or SessionLocal
    with factory() as session:
        with session.begin():
            yield session


def configure_logging(level: str | int | None = None) -> None:
    """Apply a level to the teamrepo logger hierarchy.

    Installs a basic stderr handler only when the root logger has none, so a
    hosting application's own configuration is left untouched.
    """
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("teamrepo").setLevel(level or settings.log_level.upper())
