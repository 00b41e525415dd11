"""Generic SQLAlchemy implementation of Repository[T, K].

A concrete repository names its ORM model and supplies three mapping hooks
(_to_domain, _to_row, _key_of); every operation is derived from those plus
the model's single-column primary key.

Units of work:
  - Each call opens its own session from the injected sessionmaker, begins a
    transaction, commits on success and rolls back on any error.  Sessions
    are never shared between calls, so one repository instance is safe to
    use from several threads.
  - find_all() holds its session only while the caller iterates; exhausting
    or closing the iterator releases it.
  - save_all() and delete_all(entities) are atomic: either every item is
    written or none is.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any, ClassVar, TypeVar

from sqlalchemy import ColumnElement, Select, delete, exists, func, inspect, select
from sqlalchemy.orm import InstrumentedAttribute, Session, sessionmaker

from teamrepo.domain.exceptions import InvalidArgument, NotFound
from teamrepo.domain.models.paging import Page, PageRequest, Sort
from teamrepo.domain.repositories.base import Repository
from teamrepo.infrastructure.database import Base, session_scope, settings
from teamrepo.infrastructure.persistence.errors import translate_errors

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")


class SqlRepository(Repository[T, K]):
    model: ClassVar[type[Base]]

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        fetch_size: int | None = None,
    ) -> None:
        if fetch_size is None:
            fetch_size = settings.repository_fetch_size
        if fetch_size < 1:
            raise ValueError(f"fetch_size must be >= 1, got {fetch_size}")
        self._session_factory = session_factory
        self._fetch_size = fetch_size
        mapper = inspect(self.model)
        if len(mapper.primary_key) != 1:
            raise TypeError(f"{self.model.__name__} must have a single-column primary key")
        self._pk_name = mapper.get_property_by_column(mapper.primary_key[0]).key
        self._sortable = frozenset(prop.key for prop in mapper.column_attrs)

    # --- mapping hooks ---

    @staticmethod
    @abstractmethod
    def _to_domain(row: Any) -> T:
        """Build the domain entity from an ORM row."""

    @staticmethod
    @abstractmethod
    def _to_row(entity: T) -> Any:
        """Build a transient ORM row from a domain entity."""

    @staticmethod
    @abstractmethod
    def _key_of(entity: T) -> K | None:
        """Return the entity's key, or None if it has not been saved."""

    # --- helpers ---

    @property
    def _pk(self) -> InstrumentedAttribute[Any]:
        return getattr(self.model, self._pk_name)

    @contextmanager
    def _unit_of_work(self, operation: str) -> Iterator[Session]:
        with translate_errors(self.entity_name, operation):
            with session_scope(self._session_factory) as session:
                yield session

    def _order_by(self, sort: Sort | None) -> list[ColumnElement[Any]]:
        """ORDER BY clauses for sort, always ending with the primary key."""
        clauses: list[ColumnElement[Any]] = []
        seen_pk = False
        for order in sort.orders if sort is not None else ():
            if order.property not in self._sortable:
                raise InvalidArgument(
                    f"Unknown sort property {order.property!r} for {self.entity_name}; "
                    f"expected one of {sorted(self._sortable)}"
                )
            column = getattr(self.model, order.property)
            clauses.append(column.asc() if order.direction.is_ascending else column.desc())
            seen_pk = seen_pk or order.property == self._pk_name
        if not seen_pk:
            clauses.append(self._pk.asc())
        return clauses

    def _persist(self, session: Session, entity: T) -> Any:
        row = self._to_row(entity)
        if self._key_of(entity) is None:
            session.add(row)
            return row
        return session.merge(row)

    def _delete_where(self, session: Session, *criteria: ColumnElement[bool]) -> int:
        """Bulk DELETE; returns the number of rows removed."""
        stmt = delete(self.model).where(*criteria).execution_options(synchronize_session=False)
        return session.execute(stmt).rowcount

    def _stream(self, stmt: Select[Any]) -> Iterator[T]:
        with self._unit_of_work("find_all") as session:
            rows = session.scalars(stmt.execution_options(yield_per=self._fetch_size))
            for row in rows:
                yield self._to_domain(row)

    # --- writes ---

    def save(self, entity: T) -> T:
        with self._unit_of_work("save") as session:
            row = self._persist(session, entity)
            session.flush()
            saved = self._to_domain(row)
        logger.debug("Saved %s %r", self.entity_name, self._key_of(saved))
        return saved

    def save_all(self, entities: Iterable[T]) -> list[T]:
        """Save every entity in one transaction; nothing is stored if any fails."""
        entities = list(entities)
        if not entities:
            return []
        with self._unit_of_work("save_all") as session:
            rows = [self._persist(session, entity) for entity in entities]
            session.flush()
            saved = [self._to_domain(row) for row in rows]
        logger.debug("Saved %d %s rows", len(saved), self.entity_name)
        return saved

    def delete_by_id(self, key: K) -> None:
        with self._unit_of_work("delete_by_id") as session:
            removed = self._delete_where(session, self._pk == key)
        logger.debug("delete_by_id %s %r removed %d row(s)", self.entity_name, key, removed)

    def delete_all_by_id(self, keys: Iterable[K]) -> None:
        keys = list(keys)
        if not keys:
            return
        with self._unit_of_work("delete_all_by_id") as session:
            removed = self._delete_where(session, self._pk.in_(keys))
        logger.debug("delete_all_by_id %s removed %d row(s)", self.entity_name, removed)

    def delete(self, entity: T) -> None:
        """Remove a stored entity; NotFound when it is unsaved or already gone."""
        key = self._key_of(entity)
        if key is None:
            raise NotFound(self.entity_name, None)
        with self._unit_of_work("delete") as session:
            if self._delete_where(session, self._pk == key) == 0:
                raise NotFound(self.entity_name, key)
        logger.debug("Deleted %s %r", self.entity_name, key)

    def delete_all(self, entities: Iterable[T] | None = None) -> None:
        """Empty the store, or remove exactly the given entities.

        With entities, the same NotFound policy as delete() applies and the
        whole batch is rolled back if any entity is missing.
        """
        if entities is None:
            with self._unit_of_work("delete_all") as session:
                removed = self._delete_where(session)
            logger.debug("delete_all %s removed %d row(s)", self.entity_name, removed)
            return

        keys = [self._key_of(entity) for entity in entities]
        if not keys:
            return
        if None in keys:
            raise NotFound(self.entity_name, None)
        with self._unit_of_work("delete_all") as session:
            found = set(session.scalars(select(self._pk).where(self._pk.in_(keys))))
            missing = [key for key in keys if key not in found]
            if missing:
                raise NotFound(self.entity_name, missing[0] if len(missing) == 1 else missing)
            self._delete_where(session, self._pk.in_(keys))
        logger.debug("delete_all %s removed %d row(s)", self.entity_name, len(found))

    # --- reads ---

    def find_by_id(self, key: K) -> T | None:
        with self._unit_of_work("find_by_id") as session:
            row = session.execute(select(self.model).where(self._pk == key)).scalar_one_or_none()
            return self._to_domain(row) if row is not None else None

    def exists_by_id(self, key: K) -> bool:
        with self._unit_of_work("exists_by_id") as session:
            return bool(session.execute(select(exists().where(self._pk == key))).scalar())

    def find_all(self, sort: Sort | None = None) -> Iterator[T]:
        # ORDER BY is built eagerly so a bad sort fails at the call site.
        stmt = select(self.model).order_by(*self._order_by(sort))
        return self._stream(stmt)

    def find_all_by_id(self, keys: Iterable[K]) -> list[T]:
        keys = list(keys)
        if not keys:
            return []
        stmt = select(self.model).where(self._pk.in_(keys)).order_by(self._pk.asc())
        with self._unit_of_work("find_all_by_id") as session:
            return [self._to_domain(row) for row in session.execute(stmt).scalars()]

    def find_page(self, page_request: PageRequest) -> Page[T]:
        page_request.validate_bounds()
        stmt = (
            select(self.model)
            .order_by(*self._order_by(page_request.sort))
            .offset(page_request.offset)
            .limit(page_request.size)
        )
        with self._unit_of_work("find_page") as session:
            total = session.execute(select(func.count()).select_from(self.model)).scalar_one()
            content = [self._to_domain(row) for row in session.execute(stmt).scalars()]
        return Page(
            content=content,
            total_elements=total,
            offset=page_request.offset,
            size=page_request.size,
            sort=page_request.sort,
        )

    def count(self) -> int:
        with self._unit_of_work("count") as session:
            return session.execute(select(func.count()).select_from(self.model)).scalar_one()
