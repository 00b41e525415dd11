"""Generic repository base interface.

Repository[T, K] is the root abstraction for all data-access interfaces in
this domain layer.  Concrete implementations live in
teamrepo/infrastructure/persistence/ and receive their storage provider
explicitly at construction time.

Design notes:
  - T is the domain model type (never an ORM row or DTO); K is its key type.
  - All methods are blocking.  Each call is an independent unit of work, so
    a repository instance may be shared between threads.
  - Lookups return None / False for absent records; only operations that
    require prior existence (delete(entity), get_by_id) raise NotFound.
  - No operation retries.  Provider failures surface as RepositoryError
    subclasses (see teamrepo.domain.exceptions).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

from teamrepo.domain.exceptions import NotFound
from teamrepo.domain.models.paging import Page, PageRequest, Sort

T = TypeVar("T")
K = TypeVar("K")


class Repository(ABC, Generic[T, K]):
    """Abstract CRUD, paging and counting interface for one entity type."""

    entity_name: str = "Entity"

    @abstractmethod
    def save(self, entity: T) -> T:
        """Insert (key absent) or merge (key present) and return the stored entity.

        The returned entity always carries its key.  Raises ConstraintViolation
        when a uniqueness or referential rule is broken.
        """

    @abstractmethod
    def save_all(self, entities: Iterable[T]) -> list[T]:
        """Save every entity, returning them in input order.

        Implementations must document their partial-success policy.
        """

    @abstractmethod
    def find_by_id(self, key: K) -> T | None:
        """Return the entity with the given key, or None if not found."""

    @abstractmethod
    def exists_by_id(self, key: K) -> bool:
        """Return True if an entity with the given key is stored."""

    @abstractmethod
    def find_all(self, sort: Sort | None = None) -> Iterator[T]:
        """Lazily yield every stored entity, in key order unless sort is given."""

    @abstractmethod
    def find_all_by_id(self, keys: Iterable[K]) -> list[T]:
        """Return the stored entities among keys; absent keys are skipped."""

    @abstractmethod
    def find_page(self, page_request: PageRequest) -> Page[T]:
        """Return one page of entities plus the total element count.

        Raises InvalidArgument for a negative offset, a non-positive size or a
        sort property the entity does not have.
        """

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored entities."""

    @abstractmethod
    def delete_by_id(self, key: K) -> None:
        """Remove the entity with the given key.  No-op when absent."""

    @abstractmethod
    def delete_all_by_id(self, keys: Iterable[K]) -> None:
        """Remove every entity whose key is in keys.  Absent keys are ignored."""

    @abstractmethod
    def delete(self, entity: T) -> None:
        """Remove a stored entity.

        Raises NotFound when the entity has no key or no stored record.
        """

    @abstractmethod
    def delete_all(self, entities: Iterable[T] | None = None) -> None:
        """Remove the given entities, or every stored entity when None."""

    def get_by_id(self, key: K) -> T:
        """Return the entity with the given key, raising NotFound if absent."""
        entity = self.find_by_id(key)
        if entity is None:
            raise NotFound(self.entity_name, key)
        return entity
