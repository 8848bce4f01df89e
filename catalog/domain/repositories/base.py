"""Generic repository base interface.

Repository[E] is the root abstraction for all data-access interfaces in this
domain layer.  The concrete implementation lives in
catalog/infrastructure/persistence/ and is wired at the application boundary
via dependency injection.

Design notes:
  - All methods are async; cancelling the awaiting task (or an enclosing
    asyncio.timeout) cancels the storage call.  Nothing is retried.
  - E is the persisted entity type, constrained by the Entity protocol.
  - criteria are opaque filter expressions understood by the storage
    implementation (SQLAlchemy column expressions).
  - Lookups that match nothing raise RecordNotFoundError instead of
    returning None, so "unknown id" and "already deleted" look the same.
  - exists_* / count_where never materialise entities; uniqueness checks
    should use them rather than find_*.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Sequence

from catalog.domain.entity import E


class Repository(ABC, Generic[E]):
    """Abstract CRUD + query interface for one entity type."""

    @abstractmethod
    async def create(self, entity: E) -> E:
        """Persist a new entity; id and timestamps are populated on return."""

    @abstractmethod
    async def find_by_id(self, id: int) -> E:
        """Return the entity with default relations loaded, or raise RecordNotFoundError."""

    @abstractmethod
    async def find_by_id_with_relations(self, id: int, *relations: str) -> E:
        """Like find_by_id, loading exactly the named relations instead of the defaults."""

    @abstractmethod
    async def find_all(
        self, page: int, page_size: int, order_by: Sequence[Any] | None = None
    ) -> tuple[list[E], int]:
        """Return one page of entities and the total record count."""

    @abstractmethod
    async def find_all_where(
        self,
        page: int,
        page_size: int,
        order_by: Sequence[Any] | None,
        *criteria: Any,
    ) -> tuple[list[E], int]:
        """Return one page of entities matching criteria and the total matching count."""

    @abstractmethod
    async def find_one_where(self, *criteria: Any) -> E:
        """Return the first entity matching criteria, or raise RecordNotFoundError."""

    @abstractmethod
    async def update(self, entity: E) -> E:
        """Persist every field of an entity previously fetched and mutated."""

    @abstractmethod
    async def delete(self, id: int) -> None:
        """Remove the entity; raise RecordNotFoundError when no row was affected."""

    @abstractmethod
    async def exists_by_id(self, id: int) -> bool: ...

    @abstractmethod
    async def exists_where(self, *criteria: Any) -> bool: ...

    @abstractmethod
    async def exists_where_excluding_id(self, id: int, *criteria: Any) -> bool:
        """True when a record other than id matches criteria (update-time uniqueness)."""

    @abstractmethod
    async def count_where(self, *criteria: Any) -> int: ...
