"""Generic SQLAlchemy implementation of Repository[E].

One class serves every entity type: the model class is passed in and all
statements are built against it.  Resource repositories subclass it only to
fix the model, the default preloads / ordering and a few named queries.
"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog.domain.entity import E
from catalog.domain.errors import RecordNotFoundError
from catalog.domain.repositories.base import Repository


class SqlRepository(Repository[E]):
    """CRUD, pagination and existence checks over a single AsyncSession.

    with_preloads names relationship attributes eager-loaded (selectinload)
    by find_by_id, find_all, find_all_where and find_one_where.
    with_default_order sets the ordering used when a caller passes no
    order_by; without one the fallback is id ASC.
    """

    def __init__(self, session: AsyncSession, model: type[E]) -> None:
        self._session = session
        self.model = model
        self._preloads: tuple[str, ...] = ()
        self._default_order: tuple[Any, ...] = ()

    def with_preloads(self, *relations: str) -> SqlRepository[E]:
        self._preloads = relations
        return self

    def with_default_order(self, *clauses: Any) -> SqlRepository[E]:
        self._default_order = clauses
        return self

    @property
    def session(self) -> AsyncSession:
        return self._session

    @property
    def preloads(self) -> tuple[str, ...]:
        return self._preloads

    # ------------------------------------------------------------------ #
    # Statement helpers                                                    #
    # ------------------------------------------------------------------ #

    def _load_options(self, relations: Sequence[str]) -> list[Any]:
        return [selectinload(getattr(self.model, name)) for name in relations]

    def _order(self, order_by: Sequence[Any] | None) -> Sequence[Any]:
        if order_by:
            return order_by
        return self._default_order or (self.model.id.asc(),)

    async def _fetch_one(self, relations: Sequence[str], *criteria: Any) -> E:
        stmt = (
            select(self.model)
            .where(*criteria)
            .options(*self._load_options(relations))
            .limit(1)
            # Entities already in the identity map get their relations loaded too.
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        entity = result.scalars().first()
        if entity is None:
            raise RecordNotFoundError(self.model.__tablename__)
        return entity

    async def _page(
        self,
        page: int,
        page_size: int,
        order_by: Sequence[Any] | None,
        criteria: Sequence[Any],
    ) -> tuple[list[E], int]:
        # Count and fetch are separate statements; concurrent writes between
        # them may make total disagree with the returned page.
        total = await self.count_where(*criteria)
        stmt = (
            select(self.model)
            .where(*criteria)
            .options(*self._load_options(self._preloads))
            .order_by(*self._order(order_by))
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all()), total

    # ------------------------------------------------------------------ #
    # Repository[E]                                                        #
    # ------------------------------------------------------------------ #

    async def create(self, entity: E) -> E:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def find_by_id(self, id: int) -> E:
        try:
            return await self._fetch_one(self._preloads, self.model.id == id)
        except RecordNotFoundError:
            raise RecordNotFoundError(self.model.__tablename__, id) from None

    async def find_by_id_with_relations(self, id: int, *relations: str) -> E:
        try:
            return await self._fetch_one(relations, self.model.id == id)
        except RecordNotFoundError:
            raise RecordNotFoundError(self.model.__tablename__, id) from None

    async def find_all(
        self, page: int, page_size: int, order_by: Sequence[Any] | None = None
    ) -> tuple[list[E], int]:
        return await self._page(page, page_size, order_by, ())

    async def find_all_where(
        self,
        page: int,
        page_size: int,
        order_by: Sequence[Any] | None,
        *criteria: Any,
    ) -> tuple[list[E], int]:
        return await self._page(page, page_size, order_by, criteria)

    async def find_one_where(self, *criteria: Any) -> E:
        return await self._fetch_one(self._preloads, *criteria)

    async def update(self, entity: E) -> E:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def delete(self, id: int) -> None:
        result = await self._session.execute(delete(self.model).where(self.model.id == id))
        if result.rowcount == 0:
            raise RecordNotFoundError(self.model.__tablename__, id)

    async def exists_by_id(self, id: int) -> bool:
        return await self.exists_where(self.model.id == id)

    async def exists_where(self, *criteria: Any) -> bool:
        stmt = select(select(self.model.id).where(*criteria).exists())
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def exists_where_excluding_id(self, id: int, *criteria: Any) -> bool:
        return await self.exists_where(*criteria, self.model.id != id)

    async def count_where(self, *criteria: Any) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())
