"""SQLAlchemy implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.domain.repositories.products import ProductRepository
from catalog.infrastructure.persistence.models.products import Product

from .base import SqlRepository


class SqlProductRepository(SqlRepository[Product], ProductRepository):
    """Products are always loaded together with their category."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Product)
        self.with_preloads("category").with_default_order(Product.id.asc())

    async def code_taken(self, code: str, exclude_id: int | None = None) -> bool:
        if exclude_id is None:
            return await self.exists_where(Product.code == code)
        return await self.exists_where_excluding_id(exclude_id, Product.code == code)

    async def list_by_category(
        self, category_id: int, page: int, page_size: int
    ) -> tuple[list[Product], int]:
        return await self.find_all_where(
            page, page_size, None, Product.category_id == category_id
        )
