"""SQLAlchemy implementation of CategoryRepository."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.domain.repositories.categories import CategoryRepository
from catalog.infrastructure.persistence.models.categories import Category
from catalog.infrastructure.persistence.models.products import Product

from .base import SqlRepository


class SqlCategoryRepository(SqlRepository[Category], CategoryRepository):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Category)
        self.with_default_order(Category.name.asc())

    async def name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        if exclude_id is None:
            return await self.exists_where(Category.name == name)
        return await self.exists_where_excluding_id(exclude_id, Category.name == name)

    async def count_products(self, category_id: int) -> int:
        # Counted on products directly; the category's own count_where is
        # scoped to the categories table.
        products = SqlRepository(self.session, Product)
        return await products.count_where(Product.category_id == category_id)

    async def list_active(self, limit: int = 1000) -> list[Category]:
        categories, _ = await self.find_all_where(1, limit, None, Category.active.is_(True))
        return categories
