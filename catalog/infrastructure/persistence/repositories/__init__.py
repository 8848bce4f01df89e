"""Concrete SQLAlchemy repository implementations.

Exports the generic SqlRepository, the resource repositories and the
get_repositories() factory used at the application boundary (FastAPI
dependency injection).
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .base import SqlRepository
from .categories import SqlCategoryRepository
from .products import SqlProductRepository


@dataclass
class Repositories:
    """All repository instances bound to a single AsyncSession."""

    categories: SqlCategoryRepository
    products: SqlProductRepository


def get_repositories(session: AsyncSession) -> Repositories:
    """Construct all repositories bound to the given session.

        async def handler(
            session: AsyncSession = Depends(get_session),
        ) -> ...:
            repos = get_repositories(session)
            category = await repos.categories.find_by_id(category_id)
    """
    return Repositories(
        categories=SqlCategoryRepository(session),
        products=SqlProductRepository(session),
    )


__all__ = [
    "SqlRepository",
    "SqlCategoryRepository",
    "SqlProductRepository",
    "Repositories",
    "get_repositories",
]
