"""Start-up data: the default category products fall back to."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.infrastructure.persistence.models.categories import Category
from catalog.infrastructure.persistence.repositories.categories import SqlCategoryRepository

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_NAME = "Geral"
DEFAULT_CATEGORY_DESCRIPTION = "Default category for products without a defined category"


async def seed_default_category(session: AsyncSession) -> Category | None:
    """Insert the default category unless one with its name exists.

    Returns the new category, or None when nothing was inserted.  The caller
    owns the transaction.
    """
    repository = SqlCategoryRepository(session)
    if await repository.name_taken(DEFAULT_CATEGORY_NAME):
        logger.debug("default category already present")
        return None
    return await repository.create(
        Category(
            name=DEFAULT_CATEGORY_NAME,
            description=DEFAULT_CATEGORY_DESCRIPTION,
            active=True,
        )
    )
