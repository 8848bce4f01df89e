"""Category repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from .base import Repository


class CategoryRepository(Repository[Any]):
    """Read/write interface for Category entities.

    name_taken backs the uniqueness rule; count_products backs the rule that
    a category referenced by products cannot be deleted.
    """

    @abstractmethod
    async def name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        """True when another category already uses name."""

    @abstractmethod
    async def count_products(self, category_id: int) -> int:
        """Number of products referencing the category."""

    @abstractmethod
    async def list_active(self, limit: int = 1000) -> list[Any]:
        """Active categories in the repository's default order."""
