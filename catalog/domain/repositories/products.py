"""Product repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from .base import Repository


class ProductRepository(Repository[Any]):
    """Read/write interface for Product entities."""

    @abstractmethod
    async def code_taken(self, code: str, exclude_id: int | None = None) -> bool:
        """True when another product already uses code."""

    @abstractmethod
    async def list_by_category(
        self, category_id: int, page: int, page_size: int
    ) -> tuple[list[Any], int]:
        """One page of the products referencing category_id, plus their total."""
