"""Per-resource mappers between ORM entities and wire models."""

from .categories import CategoryMapper
from .products import ProductMapper

__all__ = ["CategoryMapper", "ProductMapper"]
