"""Domain services package."""

from .base import CrudService, Mapper, ServiceConfig
from .categories import CategoryService, CategoryValidator
from .products import ProductService, ProductValidator
from .shape import ShapeValidator, field_errors
from .validation import (
    EntityValidator,
    NoOpValidator,
    Operation,
    ValidationContext,
    ValidationResult,
)

__all__ = [
    "CrudService",
    "Mapper",
    "ServiceConfig",
    "ShapeValidator",
    "field_errors",
    "EntityValidator",
    "NoOpValidator",
    "Operation",
    "ValidationContext",
    "ValidationResult",
    "CategoryService",
    "CategoryValidator",
    "ProductService",
    "ProductValidator",
]
