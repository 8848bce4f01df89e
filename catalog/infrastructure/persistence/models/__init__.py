"""ORM model registry: imports every model module so each mapper class is
registered with Base.metadata before Alembic or SQLAlchemy runs.

Import order follows the dependency graph (referenced tables first).
"""

from catalog.infrastructure.persistence.models.base import EntityMixin
from catalog.infrastructure.persistence.models.categories import Category
from catalog.infrastructure.persistence.models.products import Product

__all__ = [
    "EntityMixin",
    "Category",
    "Product",
]
