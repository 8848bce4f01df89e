"""Persistence package.

Importing this package registers every ORM mapper with Base.metadata
(required for Alembic autogenerate and SQLAlchemy mapper configuration)
and exports the repository implementations, the mappers and the DI
factory.
"""

from catalog.infrastructure.persistence.models import *  # noqa: F401, F403
from catalog.infrastructure.persistence.models import __all__ as _orm_all
from catalog.infrastructure.persistence.repositories import (
    Repositories,
    SqlCategoryRepository,
    SqlProductRepository,
    SqlRepository,
    get_repositories,
)
from catalog.infrastructure.persistence.mappers import CategoryMapper, ProductMapper

__all__ = _orm_all + [
    "Repositories",
    "SqlRepository",
    "SqlCategoryRepository",
    "SqlProductRepository",
    "CategoryMapper",
    "ProductMapper",
    "get_repositories",
]
