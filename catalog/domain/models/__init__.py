"""Domain model package.

Request, response and envelope models exchanged at the service boundary.
They are pure Pydantic models with no ORM dependencies; import from this
package to avoid coupling callers to individual module paths.
"""

from .categories import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CategoryWithProducts,
    ProductSummary,
)
from .common import ErrorResponse, MessageResponse, OmitEmpty, Page
from .products import MAX_PRICE, ProductCreate, ProductResponse, ProductUpdate

__all__ = [
    # Categories
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryWithProducts",
    "ProductSummary",
    # Products
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "MAX_PRICE",
    # Envelopes
    "Page",
    "ErrorResponse",
    "MessageResponse",
    "OmitEmpty",
]
