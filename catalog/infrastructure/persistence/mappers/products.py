"""Product <-> wire model translation."""

from __future__ import annotations

from sqlalchemy import inspect

from catalog.domain.models.products import ProductCreate, ProductResponse, ProductUpdate
from catalog.infrastructure.persistence.models.products import Product

from .categories import CategoryMapper


class ProductMapper:
    def __init__(self, categories: CategoryMapper | None = None) -> None:
        self._categories = categories or CategoryMapper()

    def to_entity(self, request: ProductCreate) -> Product:
        return Product(
            code=request.code,
            description=request.description,
            price=request.price,
            category_id=request.category_id,
        )

    def to_response(self, entity: Product) -> ProductResponse:
        response = ProductResponse(
            id=entity.id,
            code=entity.code,
            description=entity.description,
            price=entity.price,
            category_id=entity.category_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
        # Never trigger a lazy load here: only a preloaded category is nested.
        if "category" not in inspect(entity).unloaded and entity.category is not None:
            response.category = self._categories.to_response(entity.category)
        return response

    def apply_update(self, entity: Product, request: ProductUpdate) -> None:
        """Empty strings and zero numbers leave the stored value untouched."""
        if request.code:
            entity.code = request.code
        if request.description:
            entity.description = request.description
        if request.price:
            entity.price = request.price
        if request.category_id:
            entity.category_id = request.category_id
