"""Category <-> wire model translation."""

from __future__ import annotations

from catalog.domain.models.categories import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CategoryWithProducts,
    ProductSummary,
)
from catalog.infrastructure.persistence.models.categories import Category


class CategoryMapper:
    def to_entity(self, request: CategoryCreate) -> Category:
        return Category(
            name=request.name,
            description=request.description,
            active=True if request.active is None else request.active,
        )

    def to_response(self, entity: Category) -> CategoryResponse:
        return CategoryResponse(
            id=entity.id,
            name=entity.name,
            description=entity.description or "",
            active=entity.active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def apply_update(self, entity: Category, request: CategoryUpdate) -> None:
        """Empty strings leave the stored value; active applies whenever sent."""
        if request.name:
            entity.name = request.name
        if request.description:
            entity.description = request.description
        if request.active is not None:
            entity.active = request.active

    def to_response_with_products(self, entity: Category) -> CategoryWithProducts:
        """Requires entity.products to have been eager-loaded."""
        base = self.to_response(entity)
        return CategoryWithProducts(
            **base.model_dump(),
            products=[
                ProductSummary(
                    id=p.id, code=p.code, description=p.description, price=p.price
                )
                for p in entity.products
            ],
        )
