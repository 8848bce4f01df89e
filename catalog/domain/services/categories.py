"""Category business rules and service."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from catalog.domain.errors import ErrorCode
from catalog.domain.models.categories import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CategoryWithProducts,
)
from catalog.domain.repositories.categories import CategoryRepository

from .base import CrudService, Mapper, ServiceConfig
from .validation import EntityValidator, ValidationContext, ValidationResult

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2


class CategoryValidator(EntityValidator[Any, CategoryCreate, CategoryUpdate]):
    """Name presence, length and uniqueness; no deletion while products reference it."""

    def __init__(self, repository: CategoryRepository, log: logging.Logger | None = None) -> None:
        self._repository = repository
        self._log = log or logger

    async def validate_create(
        self, ctx: ValidationContext, request: CategoryCreate
    ) -> ValidationResult:
        if not request.name:
            self._log.warning("category create without a name")
            return ValidationResult.failure("nome", "Category name is required")

        if len(request.name) < MIN_NAME_LENGTH:
            self._log.warning("category name too short: %r", request.name)
            return ValidationResult.failure(
                "nome", f"Name must have at least {MIN_NAME_LENGTH} characters"
            )

        if await self._repository.name_taken(request.name):
            self._log.warning("duplicate category name on create: %r", request.name)
            return ValidationResult.failure(
                "nome", "A category with this name already exists", ErrorCode.DUPLICATE
            )

        return ValidationResult()

    async def validate_update(
        self, ctx: ValidationContext, entity: Any, request: CategoryUpdate
    ) -> ValidationResult:
        if request.name and request.name != entity.name:
            if len(request.name) < MIN_NAME_LENGTH:
                self._log.warning("category name too short: %r", request.name)
                return ValidationResult.failure(
                    "nome", f"Name must have at least {MIN_NAME_LENGTH} characters"
                )
            if await self._repository.name_taken(request.name, exclude_id=ctx.entity_id):
                self._log.warning("duplicate category name on update: %r", request.name)
                return ValidationResult.failure(
                    "nome", "Another category already uses this name", ErrorCode.DUPLICATE
                )

        return ValidationResult()

    async def validate_delete(self, ctx: ValidationContext, entity: Any) -> ValidationResult:
        count = await self._repository.count_products(entity.id)
        if count > 0:
            self._log.warning("refusing to delete category id=%s with %d products", entity.id, count)
            return ValidationResult.failure(
                "categoria",
                "Cannot delete a category that still has products",
                ErrorCode.HAS_RELATIONS,
            )
        return ValidationResult()


class CategoryMapping(Mapper[Any, CategoryCreate, CategoryUpdate, CategoryResponse], Protocol):
    """Mapper with the extra nested-products projection."""

    def to_response_with_products(self, entity: Any) -> CategoryWithProducts: ...


class CategoryService(CrudService[Any, CategoryCreate, CategoryUpdate, CategoryResponse]):
    """Generic CRUD plus the nested-products view and the active listing."""

    repository: CategoryRepository
    mapper: CategoryMapping

    def __init__(
        self,
        repository: CategoryRepository,
        mapper: CategoryMapping,
        config: ServiceConfig | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        log = log or logger
        super().__init__(
            repository,
            mapper,
            config or ServiceConfig(entity_name="Category"),
            validator=CategoryValidator(repository, log),
            log=log,
        )

    async def get_with_products(self, id: int) -> CategoryWithProducts:
        self.log.info("fetching category id=%s with products", id)
        entity = await self.fetch_or_not_found(id, "products")
        return self.mapper.to_response_with_products(entity)

    async def list_active(self) -> list[CategoryResponse]:
        self.log.info("listing active categories")
        return [self.mapper.to_response(e) for e in await self.repository.list_active()]
