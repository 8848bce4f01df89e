"""Product business rules and service."""

from __future__ import annotations

import logging
from typing import Any

from catalog.domain.errors import BusinessError, ErrorCode, RecordNotFoundError
from catalog.domain.models.common import Page
from catalog.domain.models.products import ProductCreate, ProductResponse, ProductUpdate
from catalog.domain.repositories.categories import CategoryRepository
from catalog.domain.repositories.products import ProductRepository

from .base import CrudService, Mapper, ServiceConfig
from .validation import EntityValidator, ValidationContext, ValidationResult

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 3


class ProductValidator(EntityValidator[Any, ProductCreate, ProductUpdate]):
    """Product rules, checked in a fixed order; the first failure is reported.

    create: code present -> code unique -> price > 0 -> description length
            -> category present -> category exists -> category active
    update: the same checks, limited to the fields present in the patch;
            the category is re-validated whenever it changes.
    """

    def __init__(
        self,
        repository: ProductRepository,
        categories: CategoryRepository,
        log: logging.Logger | None = None,
    ) -> None:
        self._repository = repository
        self._categories = categories
        self._log = log or logger

    async def validate_create(
        self, ctx: ValidationContext, request: ProductCreate
    ) -> ValidationResult:
        if not request.code:
            self._log.warning("product create without a code")
            return ValidationResult.failure("codigo", "Product code is required")

        if await self._repository.code_taken(request.code):
            self._log.warning("duplicate product code on create: %r", request.code)
            return ValidationResult.failure(
                "codigo", "A product with this code already exists", ErrorCode.DUPLICATE
            )

        if request.price <= 0:
            self._log.warning("invalid product price: %s", request.price)
            return ValidationResult.failure("preco", "Price must be greater than zero")

        if len(request.description) < MIN_DESCRIPTION_LENGTH:
            self._log.warning("product description too short: %r", request.description)
            return ValidationResult.failure(
                "descricao",
                f"Description must have at least {MIN_DESCRIPTION_LENGTH} characters",
            )

        if not request.category_id:
            self._log.warning("product create without a category")
            return ValidationResult.failure("categoria_id", "Category is required")

        return await self._check_category(request.category_id)

    async def validate_update(
        self, ctx: ValidationContext, entity: Any, request: ProductUpdate
    ) -> ValidationResult:
        if request.code and request.code != entity.code:
            if await self._repository.code_taken(request.code, exclude_id=ctx.entity_id):
                self._log.warning("duplicate product code on update: %r", request.code)
                return ValidationResult.failure(
                    "codigo", "Another product already uses this code", ErrorCode.DUPLICATE
                )

        if request.price and request.price <= 0:
            self._log.warning("invalid product price: %s", request.price)
            return ValidationResult.failure("preco", "Price must be greater than zero")

        if request.description and len(request.description) < MIN_DESCRIPTION_LENGTH:
            self._log.warning("product description too short: %r", request.description)
            return ValidationResult.failure(
                "descricao",
                f"Description must have at least {MIN_DESCRIPTION_LENGTH} characters",
            )

        if request.category_id and request.category_id != entity.category_id:
            return await self._check_category(request.category_id)

        return ValidationResult()

    async def validate_delete(self, ctx: ValidationContext, entity: Any) -> None:
        return None

    async def _check_category(self, category_id: int) -> ValidationResult:
        try:
            category = await self._categories.find_by_id(category_id)
        except RecordNotFoundError:
            self._log.warning("category id=%s not found", category_id)
            return ValidationResult.failure("categoria_id", "Category not found")

        if not category.active:
            self._log.warning("category id=%s is inactive", category_id)
            return ValidationResult.failure(
                "categoria_id", "An inactive category cannot be used", ErrorCode.INACTIVE
            )
        return ValidationResult()


class ProductService(CrudService[Any, ProductCreate, ProductUpdate, ProductResponse]):
    """Generic CRUD plus listing by category.

    Create and update reload the product so the response carries its
    category, which the mapped entity alone does not have loaded.
    """

    repository: ProductRepository

    def __init__(
        self,
        repository: ProductRepository,
        categories: CategoryRepository,
        mapper: Mapper[Any, ProductCreate, ProductUpdate, ProductResponse],
        config: ServiceConfig | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        log = log or logger
        super().__init__(
            repository,
            mapper,
            config or ServiceConfig(entity_name="Product"),
            validator=ProductValidator(repository, categories, log),
            log=log,
        )
        self._categories = categories

    async def create(self, request: ProductCreate) -> ProductResponse:
        response = await super().create(request)
        return self.mapper.to_response(await self.fetch_or_not_found(response.id))

    async def update(self, id: int, request: ProductUpdate) -> ProductResponse:
        response = await super().update(id, request)
        return self.mapper.to_response(await self.fetch_or_not_found(response.id))

    async def list_by_category(
        self, category_id: int, page: int, page_size: int
    ) -> Page[ProductResponse]:
        self.log.info(
            "listing products of category id=%s page=%s page_size=%s",
            category_id,
            page,
            page_size,
        )
        page, page_size = self.normalize_pagination(page, page_size)

        if not await self._categories.exists_by_id(category_id):
            self.log.warning("category id=%s not found", category_id)
            raise BusinessError.not_found("Category")

        entities, total = await self.repository.list_by_category(category_id, page, page_size)
        return self.paginate(entities, total, page, page_size)
