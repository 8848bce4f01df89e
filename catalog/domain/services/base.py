"""Generic CRUD service.

CrudService[E, C, U, R] is written once and specialised per resource by
composition: a Repository[E], a Mapper[E, C, U, R] and an EntityValidator
strategy.  Every mutating call walks the same stages:

    received -> shape-validated -> business-validated
             -> mapped-to-entity -> persisted -> mapped-to-response

Any stage may stop the chain by raising; nothing is written before the
single persistence call, so no compensation is ever needed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Protocol, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from catalog.domain.entity import E
from catalog.domain.errors import (
    BusinessError,
    BusinessValidationError,
    RecordNotFoundError,
    ShapeValidationError,
)
from catalog.domain.models.common import Page
from catalog.domain.repositories.base import Repository

from .shape import ShapeValidator
from .validation import (
    EntityValidator,
    NoOpValidator,
    Operation,
    ValidationContext,
    ValidationResult,
)

C = TypeVar("C", bound=BaseModel)
U = TypeVar("U", bound=BaseModel)
R = TypeVar("R", bound=BaseModel)

logger = logging.getLogger(__name__)


class Mapper(Protocol[E, C, U, R]):
    """Per-resource translation between wire models and the entity."""

    def to_entity(self, request: C) -> E: ...

    def to_response(self, entity: E) -> R: ...

    def apply_update(self, entity: E, request: U) -> None:
        """Copy the fields present in the patch onto the entity."""


@dataclass(frozen=True)
class ServiceConfig:
    entity_name: str  # used in log records and user-facing messages
    max_page_size: int = 100
    default_page_size: int = 10


class CrudService(Generic[E, C, U, R]):
    """Create / read / update / delete / list for one entity type."""

    def __init__(
        self,
        repository: Repository[E],
        mapper: Mapper[E, C, U, R],
        config: ServiceConfig,
        validator: EntityValidator[E, C, U] | None = None,
        shape_validator: ShapeValidator | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.repository = repository
        self.mapper = mapper
        self.config = config
        self.validator: EntityValidator[E, C, U] = validator or NoOpValidator()
        self.shape_validator = shape_validator or ShapeValidator()
        self.log = log or logger

    @property
    def entity_name(self) -> str:
        return self.config.entity_name

    # ------------------------------------------------------------------ #
    # Operations                                                           #
    # ------------------------------------------------------------------ #

    async def create(self, request: C) -> R:
        self.log.info("creating %s", self.entity_name)

        self.check_shape(request, Operation.CREATE)
        ctx = ValidationContext(operation=Operation.CREATE)
        self.check_business(await self.validator.validate_create(ctx, request), Operation.CREATE)

        entity = self.mapper.to_entity(request)
        try:
            entity = await self.repository.create(entity)
        except SQLAlchemyError:
            self.log.exception("failed to persist new %s", self.entity_name)
            raise

        self.log.info("created %s id=%s", self.entity_name, entity.id)
        return self.mapper.to_response(entity)

    async def get_by_id(self, id: int) -> R:
        self.log.info("fetching %s id=%s", self.entity_name, id)
        entity = await self.fetch_or_not_found(id)
        return self.mapper.to_response(entity)

    async def get_all(self, page: int, page_size: int) -> Page[R]:
        self.log.info("listing %s page=%s page_size=%s", self.entity_name, page, page_size)
        page, page_size = self.normalize_pagination(page, page_size)
        try:
            entities, total = await self.repository.find_all(page, page_size)
        except SQLAlchemyError:
            self.log.exception("failed to list %s", self.entity_name)
            raise
        return self.paginate(entities, total, page, page_size)

    async def update(self, id: int, request: U) -> R:
        self.log.info("updating %s id=%s", self.entity_name, id)
        entity = await self.fetch_or_not_found(id)

        self.check_shape(request, Operation.UPDATE)
        ctx = ValidationContext(operation=Operation.UPDATE, entity_id=id)
        self.check_business(
            await self.validator.validate_update(ctx, entity, request), Operation.UPDATE
        )

        self.mapper.apply_update(entity, request)
        try:
            entity = await self.repository.update(entity)
        except SQLAlchemyError:
            self.log.exception("failed to persist %s id=%s", self.entity_name, id)
            raise

        self.log.info("updated %s id=%s", self.entity_name, id)
        return self.mapper.to_response(entity)

    async def delete(self, id: int) -> None:
        self.log.info("deleting %s id=%s", self.entity_name, id)
        entity = await self.fetch_or_not_found(id)

        ctx = ValidationContext(operation=Operation.DELETE, entity_id=id)
        self.check_business(await self.validator.validate_delete(ctx, entity), Operation.DELETE)

        try:
            await self.repository.delete(id)
        except RecordNotFoundError:
            # Removed by a concurrent request between the fetch and the delete.
            self.log.warning("%s id=%s vanished before delete", self.entity_name, id)
            raise BusinessError.not_found(self.entity_name) from None
        except SQLAlchemyError:
            self.log.exception("failed to delete %s id=%s", self.entity_name, id)
            raise

        self.log.info("deleted %s id=%s", self.entity_name, id)

    # ------------------------------------------------------------------ #
    # Helpers shared with resource-specific services                       #
    # ------------------------------------------------------------------ #

    async def fetch_or_not_found(self, id: int, *relations: str) -> E:
        """Fetch by id, converting a missing record into BusinessError(NOT_FOUND).

        When relations are given they replace the repository's default preloads.
        """
        try:
            if relations:
                return await self.repository.find_by_id_with_relations(id, *relations)
            return await self.repository.find_by_id(id)
        except RecordNotFoundError:
            self.log.warning("%s id=%s not found", self.entity_name, id)
            raise BusinessError.not_found(self.entity_name) from None
        except SQLAlchemyError:
            self.log.exception("failed to fetch %s id=%s", self.entity_name, id)
            raise

    def check_shape(self, request: BaseModel, operation: Operation) -> None:
        errors = self.shape_validator.validate(request)
        if errors:
            self.log.warning(
                "shape validation failed on %s %s: %s", operation.value, self.entity_name, errors
            )
            raise ShapeValidationError(errors)

    def check_business(self, result: ValidationResult | None, operation: Operation) -> None:
        if result is not None and result.has_errors():
            self.log.warning(
                "business validation failed on %s %s: %s",
                operation.value,
                self.entity_name,
                result.errors,
            )
            raise BusinessValidationError(result.errors, code=result.code)

    def normalize_pagination(self, page: int, page_size: int) -> tuple[int, int]:
        """page < 1 -> 1; page_size < 1 -> default; page_size > max -> max."""
        if page < 1:
            page = 1
        if page_size < 1:
            page_size = self.config.default_page_size
        if page_size > self.config.max_page_size:
            page_size = self.config.max_page_size
        return page, page_size

    def paginate(
        self, entities: Sequence[Any], total: int, page: int, page_size: int
    ) -> Page[R]:
        return Page.build(
            [self.mapper.to_response(e) for e in entities], total, page, page_size
        )
