"""Business validation contract.

Each resource supplies an EntityValidator strategy at service construction
time; resources without rules get NoOpValidator.  Validators run after shape
validation and may query repositories.  They stop at the first failing check
so each request reports one actionable error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from catalog.domain.entity import E
from catalog.domain.errors import ErrorCode

C = TypeVar("C")
U = TypeVar("U")


class Operation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ValidationContext:
    operation: Operation
    entity_id: int | None = None  # target of update / delete


@dataclass
class ValidationResult:
    """Field -> message map; any entry means failure.

    code optionally classifies the failure (e.g. DUPLICATE) so the HTTP
    boundary can answer with a more specific status than 400.
    """

    errors: dict[str, str] = field(default_factory=dict)
    code: ErrorCode | None = None

    def add_error(self, field_name: str, message: str, code: ErrorCode | None = None) -> None:
        self.errors[field_name] = message
        if code is not None and self.code is None:
            self.code = code

    def has_errors(self) -> bool:
        return bool(self.errors)

    @classmethod
    def failure(
        cls, field_name: str, message: str, code: ErrorCode | None = None
    ) -> ValidationResult:
        result = cls()
        result.add_error(field_name, message, code)
        return result


class EntityValidator(ABC, Generic[E, C, U]):
    """Business rules for one entity type, keyed by operation.

    Returning None or an empty result means the operation may proceed.
    """

    @abstractmethod
    async def validate_create(
        self, ctx: ValidationContext, request: C
    ) -> ValidationResult | None:
        """Check a create request before it is mapped to an entity."""

    @abstractmethod
    async def validate_update(
        self, ctx: ValidationContext, entity: E, request: U
    ) -> ValidationResult | None:
        """Check a patch against the stored entity it will be applied to."""

    @abstractmethod
    async def validate_delete(
        self, ctx: ValidationContext, entity: E
    ) -> ValidationResult | None:
        """Check that the stored entity may be removed."""


class NoOpValidator(EntityValidator[E, C, U]):
    """Accepts every operation."""

    async def validate_create(self, ctx, request):
        return None

    async def validate_update(self, ctx, entity, request):
        return None

    async def validate_delete(self, ctx, entity):
        return None
