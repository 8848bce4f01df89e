"""Error taxonomy for the catalog domain.

Layers never swallow errors: the repository raises RecordNotFoundError,
the service re-classifies it as a BusinessError(NOT_FOUND), and the HTTP
boundary maps classifications to status codes.  Storage failures
(sqlalchemy.exc.SQLAlchemyError) are not wrapped and surface as 500s.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE = "DUPLICATE"
    FORBIDDEN = "FORBIDDEN"
    HAS_RELATIONS = "HAS_RELATIONS"
    INACTIVE = "INACTIVE"


class CatalogError(Exception):
    """Root of every error raised deliberately by this package."""


class RecordNotFoundError(CatalogError):
    """A lookup or delete matched zero rows."""

    def __init__(self, table: str, entity_id: int | None = None) -> None:
        self.table = table
        self.entity_id = entity_id
        if entity_id is None:
            super().__init__(f"no matching record in {table}")
        else:
            super().__init__(f"record {entity_id} not found in {table}")


class BusinessError(CatalogError):
    """A classified business failure; code drives the HTTP status."""

    def __init__(
        self, code: ErrorCode | str, message: str, field: str | None = None
    ) -> None:
        self.code = ErrorCode(code)
        self.message = message
        self.field = field
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.field:
            return f"[{self.code.value}] {self.field}: {self.message}"
        return f"[{self.code.value}] {self.message}"

    @classmethod
    def not_found(cls, entity_name: str) -> BusinessError:
        return cls(ErrorCode.NOT_FOUND, f"{entity_name} not found")


class ValidationFailed(CatalogError):
    """Field-level validation failure carrying a field -> message map."""

    def __init__(
        self, errors: dict[str, str], code: ErrorCode | None = None
    ) -> None:
        self.errors = dict(errors)
        self.code = code
        super().__init__(self.message)

    @property
    def message(self) -> str:
        """The first field message, or a generic text when the map is empty."""
        return next(iter(self.errors.values()), "validation failed")


class ShapeValidationError(ValidationFailed):
    """Declarative field constraints rejected the request payload."""


class BusinessValidationError(ValidationFailed):
    """An entity-specific business rule rejected the operation."""
