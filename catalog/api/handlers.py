"""Generic HTTP handler binding CrudService operations to FastAPI routes.

CrudHandler decodes payloads (constraint failures become field details),
parses path identifiers, commits the unit of work once a mutation has
succeeded and maps every outcome to a status code:

    ValidationFailed (unclassified)      -> 400 with field details
    NOT_FOUND                            -> 404
    DUPLICATE / HAS_RELATIONS            -> 409
    FORBIDDEN                            -> 403
    any other classified BusinessError   -> 400
    anything else                        -> 500, logged, no detail echoed
"""

import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

from fastapi import APIRouter, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from catalog.domain.errors import (
    BusinessError,
    CatalogError,
    ErrorCode,
    ShapeValidationError,
    ValidationFailed,
)
from catalog.domain.models.common import ErrorResponse, MessageResponse
from catalog.domain.services.base import CrudService
from catalog.domain.services.shape import field_errors

C = TypeVar("C", bound=BaseModel)
U = TypeVar("U", bound=BaseModel)
R = TypeVar("R", bound=BaseModel)

logger = logging.getLogger(__name__)

MAX_ID = 2**32 - 1

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE: status.HTTP_409_CONFLICT,
    ErrorCode.HAS_RELATIONS: status.HTTP_409_CONFLICT,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
}

DECODE_ERROR = "Could not process request"
INVALID_ID_ERROR = "Invalid identifier"
VALIDATION_ERROR = "Validation failed"
INTERNAL_ERROR = "Internal server error"


class RequestError(CatalogError):
    """The request could not be turned into a service call (always 400)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def status_for(code: ErrorCode | None) -> int:
    if code is None:
        return status.HTTP_400_BAD_REQUEST
    return STATUS_BY_CODE.get(code, status.HTTP_400_BAD_REQUEST)


class CrudHandler(Generic[C, U, R]):
    """Create / get / list / update / delete endpoints for one resource."""

    def __init__(
        self,
        service: CrudService[Any, C, U, R],
        create_model: type[C],
        update_model: type[U],
        commit: Callable[[], Awaitable[None]] | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.service = service
        self.create_model = create_model
        self.update_model = update_model
        self._commit = commit
        self.log = log or logger
        self.success_message = f"{service.entity_name} deleted successfully"

    # ------------------------------------------------------------------ #
    # Endpoints                                                            #
    # ------------------------------------------------------------------ #

    async def create(self, request: Request) -> JSONResponse:
        try:
            payload = await self.decode(request, self.create_model)
            result = await self.service.create(payload)
            await self.commit()
        except Exception as exc:
            return self.handle_error(exc)
        return self.respond(result, status.HTTP_201_CREATED)

    async def get_by_id(self, raw_id: str) -> JSONResponse:
        try:
            result = await self.service.get_by_id(self.parse_id(raw_id))
        except Exception as exc:
            return self.handle_error(exc)
        return self.respond(result)

    async def get_all(self, request: Request) -> JSONResponse:
        try:
            page, page_size = self.pagination_params(request)
            result = await self.service.get_all(page, page_size)
        except Exception as exc:
            return self.handle_error(exc)
        return self.respond(result)

    async def update(self, raw_id: str, request: Request) -> JSONResponse:
        try:
            id = self.parse_id(raw_id)
            payload = await self.decode(request, self.update_model)
            result = await self.service.update(id, payload)
            await self.commit()
        except Exception as exc:
            return self.handle_error(exc)
        return self.respond(result)

    async def delete(self, raw_id: str) -> JSONResponse:
        try:
            await self.service.delete(self.parse_id(raw_id))
            await self.commit()
        except Exception as exc:
            return self.handle_error(exc)
        return self.respond(MessageResponse(message=self.success_message))

    # ------------------------------------------------------------------ #
    # Boundary helpers (shared with resource handlers)                     #
    # ------------------------------------------------------------------ #

    async def decode(self, request: Request, model: type[BaseModel]) -> Any:
        """Parse the JSON body into model.

        Missing fields and violated bounds raise ShapeValidationError with
        per-field details; malformed JSON or wrong value types are a generic
        RequestError.
        """
        try:
            body = await request.json()
        except ValueError as exc:
            self.log.warning("could not decode %s body: %s", self.service.entity_name, exc)
            raise RequestError(DECODE_ERROR) from exc

        try:
            return model.model_validate(body)
        except PydanticValidationError as exc:
            details = field_errors(exc)
            if details is None:
                self.log.warning("could not decode %s body: %s", self.service.entity_name, exc)
                raise RequestError(DECODE_ERROR) from exc
            self.log.warning("shape validation failed: %s", details)
            raise ShapeValidationError(details) from exc

    async def commit(self) -> None:
        if self._commit is not None:
            await self._commit()

    def parse_id(self, raw: str) -> int:
        """Unsigned 32-bit identifier from a path segment."""
        if not (raw.isascii() and raw.isdigit()) or int(raw) > MAX_ID:
            self.log.warning("invalid identifier %r", raw)
            raise RequestError(INVALID_ID_ERROR)
        return int(raw)

    def pagination_params(self, request: Request) -> tuple[int, int]:
        """page / page_size query parameters; unparsable values count as 0."""
        page = _query_int(request, "page", 1)
        page_size = _query_int(request, "page_size", self.service.config.default_page_size)
        return self.service.normalize_pagination(page, page_size)

    def respond(self, result: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content=jsonable_encoder(result, by_alias=True, exclude_none=True),
        )

    def handle_error(self, exc: Exception) -> JSONResponse:
        if isinstance(exc, RequestError):
            return self._error(status.HTTP_400_BAD_REQUEST, ErrorResponse(error=exc.message))

        if isinstance(exc, ValidationFailed):
            message = VALIDATION_ERROR if exc.code is None else exc.message
            return self._error(status_for(exc.code), ErrorResponse(error=message, details=exc.errors))

        if isinstance(exc, BusinessError):
            return self._error(status_for(exc.code), ErrorResponse(error=exc.message))

        self.log.error(
            "unhandled error in %s handler", self.service.entity_name, exc_info=exc
        )
        return self._error(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(error=INTERNAL_ERROR))

    def _error(self, status_code: int, body: ErrorResponse) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _query_int(request: Request, name: str, default: int) -> int:
    raw = request.query_params.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return 0


def register_crud_routes(router: APIRouter, get_handler: Callable[..., CrudHandler]) -> APIRouter:
    """Add POST "", GET "", GET /{id}, PUT /{id} and DELETE /{id} to router.

    Register resource-specific routes before calling this so that fixed
    paths such as /active win over /{id}.
    """

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create(request: Request, handler: CrudHandler = Depends(get_handler)) -> JSONResponse:
        return await handler.create(request)

    @router.get("")
    async def get_all(request: Request, handler: CrudHandler = Depends(get_handler)) -> JSONResponse:
        return await handler.get_all(request)

    @router.get("/{id}")
    async def get_by_id(id: str, handler: CrudHandler = Depends(get_handler)) -> JSONResponse:
        return await handler.get_by_id(id)

    @router.put("/{id}")
    async def update(
        id: str, request: Request, handler: CrudHandler = Depends(get_handler)
    ) -> JSONResponse:
        return await handler.update(id, request)

    @router.delete("/{id}")
    async def delete(id: str, handler: CrudHandler = Depends(get_handler)) -> JSONResponse:
        return await handler.delete(id)

    return router
