"""Wire envelopes shared by every resource: pagination, errors, messages."""

from __future__ import annotations

import math
from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, ValidatorFunctionWrapHandler, WrapValidator

T = TypeVar("T")


def _omit_empty(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    # "" and 0 mean "field not supplied" on sparse patches; skip its constraints.
    if (value == "" or value == 0) and not isinstance(value, bool):
        return value
    return handler(value)


OmitEmpty = WrapValidator(_omit_empty)


class Page(BaseModel, Generic[T]):
    """One page of results plus the counts needed to walk the rest.

    total_pages is ceil(total / page_size): 0 only when total is 0, and 1
    whenever there are some records but fewer than one full page.
    """

    data: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    @staticmethod
    def count_pages(total: int, page_size: int) -> int:
        if total <= 0 or page_size <= 0:
            return 0
        return math.ceil(total / page_size)

    @classmethod
    def build(cls, data: Sequence[T], total: int, page: int, page_size: int) -> Page[T]:
        return cls(
            data=list(data),
            total=total,
            page=page,
            page_size=page_size,
            total_pages=cls.count_pages(total, page_size),
        )


class ErrorResponse(BaseModel):
    """Body of every non-2xx response; details is omitted when empty."""

    model_config = ConfigDict(frozen=True)

    error: str
    details: dict[str, str] | None = None


class MessageResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
