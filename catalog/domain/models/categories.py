"""Category request and response models.

Wire names follow the public API (nome, descricao, ativo, produtos); Python
code uses the English attribute names.  Update requests double as sparse
patches: an empty string means "leave unchanged", ativo=None likewise.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from annotated_types import MaxLen, MinLen
from pydantic import BaseModel, ConfigDict, Field

from .common import OmitEmpty


class CategoryCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Annotated[str, MinLen(2), MaxLen(100)] = Field(alias="nome")
    description: Annotated[str, MaxLen(255)] = Field("", alias="descricao")
    active: bool | None = Field(None, alias="ativo")


class CategoryUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Annotated[str, MinLen(2), MaxLen(100), OmitEmpty] = Field("", alias="nome")
    description: Annotated[str, MaxLen(255)] = Field("", alias="descricao")
    active: bool | None = Field(None, alias="ativo")


class CategoryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(alias="nome")
    description: str = Field("", alias="descricao")
    active: bool = Field(alias="ativo")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductSummary(BaseModel):
    """Product without its nested category, used inside CategoryWithProducts."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    code: str = Field(alias="codigo")
    description: str = Field(alias="descricao")
    price: float = Field(alias="preco")


class CategoryWithProducts(CategoryResponse):
    products: list[ProductSummary] = Field(default_factory=list, alias="produtos")
