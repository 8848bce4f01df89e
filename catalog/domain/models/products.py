"""Product request and response models."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from annotated_types import Gt, Lt, MaxLen, MinLen
from pydantic import BaseModel, ConfigDict, Field

from .categories import CategoryResponse
from .common import OmitEmpty

# products.price is NUMERIC(10, 2)
MAX_PRICE = 100_000_000


class ProductCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: Annotated[str, MinLen(1), MaxLen(50)] = Field(alias="codigo")
    description: Annotated[str, MinLen(3), MaxLen(255)] = Field(alias="descricao")
    price: Annotated[float, Gt(0), Lt(MAX_PRICE)] = Field(alias="preco")
    category_id: Annotated[int, Gt(0)] = Field(alias="categoria_id")


class ProductUpdate(BaseModel):
    """Sparse patch: empty code/description and zero price/category_id are ignored."""

    model_config = ConfigDict(populate_by_name=True)

    code: Annotated[str, MinLen(1), MaxLen(50), OmitEmpty] = Field("", alias="codigo")
    description: Annotated[str, MinLen(3), MaxLen(255), OmitEmpty] = Field(
        "", alias="descricao"
    )
    price: Annotated[float, Gt(0), Lt(MAX_PRICE), OmitEmpty] = Field(0.0, alias="preco")
    category_id: Annotated[int, Gt(0), OmitEmpty] = Field(0, alias="categoria_id")


class ProductResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    code: str = Field(alias="codigo")
    description: str = Field(alias="descricao")
    price: float = Field(alias="preco")
    category_id: int = Field(alias="categoria_id")
    # Present only when the category relation was loaded with the product.
    category: CategoryResponse | None = Field(None, alias="categoria")
    created_at: datetime | None = None
    updated_at: datetime | None = None
