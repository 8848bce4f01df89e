"""Category ORM model."""

from __future__ import annotations

from sqlalchemy import Boolean, String, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.infrastructure.database import Base

from .base import EntityMixin


class Category(EntityMixin, Base):
    """Product category.

    name is unique.  A category referenced by any product cannot be deleted;
    that rule is enforced by CategoryValidator before the FK constraint would.
    """

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    products: Mapped[list["Product"]] = relationship(back_populates="category")

    def __repr__(self) -> str:
        return f"Category(id={self.id!r}, name={self.name!r})"
