"""Product ORM model."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.infrastructure.database import Base

from .base import EntityMixin


class Product(EntityMixin, Base):
    """Sellable product; belongs to exactly one category."""

    __tablename__ = "products"

    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    # Stored as DECIMAL(10, 2), handled as float in Python.
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id"), nullable=False, index=True
    )

    category: Mapped["Category"] = relationship(back_populates="products")

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, code={self.code!r})"
