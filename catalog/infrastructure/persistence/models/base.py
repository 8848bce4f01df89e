"""Columns shared by every entity: identity and timestamps."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntityMixin:
    """Satisfies catalog.domain.entity.Entity for a declarative model.

    id is generated by the database on insert.  Timestamps are stamped by
    the ORM at flush time (so they are readable right after the flush) and
    updated_at is refreshed on every UPDATE; callers never assign them.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
        nullable=False,
    )
