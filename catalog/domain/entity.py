"""Entity contract shared by every persisted record type.

The generic repository, service and mappers only rely on these members;
concrete ORM classes satisfy the protocol through EntityMixin.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Protocol, TypeVar


class Entity(Protocol):
    """Identity, timestamps and storage name of a persisted record.

    id is assigned by the storage layer on insert and never changes.
    created_at / updated_at are stamped by the persistence layer; callers
    never set them directly.
    """

    __tablename__: ClassVar[str]

    id: int
    created_at: datetime
    updated_at: datetime


E = TypeVar("E", bound=Entity)
