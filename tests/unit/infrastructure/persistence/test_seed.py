"""Tests for the default category seed."""

from unittest.mock import AsyncMock, MagicMock

from catalog.infrastructure.persistence.models import Category
from catalog.infrastructure.seed import DEFAULT_CATEGORY_NAME, seed_default_category


def _session(exists):
    session = AsyncMock()
    session.add = MagicMock()
    result = MagicMock()
    result.scalar.return_value = exists
    session.execute.return_value = result
    return session


async def test_seed_creates_default_category():
    session = _session(exists=False)
    category = await seed_default_category(session)
    assert isinstance(category, Category)
    assert category.name == DEFAULT_CATEGORY_NAME == "Geral"
    assert category.active is True
    session.add.assert_called_once_with(category)
    session.flush.assert_awaited_once()


async def test_seed_is_idempotent():
    session = _session(exists=True)
    assert await seed_default_category(session) is None
    session.add.assert_not_called()
