"""Tests for SqlRepository: statement construction and session interaction."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog.domain.errors import RecordNotFoundError
from catalog.infrastructure.persistence.models import Category, Product
from catalog.infrastructure.persistence.repositories import (
    SqlCategoryRepository,
    SqlProductRepository,
    SqlRepository,
)


def _sql(stmt) -> str:
    return str(stmt.compile(compile_kwargs={"literal_binds": True}))


def _result(first=None, scalar=None, scalar_one=None, rows=(), rowcount=1):
    result = MagicMock()
    result.scalars.return_value.first.return_value = first
    result.scalars.return_value.all.return_value = list(rows)
    result.scalar.return_value = scalar
    result.scalar_one.return_value = scalar_one
    result.rowcount = rowcount
    return result


def _session(*results):
    session = AsyncMock()
    session.add = MagicMock()
    session.execute.side_effect = list(results)
    return session


def _executed(session, index=0) -> str:
    return _sql(session.execute.await_args_list[index].args[0])


# --- create / update ---

async def test_create_adds_and_flushes():
    session = _session()
    entity = SimpleNamespace(id=None)
    assert await SqlRepository(session, Category).create(entity) is entity
    session.add.assert_called_once_with(entity)
    session.flush.assert_awaited_once()


async def test_update_flushes():
    session = _session()
    entity = SimpleNamespace(id=1)
    await SqlRepository(session, Category).update(entity)
    session.flush.assert_awaited_once()


# --- find ---

async def test_find_by_id_returns_entity():
    row = SimpleNamespace(id=3)
    session = _session(_result(first=row))
    assert await SqlRepository(session, Category).find_by_id(3) is row
    sql = _executed(session)
    assert "categories.id = 3" in sql
    assert "LIMIT 1" in sql


async def test_find_by_id_missing_raises_with_id():
    session = _session(_result(first=None))
    with pytest.raises(RecordNotFoundError) as exc_info:
        await SqlRepository(session, Category).find_by_id(3)
    assert exc_info.value.entity_id == 3
    assert exc_info.value.table == "categories"


async def test_find_by_id_with_relations_missing_raises():
    session = _session(_result(first=None))
    with pytest.raises(RecordNotFoundError):
        await SqlRepository(session, Category).find_by_id_with_relations(3, "products")


async def test_find_one_where_missing_raises_without_id():
    session = _session(_result(first=None))
    with pytest.raises(RecordNotFoundError) as exc_info:
        await SqlRepository(session, Product).find_one_where(Product.code == "X")
    assert exc_info.value.entity_id is None


async def test_find_all_counts_then_pages():
    rows = [SimpleNamespace(id=11), SimpleNamespace(id=12)]
    session = _session(_result(scalar_one=25), _result(rows=rows))
    items, total = await SqlRepository(session, Product).find_all(2, 10)
    assert (items, total) == (rows, 25)
    assert "count(*)" in _executed(session, 0)
    page_sql = _executed(session, 1)
    assert "LIMIT 10 OFFSET 10" in page_sql
    assert "ORDER BY products.id ASC" in page_sql


async def test_find_all_first_page_uses_page_size():
    session = _session(_result(scalar_one=0), _result(rows=[]))
    await SqlRepository(session, Product).find_all(1, 5)
    assert "LIMIT 5" in _executed(session, 1)


async def test_find_all_explicit_order_overrides_default():
    session = _session(_result(scalar_one=0), _result(rows=[]))
    await SqlCategoryRepository(session).find_all(1, 5, [Category.id.desc()])
    assert "ORDER BY categories.id DESC" in _executed(session, 1)


async def test_category_default_order_is_name():
    session = _session(_result(scalar_one=0), _result(rows=[]))
    await SqlCategoryRepository(session).find_all(1, 5)
    assert "ORDER BY categories.name ASC" in _executed(session, 1)


async def test_find_all_where_filters_count_and_page():
    session = _session(_result(scalar_one=1), _result(rows=[]))
    await SqlRepository(session, Product).find_all_where(1, 10, None, Product.category_id == 4)
    assert "products.category_id = 4" in _executed(session, 0)
    assert "products.category_id = 4" in _executed(session, 1)


def test_with_preloads_and_default_order_chain():
    repo = SqlRepository(AsyncMock(), Product)
    assert repo.with_preloads("category").with_default_order(Product.code.asc()) is repo
    assert repo.preloads == ("category",)


def test_product_repository_preloads_category():
    assert SqlProductRepository(AsyncMock()).preloads == ("category",)


async def test_default_order_set_after_construction_applies_to_pages():
    session = _session(_result(scalar_one=0), _result(rows=[]))
    repo = SqlRepository(session, Product).with_default_order(Product.code.desc())
    await repo.find_all(1, 5)
    assert "ORDER BY products.code DESC" in _executed(session, 1)


# --- delete ---

async def test_delete_by_id():
    session = _session(_result(rowcount=1))
    await SqlRepository(session, Product).delete(5)
    sql = _executed(session)
    assert sql.startswith("DELETE FROM products")
    assert "products.id = 5" in sql


async def test_delete_zero_rows_raises():
    session = _session(_result(rowcount=0))
    with pytest.raises(RecordNotFoundError) as exc_info:
        await SqlRepository(session, Product).delete(5)
    assert exc_info.value.entity_id == 5


# --- existence and counts ---

async def test_exists_by_id():
    session = _session(_result(scalar=True))
    assert await SqlRepository(session, Category).exists_by_id(2) is True
    assert "EXISTS" in _executed(session)


async def test_exists_where_false_when_none():
    session = _session(_result(scalar=None))
    assert await SqlRepository(session, Category).exists_where(Category.name == "x") is False


async def test_exists_where_excluding_id_appends_id_filter():
    session = _session(_result(scalar=False))
    await SqlRepository(session, Category).exists_where_excluding_id(3, Category.name == "Books")
    sql = _executed(session)
    assert "categories.name = 'Books'" in sql
    assert "categories.id != 3" in sql


async def test_count_where():
    session = _session(_result(scalar_one=4))
    assert await SqlRepository(session, Product).count_where(Product.category_id == 1) == 4


# --- resource queries ---

async def test_name_taken_without_exclusion():
    session = _session(_result(scalar=True))
    assert await SqlCategoryRepository(session).name_taken("Books") is True
    assert "categories.id !=" not in _executed(session)


async def test_name_taken_with_exclusion():
    session = _session(_result(scalar=False))
    await SqlCategoryRepository(session).name_taken("Books", exclude_id=2)
    assert "categories.id != 2" in _executed(session)


async def test_count_products_counts_product_rows():
    session = _session(_result(scalar_one=3))
    assert await SqlCategoryRepository(session).count_products(1) == 3
    sql = _executed(session)
    assert "FROM products" in sql
    assert "products.category_id = 1" in sql


async def test_list_active_filters_active():
    rows = [SimpleNamespace(id=1)]
    session = _session(_result(scalar_one=1), _result(rows=rows))
    assert await SqlCategoryRepository(session).list_active() == rows
    assert "categories.active IS" in _executed(session, 1)


async def test_code_taken_with_exclusion():
    session = _session(_result(scalar=True))
    assert await SqlProductRepository(session).code_taken("P1", exclude_id=9) is True
    sql = _executed(session)
    assert "products.code = 'P1'" in sql
    assert "products.id != 9" in sql


async def test_list_by_category_filters_category():
    session = _session(_result(scalar_one=0), _result(rows=[]))
    items, total = await SqlProductRepository(session).list_by_category(4, 2, 3)
    assert (items, total) == ([], 0)
    assert "products.category_id = 4" in _executed(session, 1)
    assert "LIMIT 3 OFFSET 3" in _executed(session, 1)
