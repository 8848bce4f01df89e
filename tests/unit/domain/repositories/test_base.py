"""Tests for catalog/domain/repositories/*.py abstract interfaces."""

import pytest

from catalog.domain.repositories import CategoryRepository, ProductRepository, Repository


class _Full(Repository):
    async def create(self, entity): return entity
    async def find_by_id(self, id): return None
    async def find_by_id_with_relations(self, id, *relations): return None
    async def find_all(self, page, page_size, order_by=None): return [], 0
    async def find_all_where(self, page, page_size, order_by, *criteria): return [], 0
    async def find_one_where(self, *criteria): return None
    async def update(self, entity): return entity
    async def delete(self, id): return None
    async def exists_by_id(self, id): return False
    async def exists_where(self, *criteria): return False
    async def exists_where_excluding_id(self, id, *criteria): return False
    async def count_where(self, *criteria): return 0


def test_repository_cannot_be_instantiated_directly():
    with pytest.raises(TypeError):
        Repository()  # type: ignore[abstract]


def test_repository_concrete_subclass_must_implement_all_methods():
    class _Partial(Repository):
        async def create(self, entity): return entity
        # everything else missing

    with pytest.raises(TypeError):
        _Partial()  # type: ignore[abstract]


def test_repository_full_concrete_subclass_instantiates():
    assert _Full() is not None


def test_category_repository_requires_named_queries():
    class _Categories(_Full, CategoryRepository):
        pass

    with pytest.raises(TypeError):
        _Categories()  # type: ignore[abstract]


def test_category_repository_complete_subclass_instantiates():
    class _Categories(_Full, CategoryRepository):
        async def name_taken(self, name, exclude_id=None): return False
        async def count_products(self, category_id): return 0
        async def list_active(self, limit=1000): return []

    assert _Categories() is not None


def test_product_repository_requires_named_queries():
    class _Products(_Full, ProductRepository):
        async def code_taken(self, code, exclude_id=None): return False
        # list_by_category missing

    with pytest.raises(TypeError):
        _Products()  # type: ignore[abstract]
