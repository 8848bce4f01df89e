"""Tests for CategoryValidator and CategoryService."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog.domain.errors import (
    BusinessError,
    BusinessValidationError,
    ErrorCode,
    RecordNotFoundError,
)
from catalog.domain.models import CategoryCreate, CategoryUpdate
from catalog.domain.services.categories import CategoryService, CategoryValidator
from catalog.domain.services.validation import Operation, ValidationContext
from catalog.infrastructure.persistence.mappers import CategoryMapper


def _category(**overrides):
    defaults = dict(
        id=1, name="Books", description="Paper", active=True,
        created_at=None, updated_at=None, products=[],
    )
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _repo(name_taken=False, count_products=0):
    repo = AsyncMock()
    repo.name_taken.return_value = name_taken
    repo.count_products.return_value = count_products
    return repo


CREATE = ValidationContext(operation=Operation.CREATE)
UPDATE = ValidationContext(operation=Operation.UPDATE, entity_id=1)
DELETE = ValidationContext(operation=Operation.DELETE, entity_id=1)


# --- CategoryValidator.validate_create ---

async def test_create_requires_name():
    result = await CategoryValidator(_repo()).validate_create(
        CREATE, CategoryCreate.model_construct(name="", description="", active=None)
    )
    assert result.errors == {"nome": "Category name is required"}


async def test_create_rejects_short_name():
    result = await CategoryValidator(_repo()).validate_create(
        CREATE, CategoryCreate.model_construct(name="A", description="", active=None)
    )
    assert result.errors == {"nome": "Name must have at least 2 characters"}
    assert result.code is None


async def test_create_rejects_duplicate_name():
    repo = _repo(name_taken=True)
    result = await CategoryValidator(repo).validate_create(CREATE, CategoryCreate(name="Books"))
    assert result.code is ErrorCode.DUPLICATE
    repo.name_taken.assert_awaited_once_with("Books")


async def test_create_accepts_unique_name():
    result = await CategoryValidator(_repo()).validate_create(CREATE, CategoryCreate(name="Books"))
    assert not result.has_errors()


# --- CategoryValidator.validate_update ---

async def test_update_unchanged_name_skips_uniqueness_check():
    repo = _repo(name_taken=True)
    result = await CategoryValidator(repo).validate_update(
        UPDATE, _category(), CategoryUpdate(name="Books")
    )
    assert not result.has_errors()
    repo.name_taken.assert_not_awaited()


async def test_update_empty_name_skips_checks():
    repo = _repo()
    result = await CategoryValidator(repo).validate_update(UPDATE, _category(), CategoryUpdate())
    assert not result.has_errors()
    repo.name_taken.assert_not_awaited()


async def test_update_duplicate_name_excludes_self():
    repo = _repo(name_taken=True)
    result = await CategoryValidator(repo).validate_update(
        UPDATE, _category(), CategoryUpdate(name="Music")
    )
    assert result.code is ErrorCode.DUPLICATE
    repo.name_taken.assert_awaited_once_with("Music", exclude_id=1)


async def test_update_short_name_rejected():
    result = await CategoryValidator(_repo()).validate_update(
        UPDATE, _category(), CategoryUpdate.model_construct(name="M")
    )
    assert result.errors == {"nome": "Name must have at least 2 characters"}


# --- CategoryValidator.validate_delete ---

async def test_delete_blocked_while_products_reference_category():
    result = await CategoryValidator(_repo(count_products=3)).validate_delete(DELETE, _category())
    assert result.code is ErrorCode.HAS_RELATIONS
    assert "categoria" in result.errors


async def test_delete_allowed_without_products():
    result = await CategoryValidator(_repo()).validate_delete(DELETE, _category())
    assert not result.has_errors()


# --- CategoryService ---

def _service(repo):
    return CategoryService(repo, CategoryMapper(), log=MagicMock())


def test_service_default_entity_name():
    assert _service(_repo()).entity_name == "Category"


async def test_service_delete_with_products_raises_has_relations():
    repo = _repo(count_products=1)
    repo.find_by_id.return_value = _category()
    with pytest.raises(BusinessValidationError) as exc_info:
        await _service(repo).delete(1)
    assert exc_info.value.code is ErrorCode.HAS_RELATIONS
    repo.delete.assert_not_awaited()


async def test_get_with_products_loads_products_relation():
    repo = _repo()
    product = SimpleNamespace(id=4, code="B1", description="Novel", price=12.5)
    repo.find_by_id_with_relations.return_value = _category(products=[product])
    result = await _service(repo).get_with_products(1)
    repo.find_by_id_with_relations.assert_awaited_once_with(1, "products")
    assert [p.code for p in result.products] == ["B1"]
    assert result.name == "Books"


async def test_get_with_products_missing_raises_not_found():
    repo = _repo()
    repo.find_by_id_with_relations.side_effect = RecordNotFoundError("categories", 1)
    with pytest.raises(BusinessError) as exc_info:
        await _service(repo).get_with_products(1)
    assert exc_info.value.message == "Category not found"


async def test_list_active_maps_every_category():
    repo = _repo()
    repo.list_active.return_value = [_category(id=1), _category(id=2, name="Music")]
    result = await _service(repo).list_active()
    assert [c.name for c in result] == ["Books", "Music"]
