"""ORM model metadata: table names, columns and constraints."""

from sqlalchemy import Numeric

from catalog.infrastructure.database import Base
from catalog.infrastructure.persistence.models import Category, EntityMixin, Product


def test_all_tables_registered():
    assert {"categories", "products"} <= set(Base.metadata.tables)


def test_models_share_entity_mixin():
    assert issubclass(Category, EntityMixin)
    assert issubclass(Product, EntityMixin)


def test_entity_columns_present():
    for table in ("categories", "products"):
        columns = Base.metadata.tables[table].c
        assert {"id", "created_at", "updated_at"} <= set(columns.keys())


def test_id_is_autoincrement_primary_key():
    id_col = Base.metadata.tables["categories"].c.id
    assert id_col.primary_key
    assert id_col.autoincrement is True


def test_category_name_unique():
    assert Base.metadata.tables["categories"].c.name.unique


def test_category_name_length():
    assert Base.metadata.tables["categories"].c.name.type.length == 100


def test_category_active_defaults_true():
    assert Base.metadata.tables["categories"].c.active.default.arg is True


def test_product_code_unique():
    assert Base.metadata.tables["products"].c.code.unique


def test_product_price_is_two_place_numeric():
    price = Base.metadata.tables["products"].c.price.type
    assert isinstance(price, Numeric)
    assert (price.precision, price.scale) == (10, 2)


def test_product_category_fk():
    fks = Base.metadata.tables["products"].c.category_id.foreign_keys
    assert {fk.target_fullname for fk in fks} == {"categories.id"}


def test_product_category_id_indexed():
    assert Base.metadata.tables["products"].c.category_id.index


def test_updated_at_has_onupdate():
    assert Base.metadata.tables["products"].c.updated_at.onupdate is not None


def test_category_repr():
    assert repr(Category(id=3, name="Books")) == "Category(id=3, name='Books')"
