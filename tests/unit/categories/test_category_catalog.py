from __future__ import annotations

from result import is_err, is_ok

from tidytop.categories import Category, CategoryCatalog
from tidytop.registry import DuplicateKeyError, NotFoundError


def test_catalog_orders_system_before_user_categories() -> None:
    catalog = CategoryCatalog([Category(id="mine", name="Mine", is_system=True)])

    ids = [category.id for category in catalog.categories()]

    assert ids[0] == "office-tools"
    assert ids[-1] == "mine"
    assert not catalog.get("mine").unwrap().is_system


def test_user_category_cannot_shadow_system_category() -> None:
    catalog = CategoryCatalog()

    result = catalog.add_user_category(Category(id="games"))

    assert is_err(result)
    assert isinstance(result.unwrap_err(), DuplicateKeyError)


def test_only_user_categories_can_be_removed() -> None:
    catalog = CategoryCatalog([Category(id="mine")])

    assert is_err(catalog.remove_user_category("games"))
    assert is_ok(catalog.remove_user_category("mine"))
    missing = catalog.get("mine")
    assert is_err(missing)
    assert isinstance(missing.unwrap_err(), NotFoundError)


def test_catalog_without_system_categories() -> None:
    catalog = CategoryCatalog([Category(id="only")], include_system=False)

    assert [category.id for category in catalog.categories()] == ["only"]
