"""Tests for CategoryService against in-memory repositories."""

import pytest
from ulid import ULID

from household_budget.domain import CLEAR, CategoryName, Set
from household_budget.domain.errors import CategoryNameAlreadyExists, CategoryNotFound


class TestCreateCategory:
    def test_create_with_label(self, category_service) -> None:
        category = category_service.create(CategoryName("utils/electricity"), "Electricity")
        assert category.name == CategoryName("utils/electricity")
        assert category.label == "Electricity"
        assert category.created_at == category.updated_at

    def test_blank_label_is_stored_as_none(self, category_service) -> None:
        """Whitespace-only labels mean no label."""
        category = category_service.create(CategoryName("food"), "   ")
        assert category.label is None

    def test_label_is_trimmed(self, category_service) -> None:
        category = category_service.create(CategoryName("food"), "  Groceries ")
        assert category.label == "Groceries"

    def test_duplicate_name(self, category_service) -> None:
        category_service.create(CategoryName("food"))
        with pytest.raises(CategoryNameAlreadyExists) as exc_info:
            category_service.create(CategoryName("food"))
        assert exc_info.value.details == {"name": "food"}

    def test_names_are_case_sensitive(self, category_service) -> None:
        category_service.create(CategoryName("food"))
        category = category_service.create(CategoryName("Food"))
        assert category.name.value == "Food"


class TestListCategories:
    def test_sorted_by_name(self, category_service) -> None:
        for name in ["utils", "car", "food"]:
            category_service.create(CategoryName(name))
        names = [c.name.value for c in category_service.list_all()]
        assert names == ["car", "food", "utils"]


class TestUpdateCategory:
    def test_rename(self, category_service) -> None:
        category = category_service.create(CategoryName("food"))
        renamed = category_service.rename(category.id, CategoryName("groceries"))
        assert renamed.name == CategoryName("groceries")

    def test_rename_collision(self, category_service) -> None:
        category_service.create(CategoryName("food"))
        other = category_service.create(CategoryName("car"))
        with pytest.raises(CategoryNameAlreadyExists):
            category_service.update(other.id, name=CategoryName("food"))

    def test_rename_to_own_name(self, category_service) -> None:
        category = category_service.create(CategoryName("food"))
        updated = category_service.update(category.id, name=CategoryName("food"))
        assert updated.name == CategoryName("food")

    def test_label_keep_clear_set(self, category_service) -> None:
        """Label updates are three-state."""
        category = category_service.create(CategoryName("food"), "Groceries")

        kept = category_service.update(category.id, name=CategoryName("eating"))
        assert kept.label == "Groceries"

        changed = category_service.update(category.id, label=Set("Supermarket"))
        assert changed.label == "Supermarket"
        assert changed.name == CategoryName("eating")

        cleared = category_service.update(category.id, label=CLEAR)
        assert cleared.label is None

    def test_set_blank_label_clears(self, category_service) -> None:
        category = category_service.create(CategoryName("food"), "Groceries")
        updated = category_service.update(category.id, label=Set("  "))
        assert updated.label is None

    def test_unknown_id(self, category_service) -> None:
        with pytest.raises(CategoryNotFound):
            category_service.update(ULID(), name=CategoryName("food"))

    def test_find_unknown_id(self, category_service) -> None:
        with pytest.raises(CategoryNotFound):
            category_service.find_by_id(ULID())
