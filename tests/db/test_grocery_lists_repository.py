"""Unit tests for the grocery list repository helpers."""

from __future__ import annotations

import pytest

from galley.db.grocery_lists import (
    delete_grocery_list,
    get_grocery_list,
    get_grocery_lists,
    save_grocery_list,
)
from galley.models.grocery import GroceryItem, GroceryList


def test_save_inserts_then_updates():
    created = save_grocery_list(
        GroceryList(
            user_id=1,
            title="Shopping",
            items=[GroceryItem(name="Wok", estimated_price="$40")],
        )
    )
    assert created.id is not None
    assert created.title == "Shopping"
    assert created.items[0].estimated_price == "$40"

    extended = created.model_copy(
        update={"items": [*created.items, GroceryItem(name="Whisk")], "completed": True}
    )
    saved = save_grocery_list(extended)

    assert saved.id == created.id
    assert [item.name for item in saved.items] == ["Wok", "Whisk"]
    assert saved.items[0].id == created.items[0].id
    assert get_grocery_list(created.id).completed is True


def test_lists_are_scoped_per_user():
    save_grocery_list(GroceryList(user_id=1, title="Shopping"))
    save_grocery_list(GroceryList(user_id=1, title="Party"))
    save_grocery_list(GroceryList(user_id=2, title="Shopping"))

    assert [g.title for g in get_grocery_lists(1)] == ["Shopping", "Party"]
    assert len(get_grocery_lists(2)) == 1


def test_save_requires_owner_and_existing_row():
    with pytest.raises(ValueError):
        save_grocery_list(GroceryList(title="Orphan"))
    with pytest.raises(ValueError):
        save_grocery_list(GroceryList(id=404, user_id=1))


def test_delete_grocery_list():
    saved = save_grocery_list(GroceryList(user_id=1))

    delete_grocery_list(saved.id)

    assert get_grocery_list(saved.id) is None
    with pytest.raises(ValueError):
        delete_grocery_list(saved.id)


def test_untitled_list_stays_untitled():
    saved = save_grocery_list(GroceryList(user_id=1, items=[GroceryItem(name="Eggs")]))

    assert get_grocery_list(saved.id).title is None
