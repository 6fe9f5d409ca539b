"""Tests for the shopping list synchronizer agent."""

from __future__ import annotations

from galley.agents.shopping_synchronizer import add_recommendation_to_shopping_list
from galley.models.grocery import GroceryItem, GroceryList


def test_creates_shopping_list_when_none_exist(sample_recommendation):
    result = add_recommendation_to_shopping_list(sample_recommendation, [], 5)

    assert result.action == "created"
    assert result.list.id is None
    assert result.list.user_id == 5
    assert result.list.title == "Shopping"
    assert result.list.completed is False
    item = result.list.items[0]
    assert item.name == "Dutch Oven"
    assert item.quantity == "1"
    assert item.category == "Kitchen Equipment"
    assert item.estimated_price == "$70-200"
    assert item.priority == "medium"
    assert item.completed is False
    assert item.id


def test_adds_to_existing_list(sample_recommendation):
    lists = [
        GroceryList(
            id=3,
            user_id=1,
            title="Weekly",
            items=[GroceryItem(name="Milk", category="Dairy")],
        )
    ]

    result = add_recommendation_to_shopping_list(sample_recommendation, lists, 1)

    assert result.action == "added"
    assert result.list.id == 3
    assert result.list.title == "Weekly"
    assert [item.name for item in result.list.items] == ["Milk", "Dutch Oven"]
    assert len(lists[0].items) == 1


def test_prefers_list_titled_shopping(sample_recommendation):
    lists = [
        GroceryList(id=1, user_id=1, title="Party", items=[]),
        GroceryList(id=2, user_id=1, title="Shopping", items=[]),
    ]

    result = add_recommendation_to_shopping_list(sample_recommendation, lists, 1)

    assert result.action == "added"
    assert result.list.id == 2


def test_duplicate_is_case_insensitive(sample_recommendation):
    existing = GroceryItem(name="dutch oven", category="Kitchen Equipment")
    lists = [GroceryList(id=1, user_id=1, title="Shopping", items=[existing])]

    result = add_recommendation_to_shopping_list(sample_recommendation, lists, 1)

    assert result.action == "duplicate"
    assert result.list == lists[0]


def test_same_name_in_other_category_is_not_duplicate(sample_recommendation):
    existing = GroceryItem(name="Dutch Oven", category="Bakery")
    lists = [GroceryList(id=1, user_id=1, title="Shopping", items=[existing])]

    result = add_recommendation_to_shopping_list(sample_recommendation, lists, 1)

    assert result.action == "added"
    assert len(result.list.items) == 2


def test_repeat_add_is_duplicate(sample_recommendation):
    first = add_recommendation_to_shopping_list(sample_recommendation, [], 1)
    stored = first.list.model_copy(update={"id": 9})

    second = add_recommendation_to_shopping_list(sample_recommendation, [stored], 1)

    assert second.action == "duplicate"
    assert len(second.list.items) == 1


def test_accepts_raw_list_payloads(sample_recommendation):
    lists = [
        {"id": 4, "userId": 1, "title": "Shopping", "items": [{"name": "Eggs"}]},
        {"id": 5, "title": "Broken", "items": None},
    ]

    result = add_recommendation_to_shopping_list(sample_recommendation, lists, 1)

    assert result.action == "added"
    assert result.list.id == 4


def test_non_list_input_creates_new_list(sample_recommendation):
    result = add_recommendation_to_shopping_list(sample_recommendation, None, 1)

    assert result.action == "created"


def test_defaults_for_sparse_recommendation():
    result = add_recommendation_to_shopping_list({"name": "Wok"}, [], 1)

    item = result.list.items[0]
    assert item.priority == "medium"
    assert item.estimated_price == ""
    assert item.description == "Recommended kitchen equipment"


def test_odd_item_does_not_hide_shopping_list():
    lists = [
        {
            "id": 4,
            "userId": 1,
            "title": "Shopping",
            "items": [
                {"id": "a", "name": "Kitchen Scale", "category": "Kitchen Equipment", "quantity": "1"},
                {"id": "b", "name": "Eggs", "quantity": 12},
                {"quantity": 2},
            ],
        }
    ]

    result = add_recommendation_to_shopping_list({"name": "Kitchen Scale"}, lists, 1)

    assert result.action == "duplicate"
    assert result.list.id == 4


def test_odd_items_are_kept_when_adding(sample_recommendation):
    lists = [
        {"id": 4, "userId": 1, "title": "Shopping", "items": [{"id": 7, "name": "Eggs", "quantity": 12}]}
    ]

    result = add_recommendation_to_shopping_list(sample_recommendation, lists, 1)

    assert result.action == "added"
    assert result.list.id == 4
    eggs, dutch_oven = result.list.items
    assert (eggs.id, eggs.name, eggs.quantity) == ("7", "Eggs", "12")
    assert dutch_oven.name == "Dutch Oven"


def test_untitled_list_does_not_outrank_shopping_list(sample_recommendation):
    lists = [{"id": 1, "items": []}, {"id": 2, "title": "Shopping", "items": []}]

    result = add_recommendation_to_shopping_list(sample_recommendation, lists, 1)

    assert result.action == "added"
    assert result.list.id == 2


def test_added_keeps_untitled_list_untitled(sample_recommendation):
    result = add_recommendation_to_shopping_list(
        sample_recommendation, [{"id": 1, "userId": 1, "items": []}], 1
    )

    assert result.action == "added"
    assert result.list.id == 1
    assert result.list.title is None


def test_first_of_several_shopping_lists_wins(sample_recommendation):
    lists = [
        GroceryList(id=1, user_id=1, title="Party", items=[]),
        GroceryList(id=2, user_id=1, title="Shopping", items=[]),
        GroceryList(id=3, user_id=1, title="Shopping", items=[]),
    ]

    result = add_recommendation_to_shopping_list(sample_recommendation, lists, 1)

    assert result.action == "added"
    assert result.list.id == 2
