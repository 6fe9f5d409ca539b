"""Tests for the analysis service orchestrating advisor runs."""

from __future__ import annotations

from datetime import date
from typing import Dict, List

import pytest

from galley.agents import compute_id
from galley.analysis import KitchenAnalysisService
from galley.cache import RECOMMENDATIONS_KEY, InMemoryAnalysisCache, user_key
from galley.llm.interface import AdvisorError
from galley.models.equipment import Equipment
from galley.models.grocery import GroceryList


class FakeAdvisor:
    def __init__(self, schedule=None, recommendations=None):
        self.schedule = schedule if schedule is not None else []
        self.recommendations = recommendations if recommendations is not None else []
        self.calls: list[tuple] = []

    def generate_maintenance_schedule(self, equipment, preferences):
        self.calls.append(("maintenance", len(equipment), tuple(preferences)))
        if isinstance(self.schedule, Exception):
            raise self.schedule
        return self.schedule

    def generate_equipment_recommendations(self, equipment, preferences, budget=None):
        self.calls.append(("recommendations", len(equipment), tuple(preferences), budget))
        if isinstance(self.recommendations, Exception):
            raise self.recommendations
        return self.recommendations


class Store:
    def __init__(self, equipment: List[Equipment]):
        self.equipment: Dict[int, Equipment] = {item.id: item for item in equipment}
        self.lists: List[GroceryList] = []

    def get_equipment(self, user_id: int) -> List[Equipment]:
        return list(self.equipment.values())

    def update_equipment(self, equipment_id: int, payload: dict) -> Equipment:
        updated = self.equipment[equipment_id].model_copy(update=payload)
        self.equipment[equipment_id] = updated
        return updated

    def get_grocery_lists(self, user_id: int) -> List[GroceryList]:
        return list(self.lists)

    def save_grocery_list(self, grocery_list: GroceryList) -> GroceryList:
        if grocery_list.id is None:
            grocery_list = grocery_list.model_copy(update={"id": len(self.lists) + 1})
            self.lists.append(grocery_list)
        else:
            self.lists = [grocery_list if g.id == grocery_list.id else g for g in self.lists]
        return grocery_list


SCHEDULE = [
    {"equipmentId": 1, "nextMaintenanceDate": "2024-03-01"},
    {"equipmentId": 3, "nextMaintenanceDate": "2024-01-01"},
    {"equipmentId": 2, "nextMaintenanceDate": "2024-02-01"},
]
RECOMMENDATIONS = [
    {"name": "Dutch Oven", "category": "Cookware", "estimatedPrice": "$70-200"},
    {"name": "Wok", "category": "Cookware"},
]


@pytest.fixture()
def store(kitchen) -> Store:
    return Store(kitchen)


def build_service(store: Store, advisor: FakeAdvisor, cache=None) -> KitchenAnalysisService:
    return KitchenAnalysisService(
        advisor=advisor,
        cache=cache or InMemoryAnalysisCache(),
        equipment_provider=store.get_equipment,
        equipment_updater=store.update_equipment,
        grocery_list_provider=store.get_grocery_lists,
        grocery_list_saver=store.save_grocery_list,
    )


def test_run_analysis_reconciles_and_caches(store):
    advisor = FakeAdvisor(SCHEDULE, RECOMMENDATIONS)
    service = build_service(store, advisor)

    report = service.run_analysis(1, ["Italian"], 150.0)

    assert report.errors == []
    assert [(e.equipment_id, e.equipment_name) for e in report.maintenance_schedule] == [
        (3, "Oven"),
        (2, "Chef's Knife"),
    ]
    assert [rec.name for rec in report.recommendations] == ["Dutch Oven", "Wok"]
    assert service.maintenance_schedule(1) == report.maintenance_schedule
    assert service.recommendations(1) == report.recommendations
    assert advisor.calls[1] == ("recommendations", 3, ("Italian",), 150.0)


def test_failed_advisor_keeps_previous_results(store):
    cache = InMemoryAnalysisCache()
    build_service(store, FakeAdvisor(SCHEDULE, RECOMMENDATIONS), cache).run_analysis(1)

    failing = FakeAdvisor(AdvisorError("timeout"), AdvisorError("timeout"))
    report = build_service(store, failing, cache).run_analysis(1)

    assert len(report.errors) == 2
    assert len(report.maintenance_schedule) == 2
    assert len(report.recommendations) == 2


def test_malformed_payload_replaces_cache_with_empty(store):
    cache = InMemoryAnalysisCache()
    build_service(store, FakeAdvisor(SCHEDULE, RECOMMENDATIONS), cache).run_analysis(1)

    report = build_service(store, FakeAdvisor({"oops": 1}, None), cache).run_analysis(1)

    assert report.errors == []
    assert report.maintenance_schedule == []
    assert report.recommendations == []


def test_results_are_scoped_per_user(store):
    service = build_service(store, FakeAdvisor(SCHEDULE, RECOMMENDATIONS))
    service.run_analysis(1)

    assert service.maintenance_schedule(2) == []
    assert service.recommendations(2) == []


def test_dismiss_recommendation_survives_next_run(store):
    cache = InMemoryAnalysisCache()
    service = build_service(store, FakeAdvisor(SCHEDULE, RECOMMENDATIONS), cache)
    service.run_analysis(1)
    dutch_oven = compute_id("Dutch Oven", "Cookware")

    remaining = service.dismiss_recommendation(1, dutch_oven)
    again = service.dismiss_recommendation(1, dutch_oven)
    report = service.run_analysis(1)

    assert [rec.name for rec in remaining] == ["Wok"]
    assert again == remaining
    assert [rec.name for rec in report.recommendations] == ["Wok"]
    assert service.dismissed_ids(1) == {dutch_oven}
    assert [entry["name"] for entry in cache.get(user_key(1, RECOMMENDATIONS_KEY))] == ["Wok"]


def test_dismiss_unknown_recommendation_raises(store):
    service = build_service(store, FakeAdvisor(SCHEDULE, RECOMMENDATIONS))
    service.run_analysis(1)

    with pytest.raises(ValueError):
        service.dismiss_recommendation(1, 12345)


def test_complete_maintenance_updates_equipment_and_schedule(store):
    service = build_service(store, FakeAdvisor(SCHEDULE, RECOMMENDATIONS))
    service.run_analysis(1)

    updated = service.complete_maintenance(1, 3, date(2024, 1, 2))

    assert updated.last_maintenance_date == date(2024, 1, 2)
    assert store.equipment[3].last_maintenance_date == date(2024, 1, 2)
    assert [entry.equipment_id for entry in service.maintenance_schedule(1)] == [2]

    with pytest.raises(ValueError):
        service.complete_maintenance(1, 99)


def test_add_to_shopping_list_creates_then_detects_duplicate(store):
    service = build_service(store, FakeAdvisor(SCHEDULE, RECOMMENDATIONS))
    service.run_analysis(1)
    wok = compute_id("Wok", "Cookware")

    created = service.add_to_shopping_list(1, wok)
    duplicate = service.add_to_shopping_list(1, wok)
    added = service.add_to_shopping_list(1, compute_id("Dutch Oven", "Cookware"))

    assert created.action == "created"
    assert created.list.id == 1
    assert duplicate.action == "duplicate"
    assert added.action == "added"
    assert [item.name for item in store.lists[0].items] == ["Wok", "Dutch Oven"]

    with pytest.raises(ValueError):
        service.add_to_shopping_list(1, 777)
