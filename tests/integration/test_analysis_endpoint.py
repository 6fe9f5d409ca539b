"""Integration tests for analysis, schedule and recommendation endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import status

from galley.agents import compute_id
from galley.analysis import KitchenAnalysisService
from galley.cache import InMemoryAnalysisCache
from galley.db.equipment import get_equipment, update_equipment
from galley.db.grocery_lists import get_grocery_lists, save_grocery_list
from galley.server import deps

from tests.integration.utils import auth_headers


class StaticAdvisor:
    def generate_maintenance_schedule(self, equipment, preferences):
        return [
            {"equipmentId": item.id, "nextMaintenanceDate": f"2024-0{index + 1}-01"}
            for index, item in enumerate(equipment)
        ]

    def generate_equipment_recommendations(self, equipment, preferences, budget=None):
        return [
            {"name": "Dutch Oven", "category": "Cookware", "priority": "high"},
            {"name": "Wok", "category": "Cookware"},
        ]


def override_service(app):
    service = KitchenAnalysisService(
        advisor=StaticAdvisor(),
        cache=InMemoryAnalysisCache(),
        equipment_provider=get_equipment,
        equipment_updater=lambda equipment_id, payload: update_equipment(equipment_id, **payload),
        grocery_list_provider=get_grocery_lists,
        grocery_list_saver=save_grocery_list,
    )
    app.dependency_overrides[deps.get_analysis_service] = lambda: service
    return service


def seed(client):
    for name in ("Oven", "Oven", "Chef's Knife"):
        client.post("/equipment", json={"name": name}, headers=auth_headers())


def test_analysis_flow(app, client):
    override_service(app)
    seed(client)

    response = client.post("/analysis", json={"preferences": ["Baking"]}, headers=auth_headers())
    assert response.status_code == status.HTTP_200_OK
    report = response.json()
    assert report["errors"] == []
    assert [entry["equipmentName"] for entry in report["maintenanceSchedule"]] == [
        "Oven",
        "Chef's Knife",
    ]
    assert report["maintenanceSchedule"][0]["nextMaintenanceDate"] == "2024-01-01"
    assert [rec["id"] for rec in report["recommendations"]] == [
        compute_id("Dutch Oven", "Cookware"),
        compute_id("Wok", "Cookware"),
    ]

    schedule = client.get("/maintenance-schedule").json()
    assert schedule == report["maintenanceSchedule"]


def test_dismiss_and_add_to_shopping_list(app, client):
    override_service(app)
    seed(client)
    client.post("/analysis", headers=auth_headers())
    wok = compute_id("Wok", "Cookware")
    dutch_oven = compute_id("Dutch Oven", "Cookware")

    response = client.post(f"/recommendations/{dutch_oven}/dismiss", headers=auth_headers())
    assert response.status_code == status.HTTP_200_OK
    assert [rec["name"] for rec in response.json()] == ["Wok"]
    assert [rec["name"] for rec in client.get("/recommendations").json()] == ["Wok"]

    response = client.post(f"/recommendations/{wok}/shopping-list", headers=auth_headers())
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["action"] == "created"
    item = response.json()["list"]["items"][0]
    assert item["category"] == "Kitchen Equipment"
    assert item["quantity"] == "1"

    response = client.post(f"/recommendations/{wok}/shopping-list", headers=auth_headers())
    assert response.json()["action"] == "duplicate"

    lists = client.get("/grocery-lists").json()
    assert len(lists) == 1
    assert len(lists[0]["items"]) == 1

    response = client.post(f"/recommendations/{dutch_oven}/shopping-list", headers=auth_headers())
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_complete_maintenance(app, client):
    override_service(app)
    seed(client)
    client.post("/analysis", headers=auth_headers())
    knife_id = client.get("/equipment").json()[2]["id"]

    response = client.post(
        f"/maintenance-schedule/{knife_id}/complete",
        json={"date": "2024-05-05"},
        headers=auth_headers(),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["lastMaintenanceDate"] == "2024-05-05"
    names = [entry["equipmentName"] for entry in client.get("/maintenance-schedule").json()]
    assert names == ["Oven"]

    response = client.post("/maintenance-schedule/999/complete", headers=auth_headers())
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_analysis_with_rule_based_advisor_persists_results(client):
    seed(client)

    response = client.post("/analysis", json={"budget": 50}, headers=auth_headers())
    assert response.status_code == status.HTTP_200_OK
    report = response.json()
    assert len(report["maintenanceSchedule"]) == 2
    assert {rec["name"] for rec in report["recommendations"]} <= {
        "Cast Iron Skillet",
        "Digital Kitchen Scale",
        "Instant-Read Thermometer",
    }
    assert client.get("/recommendations").json() == report["recommendations"]
    today = date.today().isoformat()
    assert all(entry["nextMaintenanceDate"] >= today for entry in report["maintenanceSchedule"])
