"""Deterministic advisor used when no LLM endpoint is configured."""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Callable, Optional, Sequence

from galley.models.equipment import Equipment, EquipmentCondition

_CONDITION_DELAY_DAYS = {
    EquipmentCondition.EXCELLENT: 90,
    EquipmentCondition.GOOD: 45,
    EquipmentCondition.FAIR: 21,
    EquipmentCondition.NEEDS_MAINTENANCE: 3,
    EquipmentCondition.REPLACE: 0,
}
_DEFAULT_DELAY_DAYS = 30

_CONDITION_PRIORITY = {
    EquipmentCondition.NEEDS_MAINTENANCE: "high",
    EquipmentCondition.REPLACE: "high",
    EquipmentCondition.FAIR: "medium",
}

_TASKS_BY_KEYWORD: tuple[tuple[tuple[str, ...], list[str]], ...] = (
    (
        ("processor",),
        [
            "Clean blades thoroughly after each use",
            "Check all connections and attachments",
            "Test all speed settings",
            "Verify lid seal is intact and functional",
        ],
    ),
    (
        ("knife",),
        [
            "Sharpen the blade",
            "Check handle for cracks or looseness",
            "Clean thoroughly and dry completely",
            "Store in a protective sheath or block",
        ],
    ),
    (
        ("skillet", "pan"),
        [
            "Re-season the cooking surface",
            "Check for rust spots",
            "Ensure handle is securely attached",
            "Clean without abrasive cleaners",
        ],
    ),
    (
        ("mixer",),
        [
            "Clean all attachments and mixing bowl",
            "Check power cord for damage",
            "Test all speed settings",
            "Lubricate moving parts if needed",
        ],
    ),
)
_GENERIC_TASKS = [
    "Check condition",
    "Clean thoroughly",
    "Test functionality",
    "Document any issues",
]

# name, category, reason, priority, estimated price
_CATALOGUE: tuple[tuple[str, str, str, str, str], ...] = (
    (
        "Chef's Knife",
        "Cutlery",
        "A quality chef's knife is essential for precise cutting and food preparation",
        "high",
        "$80-150",
    ),
    (
        "Food Processor",
        "Appliances",
        "Speeds up food preparation and enables more complex recipes",
        "high",
        "$100-250",
    ),
    (
        "Cast Iron Skillet",
        "Cookware",
        "Versatile cookware for searing, baking, and stovetop cooking",
        "medium",
        "$30-100",
    ),
    (
        "Dutch Oven",
        "Cookware",
        "Perfect for slow cooking stews, soups, and braising",
        "medium",
        "$70-200",
    ),
    (
        "Digital Kitchen Scale",
        "Tools",
        "Essential for precise measurements in baking and portion control",
        "medium",
        "$15-30",
    ),
    (
        "Instant-Read Thermometer",
        "Tools",
        "Takes the guesswork out of roasting and frying temperatures",
        "low",
        "$15-40",
    ),
)
_PRICE_RE = re.compile(r"\d+(?:\.\d+)?")


def _low_price(estimate: str) -> Optional[float]:
    match = _PRICE_RE.search(estimate)
    return float(match.group(0)) if match else None


class RuleBasedEquipmentAdvisor:
    """Schedule maintenance from condition and interval, recommend from a fixed catalogue."""

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def generate_maintenance_schedule(
        self, equipment: Sequence[Equipment], preferences: Sequence[str] = ()
    ) -> list[dict[str, object]]:
        return [self._candidate(item) for item in equipment]

    def generate_equipment_recommendations(
        self,
        equipment: Sequence[Equipment],
        preferences: Sequence[str] = (),
        budget: Optional[float] = None,
    ) -> list[dict[str, object]]:
        owned = [item.name.lower() for item in equipment if item.name.strip()]
        recommendations: list[dict[str, object]] = []
        for name, category, reason, priority, price in _CATALOGUE:
            needle = name.lower()
            if any(needle in owned_name or owned_name in needle for owned_name in owned):
                continue
            low = _low_price(price)
            if budget is not None and low is not None and low > budget:
                continue
            recommendations.append(
                {
                    "name": name,
                    "category": category,
                    "reason": reason,
                    "priority": priority,
                    "estimatedPrice": price,
                }
            )
        return recommendations

    def _candidate(self, item: Equipment) -> dict[str, object]:
        if item.maintenance_interval:
            base = item.last_maintenance_date or self._today()
            next_date = base + timedelta(days=item.maintenance_interval)
        else:
            delay = _CONDITION_DELAY_DAYS.get(item.condition, _DEFAULT_DELAY_DAYS)
            next_date = self._today() + timedelta(days=delay)
        priority = _CONDITION_PRIORITY.get(item.condition, "low")
        return {
            "equipmentId": item.id,
            "nextMaintenanceDate": next_date.isoformat(),
            "priority": priority,
            "recommendation": f"Routine care for {item.name} ({item.condition.value})",
            "suggestedAction": "Replace" if item.condition is EquipmentCondition.REPLACE else "Service",
            "tasks": list(self._tasks_for(item.name)),
        }

    @staticmethod
    def _tasks_for(name: str) -> list[str]:
        lowered = name.lower()
        for keywords, tasks in _TASKS_BY_KEYWORD:
            if any(keyword in lowered for keyword in keywords):
                return tasks
        return _GENERIC_TASKS


__all__ = ["RuleBasedEquipmentAdvisor"]
