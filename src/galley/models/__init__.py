"""Pydantic models defining shared data contracts."""

from galley.models.analysis import AnalysisReport
from galley.models.equipment import Equipment, EquipmentCondition
from galley.models.grocery import (
    KITCHEN_EQUIPMENT_CATEGORY,
    SHOPPING_LIST_TITLE,
    GroceryItem,
    GroceryList,
    ShoppingSyncResult,
)
from galley.models.maintenance import MaintenanceCandidate, MaintenanceScheduleEntry
from galley.models.recommendation import RecommendationCandidate

__all__ = [
    "AnalysisReport",
    "Equipment",
    "EquipmentCondition",
    "GroceryItem",
    "GroceryList",
    "KITCHEN_EQUIPMENT_CATEGORY",
    "SHOPPING_LIST_TITLE",
    "ShoppingSyncResult",
    "MaintenanceCandidate",
    "MaintenanceScheduleEntry",
    "RecommendationCandidate",
]
