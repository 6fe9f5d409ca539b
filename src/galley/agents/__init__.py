"""Reconciliation agents for kitchen equipment maintenance and recommendations."""

from galley.agents.base import Agent, MalformedUpstreamError
from galley.agents.maintenance_reconciler import (
    MaintenanceReconciler,
    complete_maintenance,
    reconcile,
)
from galley.agents.recommendation_merger import RecommendationMerger, compute_id, merge
from galley.agents.shopping_synchronizer import (
    ShoppingListSynchronizer,
    add_recommendation_to_shopping_list,
)

__all__ = [
    "Agent",
    "MalformedUpstreamError",
    "MaintenanceReconciler",
    "RecommendationMerger",
    "ShoppingListSynchronizer",
    "add_recommendation_to_shopping_list",
    "complete_maintenance",
    "compute_id",
    "merge",
    "reconcile",
]
