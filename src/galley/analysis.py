"""Orchestration of advisor runs, cached results and user actions."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional, Sequence

from galley.agents.base import MalformedUpstreamError, validate_entries
from galley.agents.maintenance_reconciler import complete_maintenance, reconcile
from galley.agents.recommendation_merger import merge
from galley.agents.shopping_synchronizer import add_recommendation_to_shopping_list
from galley.cache import (
    DISMISSED_RECOMMENDATIONS_KEY,
    MAINTENANCE_SCHEDULE_KEY,
    RECOMMENDATIONS_KEY,
    AnalysisCache,
    user_key,
)
from galley.llm.interface import EquipmentAdvisor, call_advisor
from galley.models.analysis import AnalysisReport
from galley.models.equipment import Equipment
from galley.models.grocery import GroceryList, ShoppingSyncResult
from galley.models.maintenance import MaintenanceScheduleEntry
from galley.models.recommendation import RecommendationCandidate
from galley.registry import EquipmentRegistry

logger = logging.getLogger(__name__)

EquipmentProvider = Callable[[int], List[Equipment]]
EquipmentUpdater = Callable[[int, dict], Equipment]
GroceryListProvider = Callable[[int], List[GroceryList]]
GroceryListSaver = Callable[[GroceryList], GroceryList]


class KitchenAnalysisService:
    """
    Run the advisor against a user's equipment and keep the reconciled results.

    Successful runs replace the cached schedule and recommendations wholesale. A failed
    advisor call leaves the previous cached value in place and is reported in
    ``AnalysisReport.errors``; a malformed payload degrades to an empty result.
    """

    def __init__(
        self,
        *,
        advisor: EquipmentAdvisor,
        cache: AnalysisCache,
        equipment_provider: EquipmentProvider,
        equipment_updater: EquipmentUpdater,
        grocery_list_provider: GroceryListProvider,
        grocery_list_saver: GroceryListSaver,
    ) -> None:
        self._advisor = advisor
        self._cache = cache
        self._equipment_provider = equipment_provider
        self._equipment_updater = equipment_updater
        self._grocery_list_provider = grocery_list_provider
        self._grocery_list_saver = grocery_list_saver

    def run_analysis(
        self,
        user_id: int,
        preferences: Sequence[str] = (),
        budget: Optional[float] = None,
    ) -> AnalysisReport:
        registry = EquipmentRegistry(self._equipment_provider(user_id))
        equipment = list(registry)
        errors: list[str] = []

        maintenance = call_advisor(
            "maintenance", self._advisor.generate_maintenance_schedule, equipment, list(preferences)
        )
        if maintenance.ok:
            schedule = reconcile(equipment, maintenance.value)
            self._store(user_id, MAINTENANCE_SCHEDULE_KEY, schedule)
        else:
            errors.append(f"Maintenance schedule unavailable: {maintenance.error}")
            schedule = self.maintenance_schedule(user_id)

        advice = call_advisor(
            "recommendations",
            self._advisor.generate_equipment_recommendations,
            equipment,
            list(preferences),
            budget,
        )
        if advice.ok:
            recommendations = merge(advice.value, self.dismissed_ids(user_id))
            self._store(user_id, RECOMMENDATIONS_KEY, recommendations)
        else:
            errors.append(f"Recommendations unavailable: {advice.error}")
            recommendations = self.recommendations(user_id)

        logger.info(
            "Analysis complete schedule=%d recommendations=%d errors=%d",
            len(schedule),
            len(recommendations),
            len(errors),
            extra={"user_id": user_id},
        )
        return AnalysisReport(
            maintenance_schedule=schedule,
            recommendations=recommendations,
            errors=errors,
        )

    def maintenance_schedule(self, user_id: int) -> list[MaintenanceScheduleEntry]:
        cached = self._cache.get(user_key(user_id, MAINTENANCE_SCHEDULE_KEY))
        if cached is None:
            return []
        try:
            return validate_entries(cached, MaintenanceScheduleEntry, component="schedule_cache")
        except MalformedUpstreamError:
            logger.warning("Discarding unreadable cached schedule", extra={"user_id": user_id})
            return []

    def recommendations(self, user_id: int) -> list[RecommendationCandidate]:
        cached = self._cache.get(user_key(user_id, RECOMMENDATIONS_KEY))
        if cached is None:
            return []
        return merge(cached, self.dismissed_ids(user_id))

    def dismissed_ids(self, user_id: int) -> set[int]:
        cached = self._cache.get(user_key(user_id, DISMISSED_RECOMMENDATIONS_KEY)) or []
        return {int(value) for value in cached}

    def dismiss_recommendation(self, user_id: int, rec_id: int) -> list[RecommendationCandidate]:
        """Hide a recommendation from this and future runs; repeat dismissals are no-ops."""

        dismissed = self.dismissed_ids(user_id)
        if rec_id not in dismissed:
            if self._find_recommendation(user_id, rec_id) is None:
                raise ValueError(f"Recommendation {rec_id} not found")
            dismissed.add(rec_id)
            self._cache.set(user_key(user_id, DISMISSED_RECOMMENDATIONS_KEY), sorted(dismissed))
        remaining = self.recommendations(user_id)
        self._store(user_id, RECOMMENDATIONS_KEY, remaining)
        return remaining

    def complete_maintenance(
        self, user_id: int, equipment_id: int, when: Optional[date] = None
    ) -> Equipment:
        """Stamp the maintenance date and drop the item from the cached schedule."""

        registry = EquipmentRegistry(self._equipment_provider(user_id))
        maintained = registry.mark_maintained(equipment_id, when)
        updated = self._equipment_updater(
            equipment_id, {"last_maintenance_date": maintained.last_maintenance_date}
        )
        schedule = complete_maintenance(self.maintenance_schedule(user_id), equipment_id)
        self._store(user_id, MAINTENANCE_SCHEDULE_KEY, schedule)
        logger.info(
            "Maintenance completed equipment_id=%s name=%s",
            equipment_id,
            updated.name,
            extra={"user_id": user_id},
        )
        return updated

    def add_to_shopping_list(self, user_id: int, rec_id: int) -> ShoppingSyncResult:
        rec = self._find_recommendation(user_id, rec_id)
        if rec is None:
            raise ValueError(f"Recommendation {rec_id} not found")

        result = add_recommendation_to_shopping_list(
            rec, self._grocery_list_provider(user_id), user_id
        )
        if result.action == "duplicate":
            return result
        saved = self._grocery_list_saver(result.list)
        return result.model_copy(update={"list": saved})

    def _find_recommendation(
        self, user_id: int, rec_id: int
    ) -> Optional[RecommendationCandidate]:
        for rec in self.recommendations(user_id):
            if rec.id == rec_id:
                return rec
        return None

    def _store(self, user_id: int, key: str, entries: Sequence[object]) -> None:
        self._cache.set(
            user_key(user_id, key),
            [entry.model_dump(mode="json", by_alias=True) for entry in entries],
        )


__all__ = [
    "KitchenAnalysisService",
    "EquipmentProvider",
    "EquipmentUpdater",
    "GroceryListProvider",
    "GroceryListSaver",
]
