"""Maintenance schedule reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Dict, Iterable, Optional, Sequence

from galley import metrics
from galley.agents.base import Agent, MalformedUpstreamError, report_malformed, validate_entries
from galley.models.equipment import Equipment
from galley.models.maintenance import MaintenanceCandidate, MaintenanceScheduleEntry

logger = logging.getLogger(__name__)

COMPONENT = "maintenance_reconciler"


def placeholder_name(equipment_id: int) -> str:
    return f"Equipment #{equipment_id}"


class MaintenanceReconciler(
    Agent[tuple[Iterable[Equipment], object], list[MaintenanceScheduleEntry]]
):
    """
    Collapse advisor maintenance candidates into one schedule entry per equipment name.

    Candidates are ordered by next maintenance date (stable for ties) and the earliest
    candidate for each resolved equipment name survives. Distinct equipment ids that
    share a name count as the same item. Non-list payloads yield an empty schedule.
    """

    def run(
        self, payload: tuple[Iterable[Equipment], object]
    ) -> list[MaintenanceScheduleEntry]:
        equipment, raw_candidates = payload
        try:
            candidates = validate_entries(raw_candidates, MaintenanceCandidate, component=COMPONENT)
        except MalformedUpstreamError as exc:
            report_malformed(exc)
            return []

        names = self._build_name_index(equipment)
        ordered = sorted(candidates, key=lambda candidate: candidate.next_maintenance_date)

        schedule: list[MaintenanceScheduleEntry] = []
        seen_names: set[str] = set()
        for candidate in ordered:
            name = self._resolve_name(candidate.equipment_id, names)
            if name in seen_names:
                metrics.SCHEDULE_DUPLICATES.inc()
                logger.debug(
                    "MaintenanceReconciler dropped duplicate name=%s equipment_id=%s date=%s",
                    name,
                    candidate.equipment_id,
                    candidate.next_maintenance_date,
                )
                continue
            seen_names.add(name)
            schedule.append(
                MaintenanceScheduleEntry(
                    **candidate.model_dump(exclude={"equipment_name"}), equipment_name=name
                )
            )

        logger.info(
            "MaintenanceReconciler kept=%d of candidates=%d",
            len(schedule),
            len(candidates),
        )
        return schedule

    @staticmethod
    def _build_name_index(equipment: Optional[Iterable[object]]) -> Dict[int, str]:
        index: Dict[int, str] = {}
        for item in equipment or ():
            if isinstance(item, Mapping):
                item_id, name = item.get("id"), item.get("name")
            else:
                item_id, name = getattr(item, "id", None), getattr(item, "name", None)
            if item_id is None or not name:
                continue
            try:
                index[int(item_id)] = str(name)
            except (TypeError, ValueError):
                continue
        return index

    @staticmethod
    def _resolve_name(equipment_id: int, names: Dict[int, str]) -> str:
        name = names.get(equipment_id)
        if name is None:
            logger.debug("Unresolved equipment reference equipment_id=%s", equipment_id)
            return placeholder_name(equipment_id)
        return name


def reconcile(
    equipment: Iterable[Equipment], candidates: object
) -> list[MaintenanceScheduleEntry]:
    """Return the deduplicated, date-ordered maintenance schedule."""

    return MaintenanceReconciler().run((equipment, candidates))


def complete_maintenance(
    schedule: Sequence[MaintenanceScheduleEntry], equipment_id: int
) -> list[MaintenanceScheduleEntry]:
    """Drop every schedule entry for ``equipment_id`` once its maintenance is done."""

    return [entry for entry in schedule if entry.equipment_id != equipment_id]


__all__ = ["MaintenanceReconciler", "complete_maintenance", "placeholder_name", "reconcile"]
