"""Analysis run report model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from galley.models.maintenance import MaintenanceScheduleEntry
from galley.models.recommendation import RecommendationCandidate


class AnalysisReport(BaseModel):
    """Result of one advisor run after reconciliation and merging."""

    maintenance_schedule: list[MaintenanceScheduleEntry] = Field(
        default_factory=list, alias="maintenanceSchedule"
    )
    recommendations: list[RecommendationCandidate] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


__all__ = ["AnalysisReport"]
