"""Maintenance schedule models."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from galley.models.dates import coerce_date


class MaintenanceCandidate(BaseModel):
    """Advisory record suggesting when an equipment item next needs servicing."""

    equipment_id: int = Field(alias="equipmentId")
    next_maintenance_date: date = Field(alias="nextMaintenanceDate")
    recommendation: Optional[str] = Field(default=None)
    suggested_action: Optional[str] = Field(default=None, alias="suggestedAction")
    priority: Optional[str] = Field(default=None)
    tasks: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("next_maintenance_date", mode="before")
    @classmethod
    def _accept_timestamps(cls, value: object) -> object:
        return coerce_date(value)


class MaintenanceScheduleEntry(MaintenanceCandidate):
    """Reconciled schedule row: the surviving candidate for one equipment name."""

    equipment_name: str = Field(alias="equipmentName")


__all__ = ["MaintenanceCandidate", "MaintenanceScheduleEntry"]
