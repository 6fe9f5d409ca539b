"""Kitchen equipment models."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from galley.models.dates import coerce_date


class EquipmentCondition(str, Enum):
    """Condition grades a user can assign to an equipment item."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    NEEDS_MAINTENANCE = "needs-maintenance"
    REPLACE = "replace"


class Equipment(BaseModel):
    """Physical kitchen item owned by a user."""

    id: int
    user_id: Optional[int] = Field(default=None, alias="userId")
    name: str
    category: str = Field(default="Appliances")
    condition: EquipmentCondition = Field(default=EquipmentCondition.GOOD)
    purchase_date: Optional[date] = Field(default=None, alias="purchaseDate")
    last_maintenance_date: Optional[date] = Field(default=None, alias="lastMaintenanceDate")
    maintenance_interval: Optional[int] = Field(default=None, ge=1, alias="maintenanceInterval")
    maintenance_notes: Optional[str] = Field(default=None, alias="maintenanceNotes")
    purchase_price: Optional[int] = Field(default=None, ge=0, alias="purchasePrice")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("purchase_date", "last_maintenance_date", mode="before")
    @classmethod
    def _accept_timestamps(cls, value: object) -> object:
        return coerce_date(value)


__all__ = ["Equipment", "EquipmentCondition"]
