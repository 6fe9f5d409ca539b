"""Advisor abstraction for maintenance and recommendation candidates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

import httpx

from galley.models.equipment import Equipment

logger = logging.getLogger(__name__)


class AdvisorError(RuntimeError):
    """Raised when an advisor cannot produce a usable payload."""


class EquipmentAdvisor(Protocol):
    """Protocol for maintenance/recommendation generators.

    Both calls return the raw decoded payload; shape checks happen downstream.
    """

    def generate_maintenance_schedule(
        self, equipment: Sequence[Equipment], preferences: Sequence[str]
    ) -> object:
        """Return maintenance candidates for ``equipment``."""

    def generate_equipment_recommendations(
        self,
        equipment: Sequence[Equipment],
        preferences: Sequence[str],
        budget: Optional[float] = None,
    ) -> object:
        """Return equipment purchase recommendations."""


@dataclass(frozen=True)
class AdvisorResult:
    """Either the raw advisor payload or the error that prevented it."""

    value: object = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def call_advisor(label: str, func: Callable[..., object], *args: object) -> AdvisorResult:
    """Invoke an advisor method, converting expected failures into a failed result."""

    try:
        return AdvisorResult(value=func(*args))
    except (AdvisorError, httpx.HTTPError, ValueError) as exc:
        logger.warning("Advisor call %s failed: %s", label, exc)
        return AdvisorResult(error=exc)


__all__ = ["AdvisorError", "AdvisorResult", "EquipmentAdvisor", "call_advisor"]
