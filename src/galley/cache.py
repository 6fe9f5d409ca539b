"""Cache collaborator used to keep the latest analysis results between runs."""

from __future__ import annotations

import copy
from typing import Any, Dict, Optional, Protocol

MAINTENANCE_SCHEDULE_KEY = "maintenance-schedule"
RECOMMENDATIONS_KEY = "recommendations"
DISMISSED_RECOMMENDATIONS_KEY = "dismissed-recommendations"


class AnalysisCache(Protocol):
    """Opaque key/value store; entries are replaced wholesale, never expired."""

    def get(self, key: str) -> Optional[Any]:
        """Return the stored value or None."""

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""


class InMemoryAnalysisCache:
    """Dict-backed cache that copies values in and out."""

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._values.get(key))

    def set(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)


def user_key(user_id: int, key: str) -> str:
    return f"user:{user_id}:{key}"


__all__ = [
    "AnalysisCache",
    "InMemoryAnalysisCache",
    "MAINTENANCE_SCHEDULE_KEY",
    "RECOMMENDATIONS_KEY",
    "DISMISSED_RECOMMENDATIONS_KEY",
    "user_key",
]
