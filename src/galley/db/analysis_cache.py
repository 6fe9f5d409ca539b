"""SQLite-backed analysis cache."""

from __future__ import annotations

from typing import Any, Optional

from .models import AnalysisCacheORM
from .repository import session_scope


class DatabaseAnalysisCache:
    """Persist cache entries in the ``analysis_cache`` table; values must be JSON-safe."""

    def get(self, key: str) -> Optional[Any]:
        with session_scope() as session:
            row = session.get(AnalysisCacheORM, key)
            return None if row is None else row.value

    def set(self, key: str, value: Any) -> None:
        with session_scope() as session:
            row = session.get(AnalysisCacheORM, key)
            if row is None:
                session.add(AnalysisCacheORM(key=key, value=value))
            else:
                row.value = value


__all__ = ["DatabaseAnalysisCache"]
