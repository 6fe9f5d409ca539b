"""Recommendation identity and dismissal merging."""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Optional

from galley.agents.base import Agent, MalformedUpstreamError, report_malformed, validate_entries
from galley.models.recommendation import RecommendationCandidate

logger = logging.getLogger(__name__)

COMPONENT = "recommendation_merger"

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def compute_id(name: str, category: Optional[str]) -> int:
    """Return the stable 32-bit signed id for a ``(name, category)`` pair.

    Rolling ``h * 31 + unit`` hash over the UTF-16 code units of ``"<name>-<category>"``
    with 32-bit wraparound, so ids match those computed by browser clients.
    """

    key = f"{name}-{category or ''}".encode("utf-16-le")
    value = 0
    for offset in range(0, len(key), 2):
        code_unit = int.from_bytes(key[offset : offset + 2], "little")
        value = (value * 31 + code_unit) & _INT32_MASK
    return value - (1 << 32) if value & _INT32_SIGN else value


def recommendation_id(candidate: RecommendationCandidate) -> int:
    return compute_id(candidate.name, candidate.category)


class RecommendationMerger(
    Agent[tuple[object, Optional[Iterable[int]]], list[RecommendationCandidate]]
):
    """Stamp stable ids on advisor recommendations, drop dismissed and repeated ones."""

    def run(
        self, payload: tuple[object, Optional[Iterable[int]]]
    ) -> list[RecommendationCandidate]:
        raw_candidates, dismissed = payload
        try:
            candidates = validate_entries(
                raw_candidates, RecommendationCandidate, component=COMPONENT
            )
        except MalformedUpstreamError as exc:
            report_malformed(exc)
            return []

        dismissed_ids: AbstractSet[int] = frozenset(dismissed or ())
        merged: list[RecommendationCandidate] = []
        seen: set[int] = set()
        for candidate in candidates:
            rec_id = recommendation_id(candidate)
            if rec_id in dismissed_ids or rec_id in seen:
                continue
            seen.add(rec_id)
            if candidate.id != rec_id:
                candidate = candidate.model_copy(update={"id": rec_id})
            merged.append(candidate)

        logger.info(
            "RecommendationMerger kept=%d of candidates=%d dismissed=%d",
            len(merged),
            len(candidates),
            len(dismissed_ids),
        )
        return merged


def merge(
    existing: object, dismissed: Optional[Iterable[int]] = None
) -> list[RecommendationCandidate]:
    """Return recommendations with stable ids, minus dismissed and duplicate entries."""

    return RecommendationMerger().run((existing, dismissed))


__all__ = ["RecommendationMerger", "compute_id", "merge", "recommendation_id"]
