"""Equipment recommendation models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RecommendationCandidate(BaseModel):
    """Equipment suggestion produced by an advisor run."""

    id: Optional[int] = Field(default=None)
    name: str = Field(min_length=1)
    category: Optional[str] = Field(default=None)
    reason: Optional[str] = Field(default=None)
    priority: Optional[str] = Field(default=None)
    estimated_price: Optional[str] = Field(default=None, alias="estimatedPrice")
    alternative_options: list[str] = Field(default_factory=list, alias="alternativeOptions")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


__all__ = ["RecommendationCandidate"]
