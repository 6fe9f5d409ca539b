"""Common agent interfaces and advisor-payload validation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Generic, Type, TypeVar

from pydantic import BaseModel, ValidationError

from galley import metrics

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
ModelT = TypeVar("ModelT", bound=BaseModel)

logger = logging.getLogger(__name__)


class MalformedUpstreamError(ValueError):
    """Raised when an advisor payload is not list-shaped."""

    def __init__(self, component: str, payload: object):
        super().__init__(
            f"{component} expected a list of candidates, got {type(payload).__name__}"
        )
        self.component = component


class Agent(ABC, Generic[InputT, OutputT]):
    """Base agent interface implemented by all Galley reconciliation steps."""

    @abstractmethod
    def run(self, payload: InputT) -> OutputT:
        """Execute the agent with the given payload."""


def validate_entries(payload: object, model: Type[ModelT], *, component: str) -> list[ModelT]:
    """Validate a raw advisor payload into a list of ``model`` instances.

    Raises :class:`MalformedUpstreamError` when ``payload`` is not a list or tuple.
    Individual entries that fail validation are logged and skipped.
    """

    if not isinstance(payload, (list, tuple)):
        raise MalformedUpstreamError(component, payload)

    entries: list[ModelT] = []
    for index, raw in enumerate(payload):
        if isinstance(raw, model):
            entries.append(raw)
            continue
        try:
            entries.append(model.model_validate(raw))
        except ValidationError as exc:
            metrics.MALFORMED_UPSTREAM.labels(component=component).inc()
            logger.warning(
                "%s skipped malformed entry index=%d errors=%s",
                component,
                index,
                exc.errors(include_url=False),
            )
    return entries


def report_malformed(exc: MalformedUpstreamError) -> None:
    """Log and count a payload that degraded to an empty result."""

    metrics.MALFORMED_UPSTREAM.labels(component=exc.component).inc()
    logger.warning("%s; returning empty result", exc, extra={"component": exc.component})
