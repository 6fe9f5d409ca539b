"""Prometheus metrics definitions for Galley."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "galley_http_requests_total",
    "Total number of HTTP requests processed by the Galley API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "galley_http_request_duration_seconds",
    "Latency of HTTP requests processed by the Galley API",
    ["method", "path"],
)

MALFORMED_UPSTREAM = Counter(
    "galley_malformed_upstream_total",
    "Advisor payloads that were not list-shaped or failed validation",
    ["component"],
)

SCHEDULE_DUPLICATES = Counter(
    "galley_schedule_duplicates_dropped_total",
    "Maintenance candidates discarded because an earlier entry shared the equipment name",
)

SHOPPING_SYNC = Counter(
    "galley_shopping_sync_total",
    "Add-to-shopping-list outcomes",
    ["action"],
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "MALFORMED_UPSTREAM",
    "SCHEDULE_DUPLICATES",
    "SHOPPING_SYNC",
]
