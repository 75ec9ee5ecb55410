"""Prometheus metrics helpers for data source observability."""

from __future__ import annotations

from collections.abc import Callable
from time import perf_counter
from typing import TypeVar

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from pagekit.core.enums import FetchOperationEnum

T = TypeVar("T")

PROVIDER_FETCH_TOTAL = Counter(
    "pagekit_provider_fetch_total",
    "Total number of data source fetches issued by data providers.",
    ["source", "operation", "outcome"],
)

PROVIDER_FETCH_DURATION_SECONDS = Histogram(
    "pagekit_provider_fetch_duration_seconds",
    "Data source fetch latency in seconds.",
    ["source", "operation"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)


def observe_fetch(source: str, operation: FetchOperationEnum, fetch: Callable[[], T]) -> T:
    """Run ``fetch`` and track its count and latency. Errors propagate unchanged."""
    started_at = perf_counter()
    outcome = "error"
    try:
        result = fetch()
        outcome = "ok"
        return result
    finally:
        PROVIDER_FETCH_TOTAL.labels(
            source=source,
            operation=operation.value,
            outcome=outcome,
        ).inc()
        PROVIDER_FETCH_DURATION_SECONDS.labels(
            source=source,
            operation=operation.value,
        ).observe(perf_counter() - started_at)


def build_metrics_response() -> Response:
    """Return metrics payload in Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
