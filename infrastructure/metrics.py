"""Prometheus metrics for the elevator state service.

Metrics:
    elevator_store_operations_total   Counter by operation and outcome
    elevator_store_latency_seconds    Histogram of store call latency by operation

Usage::

    from infrastructure.metrics import LatencyTimer, record_store_operation

    with LatencyTimer() as t:
        state = store.get(state_id)
    record_store_operation(operation="get", outcome="ok", latency_seconds=t.elapsed)
"""

from __future__ import annotations

import logging
import time

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

logger = logging.getLogger(__name__)

OUTCOMES: frozenset[str] = frozenset({"ok", "not_found", "conflict", "invalid", "error"})

_REGISTRY = CollectorRegistry()

store_operations_total = Counter(
    "elevator_store_operations_total",
    "Elevator state store calls by operation and outcome",
    ["operation", "outcome"],
    registry=_REGISTRY,
)

store_latency_seconds = Histogram(
    "elevator_store_latency_seconds",
    "Elevator state store call latency in seconds",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
    registry=_REGISTRY,
)


def record_store_operation(
    *,
    operation: str,
    outcome: str,
    latency_seconds: float,
) -> None:
    """Record a completed store call.

    Args:
        operation: Store method name, e.g. "create" or "get_by_name".
        outcome: One of "ok", "not_found", "conflict", "invalid", "error".
        latency_seconds: Wall-clock time spent in the store.
    """
    if outcome not in OUTCOMES:
        logger.warning("Unknown store outcome %r recorded as 'error'", outcome)
        outcome = "error"
    store_operations_total.labels(operation=operation, outcome=outcome).inc()
    store_latency_seconds.labels(operation=operation).observe(latency_seconds)


def get_metrics_response() -> tuple[bytes, str]:
    """Generate Prometheus text exposition format.

    Returns:
        Tuple of (body_bytes, content_type_string).
    """
    return generate_latest(_REGISTRY), CONTENT_TYPE_LATEST


class LatencyTimer:
    """Context manager for measuring latency.

    ``elapsed`` is set even when the block raises.
    """

    def __init__(self) -> None:
        self._start: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> LatencyTimer:
        self._start = time.perf_counter()
        return self

    def __exit__(self, *_: object) -> None:
        self.elapsed = time.perf_counter() - self._start
