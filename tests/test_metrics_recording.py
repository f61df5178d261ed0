"""Tests for infrastructure/metrics.py: Prometheus counter recording.

We use the module registry directly and compare before/after values, since
prometheus counters are cumulative within a registry and cannot be reset.
"""

from __future__ import annotations

import time

from infrastructure import metrics as metrics_module


def _get_counter_value(counter, **labels) -> float:
    """Read current value of a labeled counter."""
    return counter.labels(**labels)._value.get()


def _get_histogram_count(histogram, **labels) -> float:
    """Read the observation count of a labeled histogram via the registry."""
    name = histogram._name
    value = metrics_module._REGISTRY.get_sample_value(f"{name}_count", labels)
    return value or 0.0


class TestRecordStoreOperation:
    def test_increments_counter(self) -> None:
        counter = metrics_module.store_operations_total
        before = _get_counter_value(counter, operation="create", outcome="ok")
        metrics_module.record_store_operation(
            operation="create", outcome="ok", latency_seconds=0.01
        )
        assert _get_counter_value(counter, operation="create", outcome="ok") == before + 1

    def test_observes_latency(self) -> None:
        hist = metrics_module.store_latency_seconds
        before = _get_histogram_count(hist, operation="get_by_name")
        metrics_module.record_store_operation(
            operation="get_by_name", outcome="not_found", latency_seconds=0.002
        )
        assert _get_histogram_count(hist, operation="get_by_name") == before + 1

    def test_unknown_outcome_recorded_as_error(self) -> None:
        counter = metrics_module.store_operations_total
        before = _get_counter_value(counter, operation="delete", outcome="error")
        metrics_module.record_store_operation(
            operation="delete", outcome="exploded", latency_seconds=0.0
        )
        assert _get_counter_value(counter, operation="delete", outcome="error") == before + 1

    def test_burst_accumulates(self) -> None:
        counter = metrics_module.store_operations_total
        before = _get_counter_value(counter, operation="list_all", outcome="ok")
        for _ in range(25):
            metrics_module.record_store_operation(
                operation="list_all", outcome="ok", latency_seconds=0.001
            )
        assert _get_counter_value(counter, operation="list_all", outcome="ok") == before + 25


class TestMetricsResponse:
    def test_returns_prometheus_text(self) -> None:
        metrics_module.record_store_operation(
            operation="update", outcome="conflict", latency_seconds=0.003
        )
        body, content_type = metrics_module.get_metrics_response()
        assert b"elevator_store_operations_total" in body
        assert content_type.startswith("text/plain")


class TestLatencyTimer:
    def test_measures_elapsed(self) -> None:
        with metrics_module.LatencyTimer() as t:
            time.sleep(0.01)
        assert t.elapsed >= 0.01

    def test_elapsed_set_when_block_raises(self) -> None:
        timer = metrics_module.LatencyTimer()
        try:
            with timer:
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert timer.elapsed > 0.0
