"""OpenTelemetry sync metrics."""

from __future__ import annotations

from opentelemetry import metrics

_meter = metrics.get_meter("flagmirror", version="0.1.0")

sync_total = _meter.create_counter(
    name="flagmirror_sync_total",
    description="Total number of project refreshes from the remote source",
    unit="1",
)

sync_errors_total = _meter.create_counter(
    name="flagmirror_sync_errors_total",
    description="Total number of failed project refreshes",
    unit="1",
)

sync_duration_seconds = _meter.create_histogram(
    name="flagmirror_sync_duration_seconds",
    description="Duration of project refreshes in seconds",
    unit="s",
)

observer_errors_total = _meter.create_counter(
    name="flagmirror_observer_errors_total",
    description="Total number of observer failures during notification",
    unit="1",
)
