"""Prometheus metrics registration for the tolerance service.

All metric objects are defined at import time and exposed by the ``/metrics``
mount of the application.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

tolerance_calculations_total = Counter(
    "tolerance_calculations_total",
    "Number of tolerance calculations",
    ["mode", "status"],
)
tolerance_errors_total = Counter(
    "tolerance_errors_total",
    "Rejected tolerance calculations by error code",
    ["code"],
)
tolerance_calculation_duration_seconds = Histogram(
    "tolerance_calculation_duration_seconds",
    "Tolerance calculation duration",
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.05, 0.1],
)
tolerance_advisor_requests_total = Counter(
    "tolerance_advisor_requests_total",
    "Fit advisor requests",
    ["status"],
)

__all__ = [
    "tolerance_calculations_total",
    "tolerance_errors_total",
    "tolerance_calculation_duration_seconds",
    "tolerance_advisor_requests_total",
]
