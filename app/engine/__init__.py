"""Scoring engine components."""

from app.engine.metrics import METRICS, MetricDefinition
from app.engine.scoring import (
    PRIORITY_WEIGHTS,
    REPORT_DELTAS,
    ReportIntensity,
    apply_report_delta,
    compute_priority_index,
    normalize_intensity,
)

__all__ = [
    "METRICS",
    "MetricDefinition",
    "PRIORITY_WEIGHTS",
    "REPORT_DELTAS",
    "ReportIntensity",
    "apply_report_delta",
    "compute_priority_index",
    "normalize_intensity",
]
