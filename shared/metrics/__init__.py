"""Metrics module using Prometheus."""

from .prometheus_metrics import (
    FormulaMetrics,
    setup_metrics,
    get_metrics_handler,
)

__all__ = [
    "FormulaMetrics",
    "setup_metrics",
    "get_metrics_handler",
]
