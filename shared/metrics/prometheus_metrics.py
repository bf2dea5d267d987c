"""Prometheus metrics definitions and helpers.

Provides the metric collectors exposed by the formula service.
"""

from typing import Callable, Optional

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    REGISTRY,
    CollectorRegistry,
)


class FormulaMetrics:
    """Formula service metrics."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize formula service metrics.

        Args:
            registry: Prometheus registry to use
        """
        self.registry = registry

        # HTTP traffic
        self.http_requests = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status"],
            registry=registry,
        )

        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5, 1.0],
            registry=registry,
        )

        # Formula evaluations, split by whether the result was a finite number
        self.formula_evaluations = Counter(
            "formula_evaluations_total",
            "Total number of formula evaluations",
            ["formula", "outcome"],
            registry=registry,
        )


_metrics: Optional[FormulaMetrics] = None


def setup_metrics() -> FormulaMetrics:
    """Setup and return the process-wide metric instance.

    The instance is created on the first call and registered with the
    default Prometheus registry; later calls return the same object.
    Build ``FormulaMetrics`` directly to bind collectors to another
    registry.

    Returns:
        FormulaMetrics bound to the default registry
    """
    global _metrics
    if _metrics is None:
        _metrics = FormulaMetrics(REGISTRY)
    return _metrics


def get_metrics_handler(registry: CollectorRegistry = REGISTRY) -> Callable[[], bytes]:
    """Get metrics handler for HTTP endpoint.

    Returns:
        Function that generates Prometheus metrics output
    """

    def metrics_handler() -> bytes:
        return generate_latest(registry)

    return metrics_handler
