"""
FastAPI dependency injection for the formula service.

Provides injectable dependencies for:
- Application settings
- Metrics collectors
- The formula service instance
"""

from functools import lru_cache
from typing import Optional

from api.src.config import get_settings
from api.src.services.formula_service import FormulaService
from shared.metrics import FormulaMetrics, setup_metrics


def get_metrics() -> Optional[FormulaMetrics]:
    """
    Get the metrics collectors, or None when metrics are disabled.

    Returns:
        Process-wide FormulaMetrics instance
    """
    if not get_settings().metrics_enabled:
        return None
    return setup_metrics()


@lru_cache()
def get_formula_service() -> FormulaService:
    """
    Get cached formula service instance.

    The service is stateless apart from its metrics handle, so one
    instance is shared by every request.

    Returns:
        FormulaService instance
    """
    return FormulaService(metrics=get_metrics())
