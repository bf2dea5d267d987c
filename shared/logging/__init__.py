"""Structured logging module using structlog."""

from .structured_logger import get_logger, configure_logging

__all__ = ["get_logger", "configure_logging"]
