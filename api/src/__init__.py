"""FastAPI service for health formula calculations.

This package provides REST API endpoints computing body mass index,
body fat percentage, ideal weight and calories burned.
"""

__version__ = "1.0.0"
