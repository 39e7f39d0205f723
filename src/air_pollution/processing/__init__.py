"""
Data processing module for the air pollution app.

Provides validation of raw series documents and summary statistics.
"""

from .aggregator import StatisticsEngine
from .validator import SeriesValidator, ValidationResult

__all__ = [
    "StatisticsEngine",
    "SeriesValidator",
    "ValidationResult",
]
