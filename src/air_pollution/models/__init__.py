"""
Data models for the air pollution app.

Contains DTOs for locations, hourly series, statistics and session documents.
"""

from .location import Coordinates, LocationInfo
from .timeseries import TimeSeries, ParameterStatistics, is_absent
from .session import SessionDocument

__all__ = [
    "Coordinates",
    "LocationInfo",
    "TimeSeries",
    "ParameterStatistics",
    "is_absent",
    "SessionDocument",
]
