"""
Service layer for the air pollution app.

Contains the network-facing pipeline stages.
"""

from .location_resolver import LocationResolver
from .series_fetcher import SeriesFetcher, FetchWindow

__all__ = [
    "LocationResolver",
    "SeriesFetcher",
    "FetchWindow",
]
