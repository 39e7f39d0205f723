"""
Air Pollution App

This package geocodes an address, fetches hourly air quality or weather
series from Open-Meteo, computes per-parameter statistics and saves the
result as a JSON file that can be reloaded for offline review.
"""

__version__ = "1.4.0"
__description__ = "Air quality and weather statistics from Open-Meteo"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "AirPollutionApp":
        from .main import AirPollutionApp
        return AirPollutionApp
    if name == "Orchestrator":
        from .orchestrator import Orchestrator
        return Orchestrator
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AirPollutionApp",
    "Orchestrator",
]
