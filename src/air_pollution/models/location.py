"""
Location data models.

Contains DTOs produced by geocoding.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class Coordinates:
    """Geographic coordinates in decimal degrees."""

    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class LocationInfo:
    """Resolved place."""

    display_name: str
    region: str  # country or measuring station identifier
    coordinates: Optional[Coordinates] = None
