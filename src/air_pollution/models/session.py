"""
Session document model.

A SessionDocument is the record of one completed fetch-and-analyze cycle and
the unit of persistence.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from ..core import constants
from .location import LocationInfo
from .timeseries import TimeSeries, ParameterStatistics


@dataclass(frozen=True)
class SessionDocument:
    """Location, raw series and computed statistics of one session."""

    location: LocationInfo
    series: Mapping[str, TimeSeries]
    statistics: Mapping[str, ParameterStatistics]
    source: str = constants.DEFAULT_SOURCE
    # Raw series response, written back verbatim; not part of equality
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "series", MappingProxyType(dict(self.series)))
        object.__setattr__(self, "statistics", MappingProxyType(dict(self.statistics)))
        object.__setattr__(self, "raw", MappingProxyType(dict(self.raw)))

    @classmethod
    def build(
        cls,
        location: LocationInfo,
        series: Mapping[str, TimeSeries],
        statistics: Mapping[str, ParameterStatistics],
        source: str = constants.DEFAULT_SOURCE,
        raw: Optional[Mapping[str, Any]] = None
    ) -> "SessionDocument":
        """
        Build a document from the results of a pipeline run.

        Statistics for parameters that are not part of ``series`` are rejected.

        Args:
            location: Resolved location
            series: Parameter name to series
            statistics: Parameter name to statistics (may omit parameters)
            source: Data source name
            raw: Raw series response as received

        Returns:
            Immutable session document
        """
        unknown = set(statistics) - set(series)
        if unknown:
            raise ValueError(f"Statistics for unknown parameters: {', '.join(sorted(unknown))}")
        return cls(
            location=location,
            series=series,
            statistics=statistics,
            source=source,
            raw=raw or {},
        )

    @property
    def parameters(self) -> List[str]:
        return list(self.series)

    @property
    def data_key(self) -> str:
        """Key of the data block in the persisted file."""
        return constants.DATA_BLOCK_KEYS.get(self.source, constants.DATA_BLOCK_KEYS[constants.DEFAULT_SOURCE])

    def raw_series_response(self) -> Dict[str, Any]:
        """
        Series response to persist.

        Documents built without a raw response get one regenerated from the
        typed series; a parameter with an empty series is written as null.
        """
        if self.raw:
            response = dict(self.raw)
            hourly = dict(response.get("hourly") or {})
            for name in self.series:
                # Requested parameters the source left out entirely
                hourly.setdefault(name, None)
            response["hourly"] = hourly
            return response

        timestamps: List[str] = []
        for ts in self.series.values():
            if not ts.is_empty:
                timestamps = list(ts.timestamps)
                break

        hourly: Dict[str, Any] = {"time": timestamps}
        for name, ts in self.series.items():
            hourly[name] = None if ts.is_empty else list(ts.values)
        return {"hourly": hourly}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON layout."""
        data: Dict[str, Any] = {
            "location": self.location.display_name,
            "station": self.location.region,
        }
        if self.location.coordinates is not None:
            data["coordinates"] = self.location.coordinates.to_dict()
        data[self.data_key] = self.raw_series_response()
        data["statistics"] = {
            name: stats.to_dict() for name, stats in self.statistics.items()
        }
        return data
