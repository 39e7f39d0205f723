"""
Time series data models.

Contains DTOs for hourly parameter series and their statistics.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any, List


def is_absent(value: Optional[float]) -> bool:
    """Return True for an hour without a reading (None or NaN)."""
    return value is None or (isinstance(value, float) and math.isnan(value))


@dataclass(frozen=True)
class TimeSeries:
    """Hourly series of one parameter."""

    parameter_name: str
    timestamps: Tuple[str, ...] = ()
    values: Tuple[Optional[float], ...] = ()

    def __post_init__(self):
        # Accept lists from callers but store tuples
        object.__setattr__(self, "timestamps", tuple(self.timestamps))
        object.__setattr__(self, "values", tuple(self.values))
        if len(self.timestamps) != len(self.values):
            raise ValueError(
                f"Series '{self.parameter_name}' has {len(self.timestamps)} timestamps "
                f"but {len(self.values)} values"
            )

    @classmethod
    def empty(cls, parameter_name: str) -> "TimeSeries":
        """Series for a parameter the source did not report."""
        return cls(parameter_name=parameter_name)

    @property
    def is_empty(self) -> bool:
        return not self.timestamps

    @property
    def present_values(self) -> List[float]:
        """Values with absent hours removed, in series order."""
        return [v for v in self.values if not is_absent(v)]

    def __len__(self) -> int:
        return len(self.timestamps)


@dataclass(frozen=True)
class ParameterStatistics:
    """Summary statistics of one series."""

    min: float
    max: float
    mean: float

    def to_dict(self) -> Dict[str, float]:
        """Persisted representation (mean is stored as 'avg')."""
        return {"min": self.min, "max": self.max, "avg": self.mean}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParameterStatistics":
        return cls(min=float(data["min"]), max=float(data["max"]), mean=float(data["avg"]))
