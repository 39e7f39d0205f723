"""
Statistics module.

Computes minimum, maximum and mean of hourly series.
"""

import logging
from typing import Dict, List, Mapping, Optional, Tuple

from ..core.exceptions import EmptySeriesError
from ..models import TimeSeries, ParameterStatistics


class StatisticsEngine:
    """Calculate summary statistics of hourly series."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize statistics engine.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def summarize(self, series: TimeSeries) -> ParameterStatistics:
        """
        Calculate min, max and arithmetic mean over the present values.

        The mean is accumulated left to right so repeated runs give
        bit-identical results.

        Args:
            series: Hourly series; absent hours are skipped

        Returns:
            Statistics of the series

        Raises:
            EmptySeriesError: If the series has no present value
        """
        values = series.present_values
        if not values:
            raise EmptySeriesError(series.parameter_name)

        total = 0.0
        low = high = values[0]
        for value in values:
            total += value
            if value < low:
                low = value
            if value > high:
                high = value

        mean = total / len(values)
        # Rounding of the sum can push the mean just outside [min, max]
        mean = min(max(mean, low), high)

        self.logger.debug(
            f"{series.parameter_name}: min={low:.1f}, max={high:.1f}, mean={mean:.1f} "
            f"({len(values)}/{len(series)} values)"
        )
        return ParameterStatistics(min=low, max=high, mean=mean)

    def summarize_all(
        self,
        series: Mapping[str, TimeSeries]
    ) -> Tuple[Dict[str, ParameterStatistics], List[str]]:
        """
        Summarize every series, omitting parameters without values.

        Args:
            series: Parameter name to series

        Returns:
            Tuple of (statistics per parameter, warning messages)
        """
        statistics: Dict[str, ParameterStatistics] = {}
        warnings: List[str] = []

        for name, ts in series.items():
            try:
                statistics[name] = self.summarize(ts)
            except EmptySeriesError as e:
                self.logger.warning(f"Skipping statistics: {e}")
                warnings.append(str(e))

        return statistics, warnings
