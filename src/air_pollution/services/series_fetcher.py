"""
Series fetching service.

Requests hourly parameter series for a location over a day window.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, TYPE_CHECKING

from ..core import constants
from ..core.exceptions import InvalidInputError, MalformedResponseError
from ..models import Coordinates, TimeSeries
from ..processing import SeriesValidator

if TYPE_CHECKING:
    from ..api import OpenMeteoAPI


@dataclass(frozen=True)
class FetchWindow:
    """Days of history and forecast requested around the call time."""

    past_days: int = constants.DEFAULT_PAST_DAYS
    forecast_days: int = constants.DEFAULT_FORECAST_DAYS

    def __post_init__(self):
        if self.past_days < 0:
            raise ValueError(f"past_days must be >= 0, got {self.past_days}")
        if self.forecast_days < 1:
            raise ValueError(f"forecast_days must be >= 1, got {self.forecast_days}")


class SeriesFetcher:
    """Fetch hourly series for a location."""

    def __init__(
        self,
        api_client: "OpenMeteoAPI",
        series_url: str = constants.AIR_QUALITY_URL,
        window: Optional[FetchWindow] = None,
        validator: Optional[SeriesValidator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize series fetcher.

        Args:
            api_client: API client instance
            series_url: Hourly series endpoint
            window: Request window (defaults to 2 past days, 3 forecast days)
            validator: Validator used to parse responses
            logger: Logger instance
        """
        self.api_client = api_client
        self.series_url = series_url
        self.window = window or FetchWindow()
        self.logger = logger or logging.getLogger(__name__)
        self.validator = validator or SeriesValidator(self.logger)

    @staticmethod
    def normalize_parameters(parameters: Iterable[str]) -> List[str]:
        """De-duplicate parameter ids keeping their order."""
        names = list(dict.fromkeys(p.strip() for p in parameters if p and p.strip()))
        if not names:
            raise InvalidInputError("At least one hourly parameter is required")
        return names

    async def fetch_raw(self, coords: Coordinates, parameters: Iterable[str]) -> Dict[str, Any]:
        """
        Request the raw hourly series response.

        Args:
            coords: Location coordinates
            parameters: Hourly parameter ids

        Returns:
            Decoded JSON response
        """
        names = self.normalize_parameters(parameters)
        return await self.api_client.get_hourly_series(
            url=self.series_url,
            latitude=coords.latitude,
            longitude=coords.longitude,
            parameters=names,
            past_days=self.window.past_days,
            forecast_days=self.window.forecast_days,
        )

    def parse(self, payload: Dict[str, Any], parameters: Iterable[str]) -> Dict[str, TimeSeries]:
        """
        Parse the hourly block of a response into typed series.

        Args:
            payload: Raw series response
            parameters: Requested parameter ids

        Returns:
            Parameter name to series; unavailable parameters map to empty series

        Raises:
            MalformedResponseError: If the response does not have the expected shape
        """
        result = self.validator.validate(payload, self.normalize_parameters(parameters))
        if not result.ok:
            raise MalformedResponseError(f"Invalid series response: {result.reason}")
        return dict(result.series)

    async def fetch(self, coords: Coordinates, parameters: Iterable[str]) -> Dict[str, TimeSeries]:
        """
        Request and parse hourly series.

        Args:
            coords: Location coordinates
            parameters: Hourly parameter ids

        Returns:
            Parameter name to series
        """
        names = self.normalize_parameters(parameters)
        payload = await self.fetch_raw(coords, names)
        return self.parse(payload, names)
