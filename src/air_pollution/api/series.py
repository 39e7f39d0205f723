"""
Hourly series operations for the Open-Meteo forecast and air-quality APIs.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Sequence


class SeriesAPI:
    """Mixin for hourly series requests."""

    # Provided by APIClient
    logger: logging.Logger
    get_async: Callable[..., Awaitable[Dict[str, Any]]]

    async def get_hourly_series(
        self,
        url: str,
        latitude: float,
        longitude: float,
        parameters: Sequence[str],
        past_days: int,
        forecast_days: int
    ) -> Dict[str, Any]:
        """
        Get hourly values for a location.

        Args:
            url: Series endpoint (air-quality or forecast)
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            parameters: Hourly parameter ids, e.g. ['pm10', 'pm2_5']
            past_days: Days of history before today
            forecast_days: Days of forecast including today

        Returns:
            Raw series response with an 'hourly' block
        """
        self.logger.info(
            f"Fetching hourly {','.join(parameters)} for ({latitude}, {longitude})"
        )
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "hourly": ",".join(parameters),
            "past_days": past_days,
            "forecast_days": forecast_days,
        }
        return await self.get_async(url, params=params)
