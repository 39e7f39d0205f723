"""
Geocoding operations for the Open-Meteo geocoding API.
"""

import logging
from typing import Any, Awaitable, Callable, Dict

from ..core import constants


class GeocodingAPI:
    """Mixin for geocoding requests."""

    # Provided by APIClient / OpenMeteoAPI
    logger: logging.Logger
    geocoding_url: str
    get_async: Callable[..., Awaitable[Dict[str, Any]]]

    async def search_locations(
        self,
        name: str,
        count: int = constants.GEOCODING_RESULT_COUNT
    ) -> Dict[str, Any]:
        """
        Search places by free-text name.

        Args:
            name: Address or place name
            count: Maximum number of ranked results

        Returns:
            Raw geocoding response; 'results' is absent when nothing matched
        """
        self.logger.info(f"Geocoding '{name}'")
        params = {"name": name, "count": count}
        return await self.get_async(self.geocoding_url, params=params)
