"""
Location resolution service.

Turns a free-text address into coordinates and a display name via geocoding.
"""

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from ..core.exceptions import InvalidInputError, NotFoundError, MalformedResponseError
from ..models import Coordinates, LocationInfo

if TYPE_CHECKING:
    from ..api import OpenMeteoAPI


REQUIRED_FIELDS = ("latitude", "longitude", "name", "country")


class LocationResolver:
    """Resolve addresses to locations."""

    def __init__(
        self,
        api_client: "OpenMeteoAPI",
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize location resolver.

        Args:
            api_client: API client instance
            logger: Logger instance
        """
        self.api_client = api_client
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, address_text: str) -> LocationInfo:
        """
        Resolve an address to the best ranked geocoding match.

        Args:
            address_text: Free-text address, e.g. 'Kraków, PL'

        Returns:
            Location of the first result

        Raises:
            InvalidInputError: If the address is blank (no request is sent)
            NotFoundError: If geocoding returned no result
            MalformedResponseError: If the first result lacks expected fields
            NetworkError: On transport failure
        """
        address = (address_text or "").strip()
        if not address:
            raise InvalidInputError("Enter an address (e.g. 'Warszawa, PL')")

        response = await self.api_client.search_locations(address)

        results = response.get("results")
        if results is None or results == []:
            raise NotFoundError(f"Address not found: {address}")
        if not isinstance(results, list):
            raise MalformedResponseError("Geocoding 'results' is not an array")

        if len(results) > 1:
            self.logger.debug(f"{len(results)} matches for '{address}', using the first")

        return self._parse_result(results[0])

    def _parse_result(self, result: Dict[str, Any]) -> LocationInfo:
        """Build a LocationInfo from one geocoding result."""
        if not isinstance(result, dict):
            raise MalformedResponseError("Geocoding result is not an object")

        missing = [f for f in REQUIRED_FIELDS if result.get(f) is None]
        if missing:
            raise MalformedResponseError(
                f"Geocoding result is missing fields: {', '.join(missing)}"
            )

        try:
            coordinates = Coordinates(
                latitude=float(result["latitude"]),
                longitude=float(result["longitude"]),
            )
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(f"Invalid coordinates in geocoding result: {e}") from e

        location = LocationInfo(
            display_name=str(result["name"]),
            region=str(result["country"]),
            coordinates=coordinates,
        )
        self.logger.info(
            f"Resolved {location.display_name}, {location.region} "
            f"({coordinates.latitude}, {coordinates.longitude})"
        )
        return location
