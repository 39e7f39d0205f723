"""
API layer for the Open-Meteo services.

Provides the low-level client for geocoding and hourly series requests.
"""

import logging
from typing import Optional

from .client import APIClient
from .geocoding import GeocodingAPI
from .series import SeriesAPI
from ..core import constants


class OpenMeteoAPI(GeocodingAPI, SeriesAPI, APIClient):
    """
    Unified API client for Open-Meteo.

    Combines geocoding and hourly series operations.
    """

    def __init__(
        self,
        geocoding_url: str = constants.GEOCODING_URL,
        timeout: int = constants.DEFAULT_TIMEOUT,
        max_retries: int = constants.DEFAULT_MAX_RETRIES,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize unified API client.

        Args:
            geocoding_url: Geocoding search endpoint
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        super().__init__(
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
            logger=logger
        )
        self.geocoding_url = geocoding_url


__all__ = [
    "APIClient",
    "GeocodingAPI",
    "SeriesAPI",
    "OpenMeteoAPI",
]
