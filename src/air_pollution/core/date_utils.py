"""
Date and timezone utilities.

Converts the naive ISO-8601 hour stamps returned by Open-Meteo into
timezone-aware datetimes and chart coordinates.
"""

import logging
from datetime import datetime
from typing import Optional
import pytz
from pytz.tzinfo import BaseTzInfo

from . import constants


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_timezone(timezone_str: Optional[str]) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Europe/Warsaw', 'GMT'). None means UTC.

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str or constants.DEFAULT_TIMEZONE)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    def parse_timestamp(self, timestamp: str, timezone_str: Optional[str] = None) -> datetime:
        """
        Parse an hourly timestamp into a timezone-aware datetime.

        Args:
            timestamp: ISO-8601 string, e.g. '2025-04-20T13:00'
            timezone_str: Timezone the naive timestamp is expressed in

        Returns:
            Timezone-aware datetime

        Raises:
            ValueError: If the timestamp cannot be parsed
        """
        candidate = timestamp
        if candidate.endswith("Z"):
            candidate = candidate[:-1] + "+00:00"
        parsed = datetime.fromisoformat(candidate)

        if parsed.tzinfo is None:
            tz = self.parse_timezone(timezone_str)
            parsed = tz.localize(parsed)

        return parsed

    def to_epoch_ms(self, timestamp: str, timezone_str: Optional[str] = None) -> int:
        """
        Convert an hourly timestamp to milliseconds since the Unix epoch.

        Args:
            timestamp: ISO-8601 string
            timezone_str: Timezone the naive timestamp is expressed in

        Returns:
            Milliseconds since epoch
        """
        parsed = self.parse_timestamp(timestamp, timezone_str)
        return int(parsed.astimezone(pytz.UTC).timestamp() * 1000)
