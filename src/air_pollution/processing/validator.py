"""
Series validation module.

Checks the shape of raw series documents, both fresh API responses and
persisted session files, and converts them into typed series in one pass.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..core import constants, DateUtils
from ..models import TimeSeries


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a shape check."""

    ok: bool
    reason: Optional[str] = None
    series: Mapping[str, TimeSeries] = field(default_factory=dict)

    @classmethod
    def success(cls, series: Mapping[str, TimeSeries]) -> "ValidationResult":
        return cls(ok=True, series=series)

    @classmethod
    def failure(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class SeriesValidator:
    """Validate raw hourly series documents."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize series validator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = DateUtils(self.logger)

    def validate(
        self,
        document: Any,
        parameters: Optional[Iterable[str]] = None
    ) -> ValidationResult:
        """
        Validate a raw series response and build typed series.

        A parameter that is missing or null in the response yields an empty
        series; it does not fail validation.

        Args:
            document: Decoded JSON response
            parameters: Expected parameter ids. If None, every key of the
                        hourly block except 'time' is taken as a parameter.

        Returns:
            ValidationResult with the parsed series on success
        """
        if not isinstance(document, dict):
            return ValidationResult.failure("Series document is not an object")

        hourly = document.get("hourly")
        if not isinstance(hourly, dict):
            return ValidationResult.failure("Missing 'hourly' block")

        timestamps = hourly.get("time")
        if not isinstance(timestamps, list):
            return ValidationResult.failure("Missing 'hourly.time' array")

        timezone_str = document.get("timezone")
        if timezone_str is not None:
            if not isinstance(timezone_str, str):
                return ValidationResult.failure("Timezone is not a string")
            try:
                self.date_utils.parse_timezone(timezone_str)
            except ValueError:
                return ValidationResult.failure(f"Unknown timezone: {timezone_str!r}")

        previous = None
        for i, stamp in enumerate(timestamps):
            if not isinstance(stamp, str):
                return ValidationResult.failure(f"Timestamp at index {i} is not a string")
            try:
                parsed = self.date_utils.parse_timestamp(stamp, timezone_str)
            except ValueError:
                return ValidationResult.failure(
                    f"Timestamp at index {i} is not ISO-8601 ({stamp!r})"
                )
            if previous is not None and parsed < previous:
                return ValidationResult.failure(
                    f"Timestamps are not in order at index {i} ({stamp})"
                )
            previous = parsed

        if parameters is None:
            names = [key for key in hourly if key != "time"]
        else:
            names = list(dict.fromkeys(parameters))

        series: Dict[str, TimeSeries] = {}
        for name in names:
            values = hourly.get(name)

            if values is None:
                self.logger.warning(f"Parameter '{name}' not available in response")
                series[name] = TimeSeries.empty(name)
                continue

            if not isinstance(values, list):
                return ValidationResult.failure(f"Values of '{name}' are not an array")

            if len(values) != len(timestamps):
                return ValidationResult.failure(
                    f"Parameter '{name}' has {len(values)} values "
                    f"for {len(timestamps)} timestamps"
                )

            for i, value in enumerate(values):
                if value is not None and not _is_number(value):
                    return ValidationResult.failure(
                        f"Value of '{name}' at index {i} is not a number"
                    )

            series[name] = TimeSeries(
                parameter_name=name,
                timestamps=timestamps,
                values=[None if v is None else float(v) for v in values],
            )

        return ValidationResult.success(series)

    def find_data_key(self, document: Dict[str, Any]) -> Optional[str]:
        """Return the data block key present in a persisted document."""
        for key in constants.DATA_BLOCK_KEYS.values():
            if key in document:
                return key
        return None

    def validate_file(self, document: Any) -> ValidationResult:
        """
        Validate a persisted session document.

        The file must carry the location, station and data blocks; the data
        block is then held to the same contract as a live response.

        Args:
            document: Decoded JSON file content

        Returns:
            ValidationResult with the parsed series on success
        """
        if not isinstance(document, dict):
            return ValidationResult.failure("File content is not a JSON object")

        missing: List[str] = []
        for key in ("location", "station"):
            if key not in document:
                missing.append(key)

        data_key = self.find_data_key(document)
        if data_key is None:
            missing.append(" or ".join(constants.DATA_BLOCK_KEYS.values()))

        if missing:
            return ValidationResult.failure(f"Missing required blocks: {', '.join(missing)}")

        for key in ("location", "station"):
            if not isinstance(document[key], str):
                return ValidationResult.failure(f"Block '{key}' must be a string")

        result = self.validate(document[data_key])
        if not result.ok:
            return ValidationResult.failure(f"Invalid '{data_key}' block: {result.reason}")
        return result
