"""
Error taxonomy for the air pollution app.

Every failure the pipeline can report has its own class so callers can show a
distinct message for each kind.
"""


class AirPollutionError(Exception):
    """Base class for all application errors."""


class InvalidInputError(AirPollutionError):
    """Address or request arguments rejected before any request was sent."""


class NetworkError(AirPollutionError):
    """Transport failure, non-success HTTP status or timeout."""


class MalformedResponseError(AirPollutionError):
    """Live API response is missing expected fields or is inconsistent."""


class NotFoundError(AirPollutionError):
    """Geocoding returned no match for the address."""


class InvalidFileFormatError(AirPollutionError):
    """Persisted document is not a valid session file."""


class FileLoadError(InvalidFileFormatError):
    """Session file could not be opened or read."""


class EmptySeriesError(AirPollutionError):
    """Statistics requested for a series without any present value."""

    def __init__(self, parameter_name: str):
        super().__init__(f"No values available for parameter '{parameter_name}'")
        self.parameter_name = parameter_name


class PipelineBusyError(AirPollutionError):
    """A pipeline run is already in progress."""
