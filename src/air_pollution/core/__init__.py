"""
Core utilities for the air pollution app.

Provides configuration management, logging, errors and date handling.
"""

from .config import Config
from .logger import setup_logger, LoggerContext
from . import constants
from .date_utils import DateUtils
from .exceptions import (
    AirPollutionError,
    InvalidInputError,
    NetworkError,
    MalformedResponseError,
    NotFoundError,
    InvalidFileFormatError,
    FileLoadError,
    EmptySeriesError,
    PipelineBusyError,
)

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "constants",
    "DateUtils",
    "AirPollutionError",
    "InvalidInputError",
    "NetworkError",
    "MalformedResponseError",
    "NotFoundError",
    "InvalidFileFormatError",
    "FileLoadError",
    "EmptySeriesError",
    "PipelineBusyError",
]
