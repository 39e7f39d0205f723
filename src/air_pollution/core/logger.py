"""
Logging setup for the air pollution app.

One named logger writes short lines to the console and detailed lines to an
optional log file. Module loggers created with ``logging.getLogger(__name__)``
inside the package propagate to it.
"""

import logging
import os
import time
from pathlib import Path
from typing import Optional

LOGGER_NAME = "air_pollution"
DEFAULT_LOG_FILE = "logs/air_pollution.log"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_log_level(log_level: str) -> int:
    """
    Convert a level name to its numeric value.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    level = logging.getLevelName(str(log_level).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def setup_logger(
    name: str = LOGGER_NAME,
    log_file: Optional[str] = None,
    log_level: str = "INFO"
) -> logging.Logger:
    """
    Configure the application logger.

    Calling it again replaces the handlers of the previous call.

    Args:
        name: Logger name
        log_file: Log file path. None falls back to the LOG_FILE env var or the
                  default path; an empty string disables file logging
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger
    """
    level = parse_log_level(log_level)
    if log_file is None:
        log_file = os.getenv("LOG_FILE", DEFAULT_LOG_FILE)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(max(level, logging.INFO))
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)

    # Retry attempts of the HTTP session are only interesting when debugging
    logging.getLogger("urllib3").setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)

    logger.propagate = False
    return logger


class LoggerContext:
    """Time one pipeline stage and log its outcome."""

    def __init__(self, logger: logging.Logger, operation: str):
        """
        Args:
            logger: Logger instance
            operation: Stage description used in the messages
        """
        self.logger = logger
        self.operation = operation
        self.duration: Optional[float] = None
        self._started: Optional[float] = None

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self._started

        if exc_type is not None:
            # Failures are reported to the user by the orchestrator; only time them here
            self.logger.warning(
                f"{self.operation} stopped after {self.duration:.2f}s: {exc_type.__name__}"
            )
            return False

        self.logger.info(f"Finished {self.operation} in {self.duration:.2f}s")
        return False
