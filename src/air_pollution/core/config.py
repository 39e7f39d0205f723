"""
Configuration module for the air pollution app.

Loads configuration from a JSON file and environment variables on top of
built-in defaults.
"""

import copy
import json
import os
from typing import Dict, Any, List, Optional
from pathlib import Path

from . import constants


DEFAULT_CONFIG: Dict[str, Any] = {
    "api": {
        "geocoding_url": constants.GEOCODING_URL,
        "timeout": constants.DEFAULT_TIMEOUT,
        "max_retries": constants.DEFAULT_MAX_RETRIES,
        "verify_ssl": True,
    },
    "sources": constants.DEFAULT_SOURCES,
    "processing": {
        "source": constants.DEFAULT_SOURCE,
        "past_days": constants.DEFAULT_PAST_DAYS,
        "forecast_days": constants.DEFAULT_FORECAST_DAYS,
    },
    "output": {
        "save": True,
    },
    "logging": {
        "level": "INFO",
        "file": "logs/air_pollution.log",
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var.
                        Without either, built-in defaults are used.
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE")
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        if not self.config_file:
            return

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = _merge(self.config, json.load(f))

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("GEOCODING_URL"):
            self.config["api"]["geocoding_url"] = os.getenv("GEOCODING_URL")

        if os.getenv("DATA_SOURCE"):
            self.config["processing"]["source"] = os.getenv("DATA_SOURCE")

        for env_name, key in (("PAST_DAYS", "past_days"), ("FORECAST_DAYS", "forecast_days")):
            raw = os.getenv(env_name)
            if raw:
                try:
                    self.config["processing"][key] = int(raw)
                except ValueError:
                    raise ValueError(f"{env_name} must be an integer, got {raw!r}")

        if os.getenv("OUTPUT_FILE"):
            self.config["output"]["file"] = os.getenv("OUTPUT_FILE")

        if os.getenv("LOG_LEVEL"):
            self.config["logging"]["level"] = os.getenv("LOG_LEVEL")

        if os.getenv("LOG_FILE"):
            self.config["logging"]["file"] = os.getenv("LOG_FILE")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present and sane."""
        required_config = {
            "api": ["geocoding_url", "timeout", "max_retries"],
            "processing": ["source", "past_days", "forecast_days"],
        }

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if self.config.get(section, {}).get(key) is None:
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        sources = self.config.get("sources") or {}
        if self.source not in sources:
            raise ValueError(
                f"Unknown data source '{self.source}'. "
                f"Available sources: {', '.join(sorted(sources))}"
            )

        for name, source in sources.items():
            if not source.get("url"):
                raise ValueError(f"Data source '{name}' has no url")
            if not source.get("parameters"):
                raise ValueError(f"Data source '{name}' has no parameters")

        if self.past_days < 0:
            raise ValueError(f"processing.past_days must be >= 0, got {self.past_days}")
        if self.forecast_days < 1:
            raise ValueError(
                f"processing.forecast_days must be >= 1, got {self.forecast_days}"
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.timeout')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def geocoding_url(self) -> str:
        """Get geocoding endpoint URL."""
        return self.get("api.geocoding_url", constants.GEOCODING_URL)

    @property
    def api_timeout(self) -> int:
        """Get API timeout in seconds."""
        return self.get("api.timeout", constants.DEFAULT_TIMEOUT)

    @property
    def api_max_retries(self) -> int:
        """Get maximum API retry attempts."""
        return self.get("api.max_retries", constants.DEFAULT_MAX_RETRIES)

    @property
    def api_verify_ssl(self) -> bool:
        """Get API SSL verification setting."""
        return self.get("api.verify_ssl", True)

    @property
    def source(self) -> str:
        """Get the active data source name."""
        return self.get("processing.source", constants.DEFAULT_SOURCE)

    @source.setter
    def source(self, value: str) -> None:
        self.config["processing"]["source"] = value
        self._validate_config()

    @property
    def series_url(self) -> str:
        """Get the hourly series endpoint of the active source."""
        return self.get(f"sources.{self.source}.url")

    @property
    def parameters(self) -> List[str]:
        """Get the hourly parameters requested from the active source."""
        return list(self.get(f"sources.{self.source}.parameters", []))

    @property
    def past_days(self) -> int:
        """Get number of history days requested."""
        return int(self.get("processing.past_days", constants.DEFAULT_PAST_DAYS))

    @property
    def forecast_days(self) -> int:
        """Get number of forecast days requested."""
        return int(self.get("processing.forecast_days", constants.DEFAULT_FORECAST_DAYS))

    @property
    def output_file(self) -> str:
        """Get path of the persisted session document."""
        return self.get(
            "output.file",
            constants.DEFAULT_OUTPUT_FILES.get(self.source, "session.json")
        )

    @property
    def save_output(self) -> bool:
        """Check if documents are written after a successful fetch."""
        return self.get("output.save", True)

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path."""
        return self.get("logging.file")

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, source={self.source})"
