"""
Application-wide constants for the air pollution app.

Endpoints, default request window, data sources and display metadata
for the supported hourly parameters.
"""

# Open-Meteo endpoints
GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
AIR_QUALITY_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

# Geocoding: only the best ranked match is used
GEOCODING_RESULT_COUNT = 1

# Request window (days relative to the call time)
DEFAULT_PAST_DAYS = 2
DEFAULT_FORECAST_DAYS = 3

# HTTP
DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_MAX_RETRIES = 3
RETRY_STATUS_CODES = [429, 500, 502, 503, 504]

# Data sources
SOURCE_AIR_QUALITY = "air_quality"
SOURCE_WEATHER = "weather"
DEFAULT_SOURCE = SOURCE_AIR_QUALITY

AIR_QUALITY_PARAMETERS = ["pm10", "pm2_5", "nitrogen_dioxide"]
WEATHER_PARAMETERS = ["temperature_2m"]

DEFAULT_SOURCES = {
    SOURCE_AIR_QUALITY: {
        "url": AIR_QUALITY_URL,
        "parameters": AIR_QUALITY_PARAMETERS,
    },
    SOURCE_WEATHER: {
        "url": FORECAST_URL,
        "parameters": WEATHER_PARAMETERS,
    },
}

# Persisted document layout
DATA_BLOCK_KEYS = {
    SOURCE_AIR_QUALITY: "air_quality_data",
    SOURCE_WEATHER: "weather_data",
}
DEFAULT_OUTPUT_FILES = {
    SOURCE_AIR_QUALITY: "air_quality_data.json",
    SOURCE_WEATHER: "weather_data.json",
}

# Display metadata (label shown on charts and in the statistics panel)
PARAMETER_LABELS = {
    "pm10": "PM10 [µg/m³]",
    "pm2_5": "PM2.5 [µg/m³]",
    "nitrogen_dioxide": "NO₂ [µg/m³]",
    "temperature_2m": "Temperature [°C]",
}
PARAMETER_COLORS = {
    "pm10": "red",
    "pm2_5": "blue",
    "nitrogen_dioxide": "darkgreen",
    "temperature_2m": "orange",
}
DEFAULT_COLOR = "black"

# Timezone assumed for timestamps when the response does not name one
DEFAULT_TIMEZONE = "UTC"
