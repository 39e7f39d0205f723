"""
Tests for the series validator.

The same shape contract applies to live responses and to persisted files.
"""

import pytest
from src.air_pollution.processing import SeriesValidator


@pytest.fixture
def validator():
    return SeriesValidator()


class TestValidateResponse:
    """Shape checks of live series responses."""

    def test_valid_response(self, validator, air_quality_response):
        result = validator.validate(air_quality_response, ["pm10", "pm2_5", "nitrogen_dioxide"])

        assert result.ok
        assert result.reason is None
        assert set(result.series) == {"pm10", "pm2_5", "nitrogen_dioxide"}
        pm10 = result.series["pm10"]
        assert len(pm10) == 6
        assert pm10.values[3] is None
        assert pm10.timestamps[0] == "2025-04-20T00:00"

    def test_integer_values_become_floats(self, validator):
        document = {"hourly": {"time": ["2025-04-20T00:00"], "pm10": [12]}}

        result = validator.validate(document, ["pm10"])

        assert result.ok
        assert isinstance(result.series["pm10"].values[0], float)

    def test_missing_parameter_gives_empty_series(self, validator, air_quality_response):
        result = validator.validate(air_quality_response, ["pm10", "carbon_monoxide"])

        assert result.ok
        assert result.series["carbon_monoxide"].is_empty
        assert not result.series["pm10"].is_empty

    def test_null_parameter_gives_empty_series(self, validator, air_quality_response):
        air_quality_response["hourly"]["pm2_5"] = None

        result = validator.validate(air_quality_response, ["pm2_5"])

        assert result.ok
        assert result.series["pm2_5"].is_empty

    def test_parameters_inferred_when_not_given(self, validator, air_quality_response):
        result = validator.validate(air_quality_response)

        assert result.ok
        assert list(result.series) == ["pm10", "pm2_5", "nitrogen_dioxide"]

    def test_missing_time_array(self, validator, air_quality_response):
        del air_quality_response["hourly"]["time"]

        result = validator.validate(air_quality_response, ["pm10"])

        assert not result.ok
        assert "time" in result.reason

    def test_missing_hourly_block(self, validator):
        result = validator.validate({"latitude": 1.0}, ["pm10"])
        assert not result.ok
        assert "hourly" in result.reason

    def test_not_an_object(self, validator):
        assert not validator.validate(["bad"], ["pm10"])

    def test_length_mismatch(self, validator, air_quality_response):
        air_quality_response["hourly"]["pm10"].append(1.0)

        result = validator.validate(air_quality_response, ["pm10"])

        assert not result.ok
        assert "pm10" in result.reason

    def test_non_numeric_value(self, validator, air_quality_response):
        air_quality_response["hourly"]["pm10"][0] = "high"

        result = validator.validate(air_quality_response, ["pm10"])

        assert not result.ok

    def test_boolean_is_not_a_number(self, validator, air_quality_response):
        air_quality_response["hourly"]["pm10"][0] = True
        assert not validator.validate(air_quality_response, ["pm10"]).ok

    def test_unordered_timestamps(self, validator, air_quality_response):
        stamps = air_quality_response["hourly"]["time"]
        stamps[1], stamps[2] = stamps[2], stamps[1]

        result = validator.validate(air_quality_response, ["pm10"])

        assert not result.ok
        assert "order" in result.reason


class TestValidateFile:
    """Shape checks of persisted session files."""

    def test_valid_file(self, validator, session_file_data):
        result = validator.validate_file(session_file_data)

        assert result.ok
        assert set(result.series) == {"pm10", "pm2_5"}

    def test_weather_data_block_accepted(self, validator, session_file_data):
        session_file_data["weather_data"] = session_file_data.pop("air_quality_data")

        assert validator.validate_file(session_file_data).ok

    @pytest.mark.parametrize("key", ["location", "station", "air_quality_data"])
    def test_missing_block(self, validator, session_file_data, key):
        del session_file_data[key]

        result = validator.validate_file(session_file_data)

        assert not result.ok
        assert "Missing required blocks" in result.reason

    def test_statistics_block_is_optional(self, validator, session_file_data):
        del session_file_data["statistics"]
        assert validator.validate_file(session_file_data).ok

    def test_location_must_be_string(self, validator, session_file_data):
        session_file_data["location"] = {"name": "Kraków"}
        assert not validator.validate_file(session_file_data).ok

    def test_data_block_held_to_response_contract(self, validator, session_file_data):
        session_file_data["air_quality_data"]["hourly"]["pm10"].pop()

        result = validator.validate_file(session_file_data)

        assert not result.ok
        assert "air_quality_data" in result.reason

    def test_non_iso_timestamps(self, validator, session_file_data):
        session_file_data["air_quality_data"]["hourly"]["time"] = ["a", "b", "c", "d"]

        result = validator.validate_file(session_file_data)

        assert not result.ok
        assert "ISO-8601" in result.reason


class TestTimestampsAndTimezone:
    """Stamps must be charted later, so they are parsed during validation."""

    def test_non_iso_timestamp(self, validator, air_quality_response):
        air_quality_response["hourly"]["time"][2] = "20 April, 2am"

        result = validator.validate(air_quality_response, ["pm10"])

        assert not result.ok
        assert "index 2" in result.reason

    def test_unknown_timezone(self, validator, air_quality_response):
        air_quality_response["timezone"] = "Mars/Olympus"

        result = validator.validate(air_quality_response, ["pm10"])

        assert not result.ok
        assert "timezone" in result.reason.lower()

    def test_timezone_must_be_string(self, validator, air_quality_response):
        air_quality_response["timezone"] = 2
        assert not validator.validate(air_quality_response, ["pm10"]).ok

    def test_missing_timezone_is_utc(self, validator, air_quality_response):
        del air_quality_response["timezone"]
        assert validator.validate(air_quality_response, ["pm10"]).ok

    def test_named_timezone(self, validator, air_quality_response):
        air_quality_response["timezone"] = "Europe/Warsaw"
        assert validator.validate(air_quality_response, ["pm10"]).ok
