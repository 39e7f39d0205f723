"""
Tests for saving and loading session files.
"""

import json

import pytest
from src.air_pollution.core.exceptions import InvalidFileFormatError
from src.air_pollution.models import (
    Coordinates,
    LocationInfo,
    ParameterStatistics,
    SessionDocument,
)
from src.air_pollution.processing import SeriesValidator, StatisticsEngine
from src.air_pollution.writer import DocumentWriter


@pytest.fixture
def writer():
    return DocumentWriter()


@pytest.fixture
def fetched_document(air_quality_response):
    """Document as the pipeline builds it from the air quality fixture."""
    result = SeriesValidator().validate(air_quality_response, ["pm10", "pm2_5", "nitrogen_dioxide"])
    statistics, _ = StatisticsEngine().summarize_all(result.series)
    return SessionDocument.build(
        location=LocationInfo("Kraków", "Poland", Coordinates(50.06143, 19.93658)),
        series=result.series,
        statistics=statistics,
        raw=air_quality_response,
    )


class TestSerialize:

    def test_file_layout(self, writer, fetched_document):
        data = json.loads(writer.serialize(fetched_document))

        assert data["location"] == "Kraków"
        assert data["station"] == "Poland"
        assert data["coordinates"] == {"latitude": 50.06143, "longitude": 19.93658}
        assert data["air_quality_data"]["hourly"]["pm10"][3] is None
        assert data["statistics"]["pm10"] == {"min": 10.0, "max": 30.0, "avg": 20.0}
        assert "nitrogen_dioxide" not in data["statistics"]

    def test_non_ascii_written_as_utf8(self, writer, fetched_document):
        content = writer.serialize(fetched_document)
        assert "Kraków".encode("utf-8") in content


class TestDeserialize:

    def test_round_trip(self, writer, fetched_document):
        restored = writer.deserialize(writer.serialize(fetched_document))

        assert restored == fetched_document
        assert restored.raw["timezone"] == "GMT"

    def test_legacy_file_without_coordinates(self, writer, session_file_data):
        doc = writer.deserialize(json.dumps(session_file_data))

        assert doc.location == LocationInfo("Kraków", "Poland")
        assert doc.statistics["pm10"] == ParameterStatistics(min=12.0, max=30.0, mean=21.0)
        assert doc.statistics["pm2_5"] == ParameterStatistics(min=4.0, max=8.0, mean=6.0)

    def test_statistics_recomputed(self, writer, session_file_data):
        session_file_data["statistics"]["pm10"]["avg"] = 99.0

        doc = writer.deserialize(json.dumps(session_file_data))

        assert doc.statistics["pm10"].mean == 21.0

    def test_missing_statistics_block(self, writer, session_file_data):
        del session_file_data["statistics"]

        doc = writer.deserialize(json.dumps(session_file_data))

        assert set(doc.statistics) == {"pm10", "pm2_5"}

    def test_missing_station(self, writer, session_file_data):
        del session_file_data["station"]

        with pytest.raises(InvalidFileFormatError) as exc_info:
            writer.deserialize(json.dumps(session_file_data))

        assert "station" in str(exc_info.value)

    def test_not_json(self, writer):
        with pytest.raises(InvalidFileFormatError):
            writer.deserialize(b"{not json")

    def test_top_level_array(self, writer):
        with pytest.raises(InvalidFileFormatError):
            writer.deserialize(b"[]")

    def test_invalid_coordinates_block(self, writer, session_file_data):
        session_file_data["coordinates"] = {"latitude": "north"}

        with pytest.raises(InvalidFileFormatError):
            writer.deserialize(json.dumps(session_file_data))

    def test_weather_file(self, writer, session_file_data):
        block = session_file_data.pop("air_quality_data")
        block["hourly"] = {
            "time": block["hourly"]["time"],
            "temperature_2m": [1.5, 2.5, None, 3.5],
        }
        session_file_data["weather_data"] = block
        del session_file_data["statistics"]

        doc = writer.deserialize(json.dumps(session_file_data))

        assert doc.source == "weather"
        assert doc.statistics["temperature_2m"].max == 3.5
        assert json.loads(writer.serialize(doc))["weather_data"]["hourly"]["temperature_2m"][2] is None


class TestWriteRead:

    def test_write_creates_directories(self, writer, fetched_document, tmp_path):
        target = tmp_path / "out" / "session.json"

        written = writer.write(fetched_document, target)

        assert written == target
        assert writer.read(target) == fetched_document
