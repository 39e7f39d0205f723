"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest
import json

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


def _load(fixtures_dir, name):
    with open(fixtures_dir / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def geocoding_response(fixtures_dir):
    """Geocoding response with one match (Kraków)."""
    return _load(fixtures_dir, "geocoding.json")


@pytest.fixture
def air_quality_response(fixtures_dir):
    """Air quality response: pm10 and pm2_5 with gaps, nitrogen_dioxide all null."""
    return _load(fixtures_dir, "air_quality.json")


@pytest.fixture
def session_file_data(fixtures_dir):
    """Session file as written by earlier versions (no coordinates block)."""
    return _load(fixtures_dir, "session.json")


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring API access"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
