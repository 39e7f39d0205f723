"""
Tests for the Open-Meteo API client.

The HTTP session is mocked; no request leaves the test.
"""

import asyncio
import unittest
from unittest.mock import Mock

import requests

from src.air_pollution.api import OpenMeteoAPI
from src.air_pollution.core import constants
from src.air_pollution.core.exceptions import NetworkError, MalformedResponseError


def make_response(payload=None, status_error=None, json_error=None):
    response = Mock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestAPIClient(unittest.TestCase):
    """Test request handling and error translation."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = OpenMeteoAPI(timeout=5, max_retries=0, logger=Mock())
        self.client.session = Mock()

    def test_get_returns_json_object(self):
        self.client.session.get.return_value = make_response({"results": []})

        payload = self.client.get("https://example.test/search", params={"name": "x"})

        self.assertEqual(payload, {"results": []})
        self.client.session.get.assert_called_once_with(
            "https://example.test/search",
            params={"name": "x"},
            timeout=5,
            verify=True
        )

    def test_timeout_becomes_network_error(self):
        self.client.session.get.side_effect = requests.exceptions.Timeout("slow")

        with self.assertRaises(NetworkError) as ctx:
            self.client.get("https://example.test/search")

        self.assertIn("timed out", str(ctx.exception))

    def test_connection_error_becomes_network_error(self):
        self.client.session.get.side_effect = requests.exceptions.ConnectionError("offline")

        with self.assertRaises(NetworkError):
            self.client.get("https://example.test/search")

    def test_http_status_becomes_network_error(self):
        self.client.session.get.return_value = make_response(
            status_error=requests.exceptions.HTTPError("503 Server Error")
        )

        with self.assertRaises(NetworkError):
            self.client.get("https://example.test/search")

    def test_invalid_json_is_malformed(self):
        self.client.session.get.return_value = make_response(json_error=ValueError("Expecting value"))

        with self.assertRaises(MalformedResponseError):
            self.client.get("https://example.test/search")

    def test_non_object_json_is_malformed(self):
        self.client.session.get.return_value = make_response(["not", "an", "object"])

        with self.assertRaises(MalformedResponseError):
            self.client.get("https://example.test/search")

    def test_get_async_runs_request(self):
        self.client.session.get.return_value = make_response({"ok": True})

        payload = asyncio.run(self.client.get_async("https://example.test/search"))

        self.assertEqual(payload, {"ok": True})

    def test_search_locations_requests_one_result(self):
        self.client.session.get.return_value = make_response({"results": []})

        asyncio.run(self.client.search_locations("Kraków, PL"))

        args, kwargs = self.client.session.get.call_args
        self.assertEqual(args[0], constants.GEOCODING_URL)
        self.assertEqual(kwargs["params"], {"name": "Kraków, PL", "count": 1})

    def test_get_hourly_series_params(self):
        self.client.session.get.return_value = make_response({"hourly": {}})

        asyncio.run(self.client.get_hourly_series(
            url=constants.AIR_QUALITY_URL,
            latitude=50.06,
            longitude=19.94,
            parameters=["pm10", "pm2_5", "nitrogen_dioxide"],
            past_days=2,
            forecast_days=3
        ))

        args, kwargs = self.client.session.get.call_args
        self.assertEqual(args[0], constants.AIR_QUALITY_URL)
        self.assertEqual(kwargs["params"], {
            "latitude": 50.06,
            "longitude": 19.94,
            "hourly": "pm10,pm2_5,nitrogen_dioxide",
            "past_days": 2,
            "forecast_days": 3,
        })

    def test_context_manager_closes_session(self):
        with self.client as client:
            self.assertIs(client, self.client)
        self.client.session.close.assert_called_once()


class TestSessionSetup(unittest.TestCase):
    """Test the real session configuration."""

    def test_retry_adapter_mounted(self):
        client = OpenMeteoAPI(max_retries=2)
        adapter = client.session.get_adapter("https://example.test")

        self.assertEqual(adapter.max_retries.total, 2)
        self.assertIn(503, adapter.max_retries.status_forcelist)
        self.assertEqual(client.session.headers["Accept"], "application/json")
        client.close()
