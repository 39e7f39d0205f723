"""
Tests for date and timezone handling.
"""

import unittest

from src.air_pollution.core import DateUtils


class TestDateUtils(unittest.TestCase):

    def setUp(self):
        self.utils = DateUtils()

    def test_naive_stamp_uses_response_timezone(self):
        parsed = self.utils.parse_timestamp("2025-04-20T13:00", "Europe/Warsaw")

        # CEST in April
        self.assertEqual(parsed.utcoffset().total_seconds(), 7200)

    def test_missing_timezone_means_utc(self):
        self.assertEqual(self.utils.to_epoch_ms("2025-04-20T00:00"), 1745107200000)

    def test_zulu_suffix(self):
        self.assertEqual(self.utils.to_epoch_ms("2025-04-20T00:00Z", "Europe/Warsaw"), 1745107200000)

    def test_invalid_timezone(self):
        with self.assertRaises(ValueError):
            DateUtils.parse_timezone("Mars/Olympus")

    def test_invalid_timestamp(self):
        with self.assertRaises(ValueError):
            self.utils.parse_timestamp("yesterday")
