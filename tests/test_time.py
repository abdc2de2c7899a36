"""
Unit tests for timestamp parsing and hour keys.
"""

from datetime import datetime, timedelta

import pytest

from netsecdash.utils.time import hour_key, parse_hour_key, parse_ts, safe_parse_ts


class TestParse:
    def test_keeps_offset(self):
        dt = parse_ts("2024-01-01T10:15:00+05:30")
        assert dt.utcoffset() == timedelta(hours=5, minutes=30)
        assert dt.hour == 10

    def test_zulu(self):
        assert parse_ts("2024-01-01T10:15:00Z").utcoffset() == timedelta(0)

    def test_naive_stays_naive(self):
        assert parse_ts("2024-01-01T10:15:00").tzinfo is None

    @pytest.mark.parametrize("bad", ["not-a-date", "", None, 12, "2024-13-01T00:00:00Z"])
    def test_safe_parse_rejects(self, bad):
        assert safe_parse_ts(bad) is None


class TestHourKey:
    def test_truncates_to_hour(self):
        assert hour_key(datetime(2024, 1, 1, 10, 59, 59, 999999)) == "2024-01-01 10:00"

    def test_zero_padded(self):
        assert hour_key(datetime(2024, 2, 3, 4, 5)) == "2024-02-03 04:00"

    def test_year_below_1000_is_padded(self):
        assert hour_key(parse_ts("0999-12-31T23:30:00Z")) == "0999-12-31 23:00"
        assert hour_key(datetime(5, 1, 2, 3)) == "0005-01-02 03:00"

    def test_keys_sort_chronologically(self):
        dts = [
            datetime(999, 12, 31, 23),
            datetime(2023, 12, 31, 23),
            datetime(2024, 1, 1, 9),
            datetime(2024, 1, 1, 10),
        ]
        keys = [hour_key(d) for d in dts]
        assert sorted(keys) == keys

    def test_round_trip(self):
        assert parse_hour_key("2024-01-01 10:00") == datetime(2024, 1, 1, 10)
        assert parse_hour_key(hour_key(datetime(999, 12, 31, 23))) == datetime(999, 12, 31, 23)
