"""
Tests for Unix timestamp conversion.
"""

from datetime import datetime, timezone

import pytest

from devtools_hub.core.exceptions import ParseError
from devtools_hub.core.timestamps import (
    format_timestamp, parse_timestamp, timestamp_to_datetime, to_iso
)


class TestTimestamps:

    def test_seconds(self):
        assert format_timestamp(1700000000) == '2023-11-14T22:13:20.000Z'

    def test_milliseconds(self):
        assert format_timestamp(1700000000123) == '2023-11-14T22:13:20.123Z'

    def test_epoch(self):
        assert format_timestamp(0) == '1970-01-01T00:00:00.000Z'

    def test_explicit_digit_count(self):
        dt = timestamp_to_datetime(1700000000, digits=13)
        assert dt.year == 1970

    def test_result_is_utc_aware(self):
        assert timestamp_to_datetime(1700000000).tzinfo == timezone.utc

    def test_out_of_range(self):
        with pytest.raises(ParseError):
            timestamp_to_datetime(10 ** 30)

    def test_to_iso_converts_offsets(self):
        dt = datetime.fromisoformat('2023-11-15T00:13:20+02:00')
        assert to_iso(dt) == '2023-11-14T22:13:20.000Z'


class TestParseTimestamp:

    @pytest.mark.parametrize('text', [
        '2023-11-14T22:13:20Z',
        '2023-11-14T22:13:20.000Z',
        '2023-11-14T22:13:20+00:00',
        '2023-11-14 22:13:20',
        '  2023-11-14T23:13:20+01:00  ',
    ])
    def test_parse(self, text):
        assert parse_timestamp(text) == 1700000000

    def test_round_trip(self):
        assert parse_timestamp(format_timestamp(1700000000)) == 1700000000

    @pytest.mark.parametrize('text', ['', 'yesterday', '2023-13-01'])
    def test_invalid(self, text):
        with pytest.raises(ParseError):
            parse_timestamp(text)
