"""Unit tests for timestamp helpers."""

from datetime import datetime

import pytest

from texmake.utils.timestamp import format_timestamp, now_exact


@pytest.mark.unit
def test_format_timestamp():
    assert format_timestamp("2025-11-13T18:45:40.572549") == "2025-11-13 18:45:40"


@pytest.mark.unit
def test_format_timestamp_passthrough():
    assert format_timestamp("not a timestamp") == "not a timestamp"


@pytest.mark.unit
def test_now_exact_is_iso():
    assert isinstance(datetime.fromisoformat(now_exact()), datetime)
