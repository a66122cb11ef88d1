from datetime import date, datetime

import pytest

from clinicapp.domain.scheduling.time_calculator import (
    format_time,
    intervals_overlap,
    is_past_date,
    normalize_time,
    to_interval,
    to_minutes,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("00:00", 0),
        ("09:30", 570),
        ("09:30:45", 570),
        ("23:59:00", 1439),
        ("7:05", 425),
    ],
)
def test_to_minutes(value, expected):
    assert to_minutes(value) == expected


def test_to_minutes_treats_garbage_components_as_zero():
    assert to_minutes("xx:15") == 15
    assert to_minutes("10:yy") == 600
    assert to_minutes("") == 0
    assert to_minutes("10") == 600


def test_to_interval_is_start_plus_duration():
    assert to_interval("10:00:00", 30) == (600, 630)
    assert to_interval("09:45", 60) == (585, 645)


def test_interval_past_midnight_is_not_wrapped():
    start, end = to_interval("23:45", 30)
    assert (start, end) == (1425, 1455)
    assert format_time(end) == "24:15:00"


def test_format_time():
    assert format_time(0) == "00:00:00"
    assert format_time(630) == "10:30:00"
    assert format_time(1439) == "23:59:00"


def test_normalize_time_pads_and_adds_seconds():
    assert normalize_time("9:05") == "09:05:00"
    assert normalize_time("14:30") == "14:30:00"
    assert normalize_time("14:30:15") == "14:30:15"


def test_touching_intervals_do_not_overlap():
    assert not intervals_overlap((600, 630), (630, 660))
    assert not intervals_overlap((630, 660), (600, 630))


def test_intersecting_intervals_overlap():
    assert intervals_overlap((600, 630), (615, 645))
    assert intervals_overlap((615, 645), (600, 630))


def test_contained_interval_overlaps():
    assert intervals_overlap((600, 720), (630, 660))
    assert intervals_overlap((630, 660), (600, 720))


def test_identical_intervals_overlap():
    assert intervals_overlap((600, 630), (600, 630))


def test_is_past_date():
    today = date(2030, 1, 15)
    assert is_past_date(date(2030, 1, 14), today)
    assert not is_past_date(today, today)
    assert not is_past_date(date(2030, 1, 16), today)
    assert is_past_date(datetime(2030, 1, 14, 23, 59), today)
