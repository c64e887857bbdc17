"""
Tests für die Zeit-Primitive ClockTime und TimeSpan.
"""
import pytest

from milog.core.exceptions import TimeRangeError
from milog.models.clock import ClockTime, TimeSpan


# ── ClockTime ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("hour,minute", [(24, 0), (-1, 0), (0, 60), (12, -5)])
def test_clock_time_out_of_range(hour, minute):
    with pytest.raises(TimeRangeError):
        ClockTime(hour, minute)


def test_clock_time_bounds_inclusive():
    assert str(ClockTime(0, 0)) == "00:00"
    assert str(ClockTime(23, 59)) == "23:59"


def test_clock_time_parse():
    assert ClockTime.parse("8:05") == ClockTime(8, 5)
    assert ClockTime.parse(" 22:00 ") == ClockTime(22, 0)


@pytest.mark.parametrize("text", ["", "8", "ab:cd", "8:00:00", "24:00"])
def test_clock_time_parse_invalid(text):
    with pytest.raises(TimeRangeError):
        ClockTime.parse(text)


def test_clock_time_ordering():
    assert ClockTime(5, 59) < ClockTime(6, 0) < ClockTime(6, 1)
    assert ClockTime(22, 0) == ClockTime(22, 0)
    assert len({ClockTime(8, 0), ClockTime(8, 0), ClockTime(9, 0)}) == 2


def test_clock_time_difference_is_time_span():
    """18:45 − 08:00 → 10:45."""
    assert ClockTime(18, 45) - ClockTime(8, 0) == TimeSpan(10, 45)
    assert ClockTime(8, 0) - ClockTime(8, 0) == TimeSpan.ZERO


def test_clock_time_difference_negative_fails():
    with pytest.raises(TimeRangeError):
        ClockTime(8, 0) - ClockTime(9, 0)


def test_clock_time_add_and_subtract_span():
    assert ClockTime(8, 0) + TimeSpan(1, 30) == ClockTime(9, 30)
    assert ClockTime(8, 0) - TimeSpan(0, 15) == ClockTime(7, 45)


def test_clock_time_leaving_day_fails():
    with pytest.raises(TimeRangeError):
        ClockTime(23, 30) + TimeSpan(0, 30)
    with pytest.raises(TimeRangeError):
        ClockTime(0, 10) - TimeSpan(0, 11)


# ── TimeSpan ──────────────────────────────────────────────────────────────────

def test_time_span_normalized():
    assert TimeSpan(0, 90) == TimeSpan(1, 30)
    assert TimeSpan(0, 90).hours == 1
    assert TimeSpan(0, 90).minutes == 30
    assert TimeSpan(1, 30).total_minutes == 90


def test_time_span_str():
    assert str(TimeSpan(0, 5)) == "0:05"
    assert str(TimeSpan(40, 0)) == "40:00"


def test_time_span_parse_above_one_day():
    assert TimeSpan.parse("40:00") == TimeSpan(40, 0)


@pytest.mark.parametrize("text", ["1:60", "-1:00", "x"])
def test_time_span_parse_invalid(text):
    with pytest.raises(TimeRangeError):
        TimeSpan.parse(text)


def test_time_span_negative_fails():
    with pytest.raises(TimeRangeError):
        TimeSpan(-1, 0)


def test_time_span_add_subtract_return_new_values():
    a = TimeSpan(6, 0)
    b = TimeSpan(0, 30)
    assert a + b == TimeSpan(6, 30)
    assert a - b == TimeSpan(5, 30)
    assert a == TimeSpan(6, 0)


def test_time_span_underflow_raises():
    """Größere Spanne abziehen ist ein Fehler, kein Clamping auf 0."""
    with pytest.raises(TimeRangeError):
        TimeSpan(0, 30) - TimeSpan(0, 31)


def test_time_range_error_is_value_error():
    with pytest.raises(ValueError):
        TimeSpan(0, 30) - TimeSpan(1, 0)


def test_time_span_ordering():
    assert TimeSpan(5, 59) < TimeSpan(6, 0) <= TimeSpan(0, 360)
    assert max(TimeSpan(1, 0), TimeSpan(0, 61)) == TimeSpan(1, 1)
