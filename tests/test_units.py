import pytest

from battery_runtime.models.units import (
    convert_current_to_mA,
    convert_duration_to_hours,
    convert_duration_to_seconds,
    convert_frequency_to_events_per_day,
    convert_interval_to_seconds,
    interval_to_events_per_day,
)


@pytest.mark.parametrize(
    "value,unit,expected",
    [
        (1000, "µA", 1.0),
        (1000, "uA", 1.0),
        (1_000_000, "nA", 1.0),
        (2.5, "mA", 2.5),
        (0.08, "A", 80.0),
    ],
)
def test_current_to_mA(value, unit, expected):
    assert convert_current_to_mA(value, unit) == pytest.approx(expected)


def test_micro_amp_exact():
    assert convert_current_to_mA(1000, "µA") == 1.0


@pytest.mark.parametrize(
    "value,unit,hours,seconds",
    [
        (3_600_000, "ms", 1.0, 3600.0),
        (1800, "s", 0.5, 1800.0),
        (90, "min", 1.5, 5400.0),
        (1, "h", 1.0, 3600.0),
    ],
)
def test_duration_conversions(value, unit, hours, seconds):
    assert convert_duration_to_hours(value, unit) == pytest.approx(hours)
    assert convert_duration_to_seconds(value, unit) == pytest.approx(seconds)


def test_one_hour_is_3600_seconds():
    assert convert_duration_to_seconds(1, "h") == 3600


def test_duration_hours_and_seconds_agree():
    for unit in ("ms", "s", "min", "h"):
        assert convert_duration_to_hours(7, unit) * 3600 == pytest.approx(
            convert_duration_to_seconds(7, unit)
        )


def test_frequency_to_events_per_day():
    assert convert_frequency_to_events_per_day(1, "perHour") == 24
    assert convert_frequency_to_events_per_day(3, "perDay") == 3
    assert convert_frequency_to_events_per_day(14, "perWeek") == pytest.approx(2.0)


def test_interval_conversions():
    assert convert_interval_to_seconds(10, "s") == 10
    assert convert_interval_to_seconds(10, "min") == 600
    assert convert_interval_to_seconds(2, "h") == 7200
    assert interval_to_events_per_day(10, "min") == pytest.approx(144.0)
    assert interval_to_events_per_day(1, "h") == pytest.approx(24.0)


@pytest.mark.parametrize("period", [0, -5])
def test_non_positive_interval_means_no_events(period):
    assert interval_to_events_per_day(period, "s") == 0.0


def test_conversions_are_linear():
    assert convert_current_to_mA(6, "µA") == pytest.approx(2 * convert_current_to_mA(3, "µA"))
    assert convert_frequency_to_events_per_day(10, "perWeek") == pytest.approx(
        10 * convert_frequency_to_events_per_day(1, "perWeek")
    )


@pytest.mark.parametrize(
    "func,unit",
    [
        (convert_current_to_mA, "kA"),
        (convert_duration_to_hours, "day"),
        (convert_duration_to_seconds, "us"),
        (convert_frequency_to_events_per_day, "perMonth"),
        (convert_interval_to_seconds, "ms"),
    ],
)
def test_unknown_unit_raises(func, unit):
    with pytest.raises(ValueError, match="Unsupported"):
        func(1.0, unit)
