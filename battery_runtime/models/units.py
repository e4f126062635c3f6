"""Unit conversion into the engine's canonical units.

Canonical units are milliamps for current, hours or seconds for durations and
events per day for repetition rates. Unit tags are closed ``Literal`` sets;
request schemas and the snapshot loader reject anything else before it gets
here, so an unknown tag reaching a converter is a programming error and raises
``ValueError``.
"""
from __future__ import annotations

from typing import Literal, get_args


CurrentUnit = Literal["nA", "µA", "uA", "mA", "A"]
DurationUnit = Literal["ms", "s", "min", "h"]
FrequencyUnit = Literal["perHour", "perDay", "perWeek"]
IntervalUnit = Literal["s", "min", "h"]
RepetitionMode = Literal["frequency", "interval"]

CURRENT_UNITS = get_args(CurrentUnit)
DURATION_UNITS = get_args(DurationUnit)
FREQUENCY_UNITS = get_args(FrequencyUnit)
INTERVAL_UNITS = get_args(IntervalUnit)

SECONDS_PER_DAY = 86400.0


def convert_current_to_mA(value: float, unit: CurrentUnit) -> float:
    if unit == "nA":
        return float(value) / 1e6
    if unit in ("µA", "uA"):  # uA is the ASCII spelling
        return float(value) / 1e3
    if unit == "mA":
        return float(value)
    if unit == "A":
        return float(value) * 1e3
    raise ValueError(f"Unsupported current unit={unit!r}")


def convert_duration_to_hours(value: float, unit: DurationUnit) -> float:
    if unit == "ms":
        return float(value) / (1000.0 * 3600.0)
    if unit == "s":
        return float(value) / 3600.0
    if unit == "min":
        return float(value) / 60.0
    if unit == "h":
        return float(value)
    raise ValueError(f"Unsupported duration unit={unit!r}")


def convert_duration_to_seconds(value: float, unit: DurationUnit) -> float:
    if unit == "ms":
        return float(value) / 1000.0
    if unit == "s":
        return float(value)
    if unit == "min":
        return float(value) * 60.0
    if unit == "h":
        return float(value) * 3600.0
    raise ValueError(f"Unsupported duration unit={unit!r}")


def convert_frequency_to_events_per_day(value: float, unit: FrequencyUnit) -> float:
    if unit == "perHour":
        return float(value) * 24.0
    if unit == "perDay":
        return float(value)
    if unit == "perWeek":
        return float(value) / 7.0
    raise ValueError(f"Unsupported frequency unit={unit!r}")


def convert_interval_to_seconds(value: float, unit: IntervalUnit) -> float:
    if unit == "s":
        return float(value)
    if unit == "min":
        return float(value) * 60.0
    if unit == "h":
        return float(value) * 3600.0
    raise ValueError(f"Unsupported interval unit={unit!r}")


def interval_to_events_per_day(value: float, unit: IntervalUnit) -> float:
    """Events per day for a fixed period between events (0 for a non-positive period)."""
    seconds = convert_interval_to_seconds(value, unit)
    if seconds <= 0.0:
        return 0.0
    return SECONDS_PER_DAY / seconds
