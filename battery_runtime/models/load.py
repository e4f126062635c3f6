from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .units import (
    CurrentUnit,
    DurationUnit,
    FrequencyUnit,
    IntervalUnit,
    convert_current_to_mA,
    convert_duration_to_hours,
    convert_duration_to_seconds,
    convert_frequency_to_events_per_day,
    convert_interval_to_seconds,
    interval_to_events_per_day,
)


@dataclass(frozen=True)
class FrequencyRepetition:
    """Phase repeats ``rate`` times per hour, day or week."""

    rate: float
    unit: FrequencyUnit = "perHour"

    mode = "frequency"

    @property
    def magnitude(self) -> float:
        return self.rate

    def events_per_day(self) -> float:
        return convert_frequency_to_events_per_day(self.rate, self.unit)


@dataclass(frozen=True)
class IntervalRepetition:
    """Phase repeats with a fixed ``period`` between the starts of two events."""

    period: float
    unit: IntervalUnit = "s"

    mode = "interval"

    @property
    def magnitude(self) -> float:
        return self.period

    def period_seconds(self) -> float:
        return convert_interval_to_seconds(self.period, self.unit)

    def events_per_day(self) -> float:
        return interval_to_events_per_day(self.period, self.unit)


Repetition = Union[FrequencyRepetition, IntervalRepetition]


@dataclass(frozen=True)
class Phase:
    """One repeating activity of the device, or its deep-sleep baseline.

    For a deep-sleep phase only the current matters: its daily time is the
    part of 24 h not used by the other phases, so ``duration`` and
    ``repetition`` are ignored.
    """

    id: str
    name: str
    current: float
    current_unit: CurrentUnit = "mA"
    is_deep_sleep: bool = False

    # time active per event
    duration: float = 0.0
    duration_unit: DurationUnit = "s"

    repetition: Optional[Repetition] = None

    def current_mA(self) -> float:
        return convert_current_to_mA(self.current, self.current_unit)

    def duration_hours(self) -> float:
        return convert_duration_to_hours(self.duration, self.duration_unit)

    def duration_seconds(self) -> float:
        return convert_duration_to_seconds(self.duration, self.duration_unit)

    def events_per_day(self) -> float:
        if self.is_deep_sleep or self.repetition is None:
            return 0.0
        return self.repetition.events_per_day()


@dataclass(frozen=True)
class LeakageCurrent:
    """Constant draw present around the clock (regulator quiescent, dividers)."""

    id: str
    label: str
    current: float
    current_unit: CurrentUnit = "µA"

    def current_mA(self) -> float:
        return convert_current_to_mA(self.current, self.current_unit)


@dataclass(frozen=True)
class LoadProfile:
    """Everything that draws from the battery, in display order."""

    phases: Tuple[Phase, ...] = field(default_factory=tuple)
    leakage_currents: Tuple[LeakageCurrent, ...] = field(default_factory=tuple)

    def active_phases(self) -> Tuple[Phase, ...]:
        return tuple(p for p in self.phases if not p.is_deep_sleep)

    def deep_sleep_phases(self) -> Tuple[Phase, ...]:
        return tuple(p for p in self.phases if p.is_deep_sleep)
