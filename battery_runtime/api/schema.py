from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..analytics.export import config_to_dict
from ..analytics.outputs import CalculationResult
from ..models.battery import BatteryConfig
from ..models.load import (
    FrequencyRepetition,
    IntervalRepetition,
    LeakageCurrent,
    LoadProfile,
    Phase,
    Repetition,
)
from ..models.presets import PRESETS
from ..models.units import (
    CurrentUnit,
    DurationUnit,
    FrequencyUnit,
    IntervalUnit,
    RepetitionMode,
)
from ..simulation.engine import calculate


# --------- User input schema ---------
# Field names match the JSON snapshot written by analytics.export, so a saved
# snapshot can be posted as a request body unchanged.


@dataclass
class BatteryInput:
    capacity_mAh: float
    usable_percent: float = 100.0
    self_discharge_pct_per_month: float = 0.0


@dataclass
class PhaseInput:
    """One phase as entered by a user. Repetition fields follow ``mode``."""

    name: str
    current: float
    current_unit: CurrentUnit = "mA"
    is_deep_sleep: bool = False
    id: Optional[str] = None  # generated when omitted

    duration: float = 0.0
    duration_unit: DurationUnit = "s"

    mode: Optional[RepetitionMode] = "frequency"
    frequency: Optional[float] = None
    frequency_unit: FrequencyUnit = "perHour"
    interval: Optional[float] = None
    interval_unit: IntervalUnit = "s"


@dataclass
class LeakageInput:
    label: str
    current: float
    current_unit: CurrentUnit = "µA"
    id: Optional[str] = None


@dataclass
class UserConfig:
    """Top-level request for a runtime estimate."""

    battery: BatteryInput
    phases: List[PhaseInput] = field(default_factory=list)
    leakage_currents: List[LeakageInput] = field(default_factory=list)


# --------- Helper functions ---------


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:9]}"


def _build_repetition(p: PhaseInput) -> Optional[Repetition]:
    """Missing magnitudes map to no repetition, which validation reports."""
    if p.is_deep_sleep:
        return None
    if p.mode == "interval":
        if p.interval is None:
            return None
        return IntervalRepetition(period=float(p.interval), unit=p.interval_unit)
    if p.mode == "frequency":
        if p.frequency is None:
            return None
        return FrequencyRepetition(rate=float(p.frequency), unit=p.frequency_unit)
    return None


def _build_phase(p: PhaseInput) -> Phase:
    return Phase(
        id=p.id or _new_id("phase"),
        name=p.name,
        current=float(p.current),
        current_unit=p.current_unit,
        is_deep_sleep=bool(p.is_deep_sleep),
        duration=float(p.duration),
        duration_unit=p.duration_unit,
        repetition=_build_repetition(p),
    )


def _build_leakage(leak: LeakageInput) -> LeakageCurrent:
    return LeakageCurrent(
        id=leak.id or _new_id("leakage"),
        label=leak.label,
        current=float(leak.current),
        current_unit=leak.current_unit,
    )


def build_model(user_config: UserConfig) -> Tuple[BatteryConfig, LoadProfile]:
    """Translate a user request into the engine's battery and load profile."""
    b = user_config.battery
    battery = BatteryConfig(
        capacity_mAh=float(b.capacity_mAh),
        usable_percent=float(b.usable_percent),
        self_discharge_pct_per_month=float(b.self_discharge_pct_per_month),
    )
    profile = LoadProfile(
        phases=tuple(_build_phase(p) for p in user_config.phases),
        leakage_currents=tuple(_build_leakage(leak) for leak in user_config.leakage_currents),
    )
    return battery, profile


def preset_config(name: str) -> dict:
    """Snapshot dict of a named preset, usable as a ``UserConfig`` body."""
    factory = PRESETS[name]
    battery, phases = factory()
    return config_to_dict(battery, LoadProfile(phases=tuple(phases)))


# --------- Public API ---------


def run_runtime_estimate(user_config: UserConfig) -> CalculationResult:
    """High-level entry point: build the model and run the engine."""
    battery, profile = build_model(user_config)
    return calculate(battery, profile.phases, profile.leakage_currents)
