from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, Sequence, Tuple

import numpy as np

from ..models.battery import BatteryConfig
from ..models.load import FrequencyRepetition, IntervalRepetition, LeakageCurrent, Phase
from .engine import calculate

logger = logging.getLogger(__name__)

ConfigBuilder = Callable[[float], Tuple[BatteryConfig, Sequence[Phase]]]


@dataclass
class SweepOutputs:
    """Runtime and load for each value of one swept parameter."""

    parameter: str
    values: np.ndarray
    runtime_days: np.ndarray
    total_mAh_per_day: np.ndarray
    error_flags: np.ndarray

    def valid_mask(self) -> np.ndarray:
        return ~self.error_flags

    def runtime_stats(self) -> Dict[str, float]:
        """Min / max / mean runtime over the valid points of the sweep."""
        rt = self.runtime_days[self.valid_mask()]
        if rt.size == 0:
            return {"min": 0.0, "max": 0.0, "mean": 0.0}
        return {
            "min": float(np.min(rt)),
            "max": float(np.max(rt)),
            "mean": float(np.mean(rt)),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parameter": self.parameter,
            "values": self.values.tolist(),
            "runtime_days": self.runtime_days.tolist(),
            "total_mAh_per_day": self.total_mAh_per_day.tolist(),
            "error_count": int(np.sum(self.error_flags)),
            "runtime_stats_days": self.runtime_stats(),
        }


def run_sweep(
    values: Iterable[float],
    build: ConfigBuilder,
    parameter: str = "value",
    leakage_currents: Sequence[LeakageCurrent] = (),
) -> SweepOutputs:
    """Evaluate the engine once per value, with ``build(value)`` supplying the inputs.

    Each evaluation is independent, so points whose configuration is invalid
    are flagged and reported as zeros instead of aborting the sweep.
    """
    xs = np.asarray(list(values), dtype=float)
    N = xs.size

    runtimes = np.zeros(N, dtype=float)
    totals = np.zeros(N, dtype=float)
    errors = np.zeros(N, dtype=bool)

    for i, x in enumerate(xs):
        battery, phases = build(float(x))
        result = calculate(battery, phases, leakage_currents)
        runtimes[i] = result.runtime_days
        totals[i] = result.total_mAh_per_day
        errors[i] = not result.ok

    if np.any(errors):
        logger.info("Sweep over %s: %d of %d point(s) invalid", parameter, int(errors.sum()), N)

    return SweepOutputs(
        parameter=parameter,
        values=xs,
        runtime_days=runtimes,
        total_mAh_per_day=totals,
        error_flags=errors,
    )


def sweep_capacity(
    battery: BatteryConfig,
    phases: Sequence[Phase],
    capacities_mAh: Iterable[float],
    leakage_currents: Sequence[LeakageCurrent] = (),
) -> SweepOutputs:
    return run_sweep(
        capacities_mAh,
        lambda c: (replace(battery, capacity_mAh=c), phases),
        parameter="capacity_mAh",
        leakage_currents=leakage_currents,
    )


def sweep_self_discharge(
    battery: BatteryConfig,
    phases: Sequence[Phase],
    pct_per_month: Iterable[float],
    leakage_currents: Sequence[LeakageCurrent] = (),
) -> SweepOutputs:
    return run_sweep(
        pct_per_month,
        lambda r: (replace(battery, self_discharge_pct_per_month=r), phases),
        parameter="self_discharge_pct_per_month",
        leakage_currents=leakage_currents,
    )


def _with_repetition_magnitude(phase: Phase, magnitude: float) -> Phase:
    rep = phase.repetition
    if isinstance(rep, FrequencyRepetition):
        return replace(phase, repetition=replace(rep, rate=magnitude))
    if isinstance(rep, IntervalRepetition):
        return replace(phase, repetition=replace(rep, period=magnitude))
    raise ValueError(f"Phase {phase.id!r} has no repetition to sweep")


def sweep_phase_rate(
    battery: BatteryConfig,
    phases: Sequence[Phase],
    phase_id: str,
    magnitudes: Iterable[float],
    leakage_currents: Sequence[LeakageCurrent] = (),
) -> SweepOutputs:
    """Vary the frequency (or interval) of one phase, keeping its unit."""
    if not any(p.id == phase_id for p in phases):
        raise KeyError(phase_id)

    def build(m: float) -> Tuple[BatteryConfig, Sequence[Phase]]:
        return battery, [
            _with_repetition_magnitude(p, m) if p.id == phase_id else p for p in phases
        ]

    return run_sweep(
        magnitudes, build, parameter=f"{phase_id}.repetition", leakage_currents=leakage_currents
    )
