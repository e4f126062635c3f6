from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np

from ..analytics.outputs import (
    SELF_DISCHARGE_PHASE_ID,
    SELF_DISCHARGE_PHASE_NAME,
    CalculationResult,
    PhaseResult,
)
from ..config import DEFAULTS
from ..models.battery import BatteryConfig
from ..models.load import IntervalRepetition, LeakageCurrent, LoadProfile, Phase

logger = logging.getLogger(__name__)


def _validate(
    battery: BatteryConfig,
    phases: Sequence[Phase],
    leakage_currents: Sequence[LeakageCurrent],
) -> Tuple[List[str], List[str]]:
    """Collect every validation problem at once.

    Comparisons are written as ``not (x > 0)`` so NaN fails them too.
    Magnitudes are also checked for finiteness after unit conversion, since a
    finite entry such as 1e306 A overflows once expressed in mA.
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not (battery.capacity_mAh > 0):
        errors.append("Battery capacity must be greater than 0")
    elif not np.isfinite(battery.capacity_mAh):
        errors.append("Battery capacity must be finite")
    if not (1 <= battery.usable_percent <= 100):
        errors.append("Usable capacity percentage must be between 1 and 100")
    if not (0 <= battery.self_discharge_pct_per_month < 100):
        errors.append("Self-discharge rate must be between 0 and 100 (exclusive)")

    seen_ids = set()
    for phase in phases:
        if phase.id in seen_ids:
            errors.append(f'Phase "{phase.name}": Duplicate phase id "{phase.id}"')
        seen_ids.add(phase.id)

        if not (phase.current > 0):
            errors.append(f'Phase "{phase.name}": Current must be greater than 0')
        elif not np.isfinite(phase.current_mA()):
            errors.append(f'Phase "{phase.name}": Current must be finite')
        if phase.is_deep_sleep:
            continue

        if not (phase.duration > 0):
            errors.append(f'Phase "{phase.name}": Duration must be greater than 0')
        elif not np.isfinite(phase.duration_seconds()):
            errors.append(f'Phase "{phase.name}": Duration must be finite')

        rep = phase.repetition
        if rep is None:
            errors.append(f'Phase "{phase.name}": Frequency or interval is required')
            continue
        label = "Interval" if rep.mode == "interval" else "Frequency"
        if not (rep.magnitude > 0):
            errors.append(f'Phase "{phase.name}": {label} must be greater than 0')
        elif not (np.isfinite(rep.magnitude) and np.isfinite(rep.events_per_day())):
            errors.append(f'Phase "{phase.name}": {label} must be finite')
        elif isinstance(rep, IntervalRepetition) and phase.duration > 0:
            duration_s = phase.duration_seconds()
            period_s = rep.period_seconds()
            if duration_s > period_s:
                warnings.append(
                    f'Phase "{phase.name}": Duration ({duration_s:g} s) is longer than '
                    f"the interval ({period_s:g} s); events overlap."
                )

    for leak in leakage_currents:
        if not (leak.current > 0):
            errors.append(f'Leakage "{leak.label}": Current must be greater than 0')
        elif not np.isfinite(leak.current_mA()):
            errors.append(f'Leakage "{leak.label}": Current must be finite')

    return errors, warnings


def _phase_consumption(phase: Phase) -> PhaseResult:
    events_per_day = phase.events_per_day()
    return PhaseResult(
        phase_id=phase.id,
        phase_name=phase.name,
        mAh_per_day=phase.current_mA() * phase.duration_hours() * events_per_day,
        events_per_day=events_per_day,
        active_time_per_day_s=phase.duration_seconds() * events_per_day,
    )


def _deep_sleep_consumption(phase: Phase, total_active_s: float) -> PhaseResult:
    sleep_s = max(0.0, DEFAULTS.seconds_per_day - total_active_s)
    return PhaseResult(
        phase_id=phase.id,
        phase_name=phase.name,
        mAh_per_day=phase.current_mA() * (sleep_s / 3600.0),
        events_per_day=0.0,
        active_time_per_day_s=sleep_s,
    )


def _leakage_consumption(leak: LeakageCurrent) -> PhaseResult:
    return PhaseResult(
        phase_id=leak.id,
        phase_name=leak.label,
        mAh_per_day=leak.current_mA() * 24.0,
        events_per_day=0.0,
        active_time_per_day_s=DEFAULTS.seconds_per_day,
    )


def _solve_runtime(
    battery: BatteryConfig, load_mAh_per_day: float, warnings: List[str]
) -> Tuple[float, float]:
    """Solve runtime under constant load plus proportional self-discharge.

    Returns
    -------
    runtime_days : float
    self_discharge_mAh_per_day : float
        Effective average self-discharge, back-derived as Q0 / runtime - L.
    """
    Q0 = battery.usable_capacity_mAh
    L = load_mAh_per_day
    k = battery.decay_constant_per_day()

    if k is None:
        logger.debug("Linear runtime solve: Q0=%.6g mAh, L=%.6g mAh/day", Q0, L)
        runtime_days = Q0 / L if L > 0.0 else 0.0
        return float(runtime_days), 0.0

    if L > 0.0:
        # dQ/dt = -L - kQ with Q(0) = Q0, solved for Q(t) = 0.
        runtime_days = float(np.log1p(k * Q0 / L) / k)
        if runtime_days <= 0.0:
            # k * Q0 / L underflowed: the load dwarfs self-discharge.
            return 0.0, 0.0
        self_discharge = max(0.0, Q0 / runtime_days - L)
        logger.debug(
            "Load + self-discharge solve: k=%.6g/day, runtime=%.6g days", k, runtime_days
        )
        return runtime_days, float(self_discharge)

    # Pure exponential decay never reaches zero; stop at a small remaining fraction.
    remaining = DEFAULTS.self_discharge_only_remaining_fraction
    runtime_days = float(np.log(1.0 / remaining) / k)
    warnings.append(
        "Runtime calculated for self-discharge only (no load). Exponential decay is "
        f"asymptotic; runtime shown is time to reach {remaining * 100:g}% remaining capacity."
    )
    logger.debug("Self-discharge only solve: k=%.6g/day, runtime=%.6g days", k, runtime_days)
    return runtime_days, float(Q0 / runtime_days)


def calculate(
    battery: BatteryConfig,
    phases: Sequence[Phase],
    leakage_currents: Sequence[LeakageCurrent] = (),
) -> CalculationResult:
    """Compute the daily charge budget and runtime for one device configuration.

    Non-deep-sleep phases are evaluated first, in input order. Each deep-sleep
    phase then fills whatever part of the 24 h cycle they leave free, leakage
    currents run around the clock, and self-discharge (if enabled and
    material) is appended as a synthetic entry.

    Validation problems are returned in ``errors`` with an all-zero result;
    nothing is raised for expected domain conditions.
    """
    errors, warnings = _validate(battery, phases, leakage_currents)
    if errors:
        logger.debug("Calculation rejected with %d validation error(s)", len(errors))
        return CalculationResult.failed(errors, warnings)

    profile = LoadProfile(tuple(phases), tuple(leakage_currents))
    phase_results: List[PhaseResult] = []
    total_active_s = 0.0

    for phase in profile.active_phases():
        result = _phase_consumption(phase)
        total_active_s += result.active_time_per_day_s
        phase_results.append(result)

    if total_active_s > DEFAULTS.seconds_per_day:
        warnings.append(
            f"Total active time per day ({total_active_s / 3600.0:.2f} h) exceeds "
            "24 hours. Deep-sleep time is clamped to 0."
        )

    for phase in profile.deep_sleep_phases():
        phase_results.append(_deep_sleep_consumption(phase, total_active_s))

    for leak in profile.leakage_currents:
        phase_results.append(_leakage_consumption(leak))

    load_mAh_per_day = float(sum(r.mAh_per_day for r in phase_results))
    if not np.isfinite(load_mAh_per_day):
        # every input is finite but the daily sum still overflowed
        return CalculationResult.failed(["Total consumption per day is too large"], warnings)
    runtime_days, self_discharge = _solve_runtime(battery, load_mAh_per_day, warnings)

    if self_discharge > DEFAULTS.self_discharge_materiality_mAh_per_day:
        phase_results.append(
            PhaseResult(
                phase_id=SELF_DISCHARGE_PHASE_ID,
                phase_name=SELF_DISCHARGE_PHASE_NAME,
                mAh_per_day=self_discharge,
                events_per_day=0.0,
                active_time_per_day_s=0.0,
            )
        )

    total_mAh_per_day = float(sum(r.mAh_per_day for r in phase_results))
    runtime_months = runtime_days / DEFAULTS.days_per_month

    return CalculationResult(
        phase_results=phase_results,
        total_mAh_per_day=total_mAh_per_day,
        average_current_mA=total_mAh_per_day / 24.0,
        runtime_days=runtime_days,
        runtime_weeks=runtime_days / DEFAULTS.days_per_week,
        runtime_months=runtime_months,
        runtime_years=runtime_months / DEFAULTS.months_per_year,
        errors=errors,
        warnings=warnings,
    )
