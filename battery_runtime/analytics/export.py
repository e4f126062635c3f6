"""Serialization of calculator state and results.

The JSON snapshot stores the inputs (battery, phases, leakage currents) so an
editing session can be restored; the CSV export is a formatted report of an
already computed :class:`CalculationResult`. Neither recomputes anything.
"""
from __future__ import annotations

import csv
import io
import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..models.battery import BatteryConfig
from ..models.load import (
    FrequencyRepetition,
    IntervalRepetition,
    LeakageCurrent,
    LoadProfile,
    Phase,
)
from ..models.units import (
    CURRENT_UNITS,
    DURATION_UNITS,
    FREQUENCY_UNITS,
    INTERVAL_UNITS,
)
from .outputs import CalculationResult

PathLike = Union[str, Path]


# ---- JSON snapshot ----


def _phase_to_dict(phase: Phase) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "id": phase.id,
        "name": phase.name,
        "is_deep_sleep": phase.is_deep_sleep,
        "current": phase.current,
        "current_unit": phase.current_unit,
        "duration": phase.duration,
        "duration_unit": phase.duration_unit,
        "mode": None,
    }
    rep = phase.repetition
    if isinstance(rep, FrequencyRepetition):
        d.update(mode="frequency", frequency=rep.rate, frequency_unit=rep.unit)
    elif isinstance(rep, IntervalRepetition):
        d.update(mode="interval", interval=rep.period, interval_unit=rep.unit)
    return d


def _check_unit(value: str, allowed: Tuple[str, ...], field_name: str) -> str:
    if value not in allowed:
        raise ValueError(f"Invalid {field_name}={value!r}; expected one of {list(allowed)}")
    return value


def _phase_from_dict(d: Dict[str, Any]) -> Phase:
    mode = d.get("mode")
    if mode == "frequency":
        repetition = FrequencyRepetition(
            rate=float(d["frequency"]),
            unit=_check_unit(d.get("frequency_unit", "perHour"), FREQUENCY_UNITS, "frequency_unit"),
        )
    elif mode == "interval":
        repetition = IntervalRepetition(
            period=float(d["interval"]),
            unit=_check_unit(d.get("interval_unit", "s"), INTERVAL_UNITS, "interval_unit"),
        )
    elif mode is None:
        repetition = None
    else:
        raise ValueError(f"Unsupported repetition mode={mode!r}")

    return Phase(
        id=str(d["id"]),
        name=str(d["name"]),
        is_deep_sleep=bool(d.get("is_deep_sleep", False)),
        current=float(d["current"]),
        current_unit=_check_unit(d.get("current_unit", "mA"), CURRENT_UNITS, "current_unit"),
        duration=float(d.get("duration", 0.0)),
        duration_unit=_check_unit(d.get("duration_unit", "s"), DURATION_UNITS, "duration_unit"),
        repetition=repetition,
    )


def config_to_dict(battery: BatteryConfig, profile: LoadProfile) -> Dict[str, Any]:
    return {
        "battery": {
            "capacity_mAh": battery.capacity_mAh,
            "usable_percent": battery.usable_percent,
            "self_discharge_pct_per_month": battery.self_discharge_pct_per_month,
        },
        "phases": [_phase_to_dict(p) for p in profile.phases],
        "leakage_currents": [
            {
                "id": leak.id,
                "label": leak.label,
                "current": leak.current,
                "current_unit": leak.current_unit,
            }
            for leak in profile.leakage_currents
        ],
    }


def config_from_dict(cfg: Dict[str, Any]) -> Tuple[BatteryConfig, LoadProfile]:
    """Rebuild battery and load profile from a snapshot dict.

    Raises ValueError on missing fields or unknown unit tags.
    """
    try:
        b = cfg["battery"]
        battery = BatteryConfig(
            capacity_mAh=float(b["capacity_mAh"]),
            usable_percent=float(b.get("usable_percent", 100.0)),
            self_discharge_pct_per_month=float(b.get("self_discharge_pct_per_month", 0.0)),
        )
        phases = tuple(_phase_from_dict(p) for p in cfg.get("phases", []))
        leaks = tuple(
            LeakageCurrent(
                id=str(leak["id"]),
                label=str(leak["label"]),
                current=float(leak["current"]),
                current_unit=_check_unit(
                    leak.get("current_unit", "µA"), CURRENT_UNITS, "current_unit"
                ),
            )
            for leak in cfg.get("leakage_currents", [])
        )
    except KeyError as exc:
        raise ValueError(f"Snapshot is missing field {exc}") from exc
    return battery, LoadProfile(phases=phases, leakage_currents=leaks)


def config_to_json(battery: BatteryConfig, profile: LoadProfile) -> str:
    return json.dumps(config_to_dict(battery, profile), indent=2, ensure_ascii=False)


def config_from_json(text: str) -> Tuple[BatteryConfig, LoadProfile]:
    return config_from_dict(json.loads(text))


# ---- CSV report ----


def _results_rows(result: CalculationResult) -> List[List[str]]:
    rows: List[List[str]] = [
        ["Metric", "Value", "Unit"],
        ["Average Current", f"{result.average_current_mA:.3f}", "mA"],
        ["Total Consumption per Day", f"{result.total_mAh_per_day:.2f}", "mAh/day"],
        ["Runtime", f"{result.runtime_days:.1f}", "days"],
        ["Runtime", f"{result.runtime_weeks:.1f}", "weeks"],
        ["Runtime", f"{result.runtime_months:.1f}", "months"],
        ["Runtime", f"{result.runtime_years:.1f}", "years"],
        [],
        ["Phase", "mAh/day", "Events/day", "Active Time/day (h)"],
    ]
    for r in result.phase_results:
        rows.append(
            [
                r.phase_name,
                f"{r.mAh_per_day:.3f}",
                f"{r.events_per_day:.1f}" if r.events_per_day > 0 else "N/A",
                f"{r.active_time_per_day_s / 3600.0:.2f}" if r.active_time_per_day_s > 0 else "Auto",
            ]
        )
    return rows


def results_to_csv(result: CalculationResult) -> str:
    """Render KPIs and the phase breakdown as a fully quoted CSV document."""
    if not result.ok:
        raise ValueError("Cannot export: there are errors in the calculation.")
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(_results_rows(result))
    return buf.getvalue()


# ---- files ----


def export_filename(kind: str, day: Optional[date] = None) -> str:
    """``battery-config-YYYY-MM-DD.json`` or ``battery-results-YYYY-MM-DD.csv``."""
    day = day or date.today()
    if kind == "config":
        return f"battery-config-{day.isoformat()}.json"
    if kind == "results":
        return f"battery-results-{day.isoformat()}.csv"
    raise ValueError(f"Unsupported export kind={kind!r}")


def save_config(path: PathLike, battery: BatteryConfig, profile: LoadProfile) -> Path:
    p = Path(path)
    p.write_text(config_to_json(battery, profile), encoding="utf-8")
    return p


def load_config(path: PathLike) -> Tuple[BatteryConfig, LoadProfile]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return config_from_json(f.read())


def save_results(path: PathLike, result: CalculationResult) -> Path:
    p = Path(path)
    p.write_text(results_to_csv(result), encoding="utf-8")
    return p
