from __future__ import annotations

import numpy as np

from battery_runtime.config import configure_logging
from battery_runtime.models.battery import BatteryConfig
from battery_runtime.models.load import IntervalRepetition, LeakageCurrent, Phase
from battery_runtime.models.presets import esp32_preset
from battery_runtime.simulation.engine import calculate
from battery_runtime.simulation.sweep import sweep_self_discharge


def make_sensor_node() -> tuple[BatteryConfig, list[Phase], list[LeakageCurrent]]:
    # CR2477 coin cell reporting every 10 minutes over BLE.
    battery = BatteryConfig(
        capacity_mAh=1000.0,
        usable_percent=85.0,
        self_discharge_pct_per_month=1.0,
    )
    phases = [
        Phase(
            id="measure",
            name="Measure",
            current=1.2,
            current_unit="mA",
            duration=40.0,
            duration_unit="ms",
            repetition=IntervalRepetition(period=10.0, unit="min"),
        ),
        Phase(
            id="advertise",
            name="BLE advertise",
            current=8.0,
            current_unit="mA",
            duration=3.0,
            duration_unit="ms",
            repetition=IntervalRepetition(period=10.0, unit="min"),
        ),
        Phase(
            id="sleep",
            name="Sleep",
            current=1.5,
            current_unit="µA",
            is_deep_sleep=True,
        ),
    ]
    leaks = [LeakageCurrent(id="divider", label="Battery divider", current=0.3, current_unit="µA")]
    return battery, phases, leaks


def main() -> None:
    configure_logging()

    battery, phases = esp32_preset()
    print("ESP32 preset:", calculate(battery, phases).to_dict())

    battery, phases, leaks = make_sensor_node()
    result = calculate(battery, phases, leaks)
    for r in result.phase_results:
        print(f"  {r.phase_name:<16} {r.mAh_per_day:9.4f} mAh/day")
    print(f"Sensor node runtime: {result.runtime_days:.0f} days ({result.runtime_years:.1f} years)")
    for w in result.warnings:
        print("warning:", w)

    outputs = sweep_self_discharge(battery, phases, np.linspace(0.0, 5.0, 11), leaks)
    print("Self-discharge sweep:", outputs.to_dict()["runtime_stats_days"])


if __name__ == "__main__":
    main()
