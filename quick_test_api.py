from __future__ import annotations

from battery_runtime.api.schema import (
    BatteryInput,
    LeakageInput,
    PhaseInput,
    UserConfig,
    run_runtime_estimate,
)


def main() -> None:
    # ESP32 waking every 15 minutes to publish over Wi-Fi.
    user_cfg = UserConfig(
        battery=BatteryInput(
            capacity_mAh=2500.0,
            usable_percent=80.0,
            self_discharge_pct_per_month=2.0,
        ),
        phases=[
            PhaseInput(
                name="Wi-Fi publish",
                current=120.0,
                current_unit="mA",
                duration=1.8,
                duration_unit="s",
                mode="interval",
                interval=15.0,
                interval_unit="min",
            ),
            PhaseInput(
                name="Sensor read",
                current=3.0,
                current_unit="mA",
                duration=250.0,
                duration_unit="ms",
                mode="frequency",
                frequency=4.0,
                frequency_unit="perHour",
            ),
            PhaseInput(name="DeepSleep", current=10.0, current_unit="µA", is_deep_sleep=True),
        ],
        leakage_currents=[LeakageInput(label="LDO quiescent", current=5.0, current_unit="µA")],
    )

    result = run_runtime_estimate(user_cfg)

    print("Total consumption (mAh/day):", f"{result.total_mAh_per_day:.3f}")
    print("Average current (mA):", f"{result.average_current_mA:.4f}")
    print(
        "Runtime days / months / years:",
        f"{result.runtime_days:.1f} / {result.runtime_months:.1f} / {result.runtime_years:.2f}",
    )
    for r in result.phase_results:
        print(f"  {r.phase_name}: {r.mAh_per_day:.4f} mAh/day")
    for w in result.warnings:
        print("Warning:", w)
    for e in result.errors:
        print("Error:", e)


if __name__ == "__main__":
    main()
