from __future__ import annotations

import streamlit as st

from battery_runtime.analytics.export import config_to_json, export_filename, results_to_csv
from battery_runtime.analytics.plots import plot_phase_breakdown
from battery_runtime.api.schema import (
    BatteryInput,
    PhaseInput,
    UserConfig,
    build_model,
    run_runtime_estimate,
)
from battery_runtime.models.units import (
    CURRENT_UNITS,
    DURATION_UNITS,
    FREQUENCY_UNITS,
    INTERVAL_UNITS,
)

# "uA" stays accepted by the converters but is not offered next to "µA".
DISPLAY_CURRENT_UNITS = tuple(u for u in CURRENT_UNITS if u != "uA")


def phase_inputs(idx: int) -> PhaseInput:
    """Sidebar widgets for one active phase."""
    st.sidebar.subheader(f"Phase {idx + 1}")
    name = st.sidebar.text_input("Name", value=f"Active {idx + 1}", key=f"name{idx}")
    current = st.sidebar.number_input("Current", min_value=0.0, value=80.0, step=1.0, key=f"cur{idx}")
    current_unit = st.sidebar.selectbox("Current unit", DISPLAY_CURRENT_UNITS, index=2, key=f"curu{idx}")
    duration = st.sidebar.number_input(
        "Duration per event", min_value=0.0, value=0.2, step=0.1, format="%.3f", key=f"dur{idx}"
    )
    duration_unit = st.sidebar.selectbox("Duration unit", DURATION_UNITS, index=1, key=f"duru{idx}")
    mode = st.sidebar.radio("Repeat by", ["frequency", "interval"], index=0, key=f"mode{idx}")
    if mode == "frequency":
        frequency = st.sidebar.number_input("Events", min_value=0.0, value=1.0, step=1.0, key=f"freq{idx}")
        frequency_unit = st.sidebar.selectbox("Per", FREQUENCY_UNITS, index=0, key=f"frequ{idx}")
        return PhaseInput(
            id=f"phase-{idx + 1}",
            name=name,
            current=current,
            current_unit=current_unit,
            duration=duration,
            duration_unit=duration_unit,
            mode="frequency",
            frequency=frequency,
            frequency_unit=frequency_unit,
        )
    interval = st.sidebar.number_input("Every", min_value=0.0, value=60.0, step=1.0, key=f"int{idx}")
    interval_unit = st.sidebar.selectbox("Interval unit", INTERVAL_UNITS, index=1, key=f"intu{idx}")
    return PhaseInput(
        id=f"phase-{idx + 1}",
        name=name,
        current=current,
        current_unit=current_unit,
        duration=duration,
        duration_unit=duration_unit,
        mode="interval",
        interval=interval,
        interval_unit=interval_unit,
    )


def main() -> None:
    st.title("Battery Runtime Estimator")

    st.sidebar.header("Battery")
    capacity_mAh = st.sidebar.number_input("Capacity (mAh)", min_value=0.0, value=1000.0, step=50.0)
    usable_percent = st.sidebar.number_input("Usable capacity (%)", min_value=1.0, max_value=100.0, value=80.0)
    self_discharge = st.sidebar.number_input(
        "Self-discharge (%/month)", min_value=0.0, max_value=99.9, value=0.0, step=0.5
    )

    st.sidebar.header("Phases")
    n_phases = int(st.sidebar.number_input("Active phases", min_value=0, value=1, step=1))
    phases = [phase_inputs(i) for i in range(n_phases)]

    st.sidebar.subheader("Deep sleep")
    sleep_current = st.sidebar.number_input("Deep-sleep current", min_value=0.0, value=10.0, step=1.0)
    sleep_unit = st.sidebar.selectbox("Deep-sleep unit", DISPLAY_CURRENT_UNITS, index=1)
    phases.append(
        PhaseInput(
            id="deepsleep-1",
            name="DeepSleep",
            current=sleep_current,
            current_unit=sleep_unit,
            is_deep_sleep=True,
            mode=None,
        )
    )

    user_cfg = UserConfig(
        battery=BatteryInput(
            capacity_mAh=capacity_mAh,
            usable_percent=usable_percent,
            self_discharge_pct_per_month=self_discharge,
        ),
        phases=phases,
    )
    result = run_runtime_estimate(user_cfg)

    for e in result.errors:
        st.error(e)
    for w in result.warnings:
        st.warning(w)
    if not result.ok:
        return

    st.subheader("Results")
    col1, col2, col3 = st.columns(3)
    col1.metric("Average current (mA)", f"{result.average_current_mA:.4f}")
    col2.metric("Consumption (mAh/day)", f"{result.total_mAh_per_day:.3f}")
    col3.metric("Runtime (days)", f"{result.runtime_days:.1f}")
    st.write(
        f"Runtime: {result.runtime_weeks:.1f} weeks / {result.runtime_months:.1f} months / "
        f"{result.runtime_years:.2f} years"
    )
    st.pyplot(plot_phase_breakdown(result))

    with st.expander("Full output JSON"):
        st.json(result.to_dict())

    battery, profile = build_model(user_cfg)
    st.download_button(
        "Download configuration (JSON)",
        config_to_json(battery, profile),
        file_name=export_filename("config"),
        mime="application/json",
    )
    st.download_button(
        "Download results (CSV)",
        results_to_csv(result),
        file_name=export_filename("results"),
        mime="text/csv",
    )


if __name__ == "__main__":
    main()
