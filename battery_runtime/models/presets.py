from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from .battery import BatteryConfig
from .load import FrequencyRepetition, Phase


def esp32_preset() -> Tuple[BatteryConfig, List[Phase]]:
    """ESP32 node waking once an hour for a 200 ms burst, otherwise in deep sleep."""
    battery = BatteryConfig(
        capacity_mAh=1000.0,
        usable_percent=80.0,
        self_discharge_pct_per_month=0.0,
    )
    phases = [
        Phase(
            id="active-1",
            name="Active",
            current=80.0,
            current_unit="mA",
            duration=0.2,
            duration_unit="s",
            repetition=FrequencyRepetition(rate=1.0, unit="perHour"),
        ),
        Phase(
            id="deepsleep-1",
            name="DeepSleep",
            current=0.01,
            current_unit="mA",
            is_deep_sleep=True,
        ),
    ]
    return battery, phases


PRESETS: Dict[str, Callable[[], Tuple[BatteryConfig, List[Phase]]]] = {
    "esp32": esp32_preset,
}
