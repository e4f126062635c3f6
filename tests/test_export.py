import csv
import io
import json
from datetime import date

import pytest

from battery_runtime.analytics.export import (
    config_from_json,
    config_to_dict,
    config_to_json,
    export_filename,
    load_config,
    results_to_csv,
    save_config,
    save_results,
)
from battery_runtime.models.battery import BatteryConfig
from battery_runtime.models.load import (
    FrequencyRepetition,
    IntervalRepetition,
    LeakageCurrent,
    LoadProfile,
    Phase,
)
from battery_runtime.simulation.engine import calculate


@pytest.fixture
def profile():
    return LoadProfile(
        phases=(
            Phase(
                id="tx",
                name="Transmit",
                current=25.0,
                current_unit="mA",
                duration=12.0,
                duration_unit="ms",
                repetition=IntervalRepetition(period=30.0, unit="s"),
            ),
            Phase(
                id="adc",
                name="ADC",
                current=300.0,
                current_unit="µA",
                duration=2.0,
                duration_unit="s",
                repetition=FrequencyRepetition(rate=12.0, unit="perDay"),
            ),
            Phase(id="sleep", name="DeepSleep", current=2.0, current_unit="µA", is_deep_sleep=True),
        ),
        leakage_currents=(LeakageCurrent(id="div", label="Divider", current=0.5, current_unit="µA"),),
    )


@pytest.fixture
def battery():
    return BatteryConfig(capacity_mAh=230.0, usable_percent=90.0, self_discharge_pct_per_month=1.0)


def test_snapshot_round_trip(battery, profile):
    restored_battery, restored_profile = config_from_json(config_to_json(battery, profile))
    assert restored_battery == battery
    assert restored_profile == profile


def test_snapshot_shape(battery, profile):
    doc = json.loads(config_to_json(battery, profile))

    assert doc["battery"] == {
        "capacity_mAh": 230.0,
        "usable_percent": 90.0,
        "self_discharge_pct_per_month": 1.0,
    }
    tx, adc, sleep = doc["phases"]
    assert tx["mode"] == "interval"
    assert tx["interval"] == 30.0 and tx["interval_unit"] == "s"
    assert adc["mode"] == "frequency"
    assert adc["frequency"] == 12.0 and adc["frequency_unit"] == "perDay"
    assert adc["current_unit"] == "µA"
    assert sleep["mode"] is None and sleep["is_deep_sleep"] is True
    assert doc["leakage_currents"] == [
        {"id": "div", "label": "Divider", "current": 0.5, "current_unit": "µA"}
    ]


def test_snapshot_rejects_unknown_unit(battery, profile):
    doc = config_to_dict(battery, profile)
    doc["phases"][0]["current_unit"] = "kA"
    with pytest.raises(ValueError, match="current_unit"):
        config_from_json(json.dumps(doc))


def test_snapshot_rejects_unknown_mode(battery, profile):
    doc = config_to_dict(battery, profile)
    doc["phases"][0]["mode"] = "burst"
    with pytest.raises(ValueError, match="mode"):
        config_from_json(json.dumps(doc))


def test_snapshot_missing_field_is_value_error():
    with pytest.raises(ValueError, match="capacity_mAh"):
        config_from_json(json.dumps({"battery": {"usable_percent": 80}}))


def test_results_csv(esp32):
    battery, phases = esp32
    text = results_to_csv(calculate(battery, phases))
    lines = text.splitlines()

    assert lines[0] == '"Metric","Value","Unit"'
    assert lines[1] == '"Average Current","0.014","mA"'
    assert lines[2] == '"Total Consumption per Day","0.35","mAh/day"'
    assert lines[3] == '"Runtime","2307.8","days"'
    assert lines[7] == ""
    assert lines[8] == '"Phase","mAh/day","Events/day","Active Time/day (h)"'

    rows = list(csv.reader(io.StringIO(text)))
    active, sleep = rows[9], rows[10]
    assert active == ["Active", "0.107", "24.0", "0.00"]
    assert sleep == ["DeepSleep", "0.240", "N/A", "24.00"]


def test_results_csv_self_discharge_row():
    battery = BatteryConfig(capacity_mAh=1000, usable_percent=80, self_discharge_pct_per_month=5)
    rows = list(csv.reader(io.StringIO(results_to_csv(calculate(battery, [])))))
    assert rows[-1][0] == "Self-discharge"
    assert rows[-1][2:] == ["N/A", "Auto"]


def test_results_csv_refuses_errors():
    result = calculate(BatteryConfig(capacity_mAh=0), [])
    with pytest.raises(ValueError, match="errors"):
        results_to_csv(result)


def test_export_filename():
    day = date(2026, 10, 17)
    assert export_filename("config", day) == "battery-config-2026-10-17.json"
    assert export_filename("results", day) == "battery-results-2026-10-17.csv"
    with pytest.raises(ValueError):
        export_filename("pdf", day)


def test_save_and_load_files(tmp_path, battery, profile):
    cfg_path = save_config(tmp_path / "cfg.json", battery, profile)
    assert load_config(cfg_path) == (battery, profile)

    result = calculate(battery, profile.phases, profile.leakage_currents)
    csv_path = save_results(tmp_path / "out.csv", result)
    assert csv_path.read_text(encoding="utf-8") == results_to_csv(result)


def test_load_profile_splits_phases(profile):
    assert [p.id for p in profile.active_phases()] == ["tx", "adc"]
    assert [p.id for p in profile.deep_sleep_phases()] == ["sleep"]
