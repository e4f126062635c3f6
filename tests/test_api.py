import pytest
from fastapi.testclient import TestClient

from battery_runtime.api.app import app
from battery_runtime.api.schema import (
    BatteryInput,
    PhaseInput,
    UserConfig,
    build_model,
    preset_config,
    run_runtime_estimate,
)
from battery_runtime.models.load import FrequencyRepetition, IntervalRepetition


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_list_and_get_preset(client):
    assert client.get("/presets").json() == {"presets": ["esp32"]}
    body = client.get("/presets/esp32").json()
    assert body["battery"]["capacity_mAh"] == 1000.0
    assert [p["name"] for p in body["phases"]] == ["Active", "DeepSleep"]


def test_unknown_preset_is_404(client):
    assert client.get("/presets/nrf52").status_code == 404


def test_calculate_preset_round_trip(client):
    body = client.get("/presets/esp32").json()
    resp = client.post("/calculate", json=body)

    assert resp.status_code == 200
    data = resp.json()
    assert data["errors"] == []
    assert data["runtime_days"] == pytest.approx(2307.78, abs=0.01)
    assert [r["phase_id"] for r in data["phase_results"]] == ["active-1", "deepsleep-1"]


def test_calculate_returns_domain_errors_with_200(client):
    body = {
        "battery": {"capacity_mAh": 0},
        "phases": [{"name": "Burst", "current": 5, "duration": 1, "mode": "frequency"}],
    }
    resp = client.post("/calculate", json=body)

    assert resp.status_code == 200
    data = resp.json()
    assert "Battery capacity must be greater than 0" in data["errors"]
    assert 'Phase "Burst": Frequency or interval is required' in data["errors"]
    assert data["phase_results"] == []
    assert data["runtime_days"] == 0


def test_calculate_rejects_unknown_unit(client):
    body = {
        "battery": {"capacity_mAh": 100},
        "phases": [{"name": "Sleep", "current": 5, "current_unit": "kA", "is_deep_sleep": True}],
    }
    assert client.post("/calculate", json=body).status_code == 422


def test_export_csv(client):
    body = client.get("/presets/esp32").json()
    resp = client.post("/export/csv", json=body)

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "battery-results-" in resp.headers["content-disposition"]
    assert resp.text.startswith('"Metric","Value","Unit"')


def test_export_csv_with_errors_is_422(client):
    resp = client.post("/export/csv", json={"battery": {"capacity_mAh": -1}})
    assert resp.status_code == 422
    assert resp.json()["detail"] == ["Battery capacity must be greater than 0"]


def test_build_model_repetition_modes():
    cfg = UserConfig(
        battery=BatteryInput(capacity_mAh=500),
        phases=[
            PhaseInput(name="A", current=1, duration=1, mode="frequency", frequency=2, frequency_unit="perDay"),
            PhaseInput(name="B", current=1, duration=1, mode="interval", interval=5, interval_unit="min"),
            PhaseInput(name="Z", current=1, is_deep_sleep=True, mode=None),
        ],
    )
    _, profile = build_model(cfg)
    a, b, z = profile.phases

    assert a.repetition == FrequencyRepetition(rate=2.0, unit="perDay")
    assert b.repetition == IntervalRepetition(period=5.0, unit="min")
    assert z.repetition is None
    assert len({a.id, b.id, z.id}) == 3


def test_run_runtime_estimate_matches_preset():
    body = preset_config("esp32")
    cfg = UserConfig(
        battery=BatteryInput(**body["battery"]),
        phases=[PhaseInput(**p) for p in body["phases"]],
    )
    result = run_runtime_estimate(cfg)
    assert result.errors == []
    assert round(result.runtime_days) == 2308
