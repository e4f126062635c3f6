import os

# Headless backend for the plotting tests.
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest  # noqa: E402

from battery_runtime.models.presets import esp32_preset  # noqa: E402


@pytest.fixture
def esp32():
    """(battery, phases) of the ESP32 preset."""
    return esp32_preset()
