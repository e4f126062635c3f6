from __future__ import annotations

import logging
import os
from dataclasses import dataclass


@dataclass
class CalculationDefaults:
    """Physical constants and thresholds shared by the runtime engine."""
    seconds_per_day: float = 86400.0
    days_per_week: float = 7.0
    days_per_month: float = 30.44  # mean Gregorian month
    months_per_year: float = 12.0

    # Self-discharge entries below this are not reported as a phase result.
    self_discharge_materiality_mAh_per_day: float = 0.001
    # With no load, runtime is the time until this fraction of Q0 remains.
    self_discharge_only_remaining_fraction: float = 0.01

    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


DEFAULTS = CalculationDefaults()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for entry points (API server, demo scripts)."""
    level_name = level or os.environ.get("BATTERY_RUNTIME_LOG_LEVEL", DEFAULTS.log_level)
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format=DEFAULTS.log_format,
    )
