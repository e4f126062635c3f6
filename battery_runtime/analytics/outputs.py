from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


SELF_DISCHARGE_PHASE_ID = "self-discharge-virtual"
SELF_DISCHARGE_PHASE_NAME = "Self-discharge"


@dataclass(frozen=True)
class PhaseResult:
    """Daily budget of one phase, leakage current or the self-discharge entry."""

    phase_id: str
    phase_name: str
    mAh_per_day: float
    events_per_day: float
    active_time_per_day_s: float

    @property
    def is_self_discharge(self) -> bool:
        return self.phase_id == SELF_DISCHARGE_PHASE_ID


@dataclass
class CalculationResult:
    """Container for one runtime calculation: breakdown, KPIs and diagnostics."""

    phase_results: List[PhaseResult] = field(default_factory=list)
    total_mAh_per_day: float = 0.0
    average_current_mA: float = 0.0
    runtime_days: float = 0.0
    runtime_weeks: float = 0.0
    runtime_months: float = 0.0
    runtime_years: float = 0.0

    # Errors block the calculation; warnings are advisory only.
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def failed(cls, errors: List[str], warnings: List[str]) -> "CalculationResult":
        """All-zero result carrying the validation errors."""
        return cls(errors=list(errors), warnings=list(warnings))

    @property
    def ok(self) -> bool:
        return not self.errors

    def phase_result(self, phase_id: str) -> PhaseResult:
        for r in self.phase_results:
            if r.phase_id == phase_id:
                return r
        raise KeyError(phase_id)

    def self_discharge_mAh_per_day(self) -> float:
        """Effective average self-discharge shown in the breakdown (0 if not reported).

        This figure is back-derived from the closed-form runtime as
        Q0 / runtime - load, a display approximation rather than an
        independently integrated quantity.
        """
        return float(sum(r.mAh_per_day for r in self.phase_results if r.is_self_discharge))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the full result."""
        return {
            "phase_results": [asdict(r) for r in self.phase_results],
            "total_mAh_per_day": float(self.total_mAh_per_day),
            "average_current_mA": float(self.average_current_mA),
            "runtime_days": float(self.runtime_days),
            "runtime_weeks": float(self.runtime_weeks),
            "runtime_months": float(self.runtime_months),
            "runtime_years": float(self.runtime_years),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
