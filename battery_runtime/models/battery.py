from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config import DEFAULTS


@dataclass(frozen=True)
class BatteryConfig:
    """Static description of the battery feeding the device.

    Only usable capacity and a single self-discharge constant are modelled;
    there is no temperature or aging correction.
    """

    capacity_mAh: float
    usable_percent: float = 100.0

    # Monthly capacity loss at rest, in percent. 0 disables self-discharge and
    # the runtime solve reduces to the linear model.
    self_discharge_pct_per_month: float = 0.0

    @property
    def usable_capacity_mAh(self) -> float:
        return float(self.capacity_mAh * (self.usable_percent / 100.0))

    @property
    def self_discharge_fraction(self) -> float:
        return float(self.self_discharge_pct_per_month / 100.0)

    def decay_constant_per_day(self) -> Optional[float]:
        """Continuous self-discharge constant k (1/day), or None when disabled.

        A monthly loss r maps onto Q(t) = Q0 * exp(-k t) with
        Q(30.44 d) = Q0 * (1 - r), so k = -ln(1 - r) / 30.44.
        """
        r = self.self_discharge_fraction
        if r <= 0.0 or r >= 1.0:
            return None
        k = float(-np.log1p(-r) / DEFAULTS.days_per_month)
        # subnormal r can underflow k to zero
        return k if k > 0.0 else None
