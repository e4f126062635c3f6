from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt

from .outputs import CalculationResult
from ..simulation.sweep import SweepOutputs


def _no_data(ax, title: str) -> None:
    ax.text(0.5, 0.5, "No data", ha="center", va="center")
    ax.set_title(title)
    ax.set_xticks([])


def plot_phase_breakdown(result: CalculationResult):
    """Bar chart of daily charge per phase, leakage and self-discharge entry."""
    fig, ax = plt.subplots(figsize=(6, 3))
    title = "Daily consumption by phase"
    if not result.phase_results:
        _no_data(ax, title)
        fig.tight_layout()
        return fig

    names = [r.phase_name for r in result.phase_results]
    values = np.array([r.mAh_per_day for r in result.phase_results], dtype=float)
    total = float(values.sum())
    shares = values / total * 100.0 if total > 0 else np.zeros_like(values)

    bars = ax.bar(names, values, color="#3478bf", alpha=0.8)
    for bar, share in zip(bars, shares):
        ax.annotate(
            f"{share:.1f}%",
            (bar.get_x() + bar.get_width() / 2, bar.get_height()),
            ha="center",
            va="bottom",
            fontsize=6,
        )
    ax.set_ylabel("mAh/day", fontsize=7)
    ax.set_title(f"{title} (total {total:.3f} mAh/day)", fontsize=7)
    ax.tick_params(labelsize=6)
    fig.tight_layout()
    return fig


def plot_runtime_sweep(outputs: SweepOutputs):
    """Runtime in days against the swept parameter; invalid points are skipped."""
    fig, ax = plt.subplots(figsize=(5, 3))
    mask = outputs.valid_mask()
    if not np.any(mask):
        _no_data(ax, f"Runtime vs {outputs.parameter}")
        fig.tight_layout()
        return fig

    ax.plot(outputs.values[mask], outputs.runtime_days[mask], marker="o", markersize=3, linewidth=1.5)
    ax.set_xlabel(outputs.parameter, fontsize=7)
    ax.set_ylabel("Runtime [days]", fontsize=7)
    ax.set_title(f"Runtime vs {outputs.parameter}", fontsize=7)
    ax.tick_params(labelsize=6)
    fig.tight_layout()
    return fig
