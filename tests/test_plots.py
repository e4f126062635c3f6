import matplotlib.pyplot as plt

from battery_runtime.analytics.outputs import CalculationResult
from battery_runtime.analytics.plots import plot_phase_breakdown, plot_runtime_sweep
from battery_runtime.simulation.engine import calculate
from battery_runtime.simulation.sweep import sweep_capacity


def test_phase_breakdown_has_one_bar_per_entry(esp32):
    battery, phases = esp32
    result = calculate(battery, phases)

    fig = plot_phase_breakdown(result)
    ax = fig.axes[0]
    assert len(ax.patches) == len(result.phase_results)
    assert "mAh/day" in ax.get_ylabel()
    plt.close(fig)


def test_phase_breakdown_without_results():
    fig = plot_phase_breakdown(CalculationResult.failed(["boom"], []))
    assert fig.axes[0].texts[0].get_text() == "No data"
    plt.close(fig)


def test_runtime_sweep_plot(esp32):
    battery, phases = esp32
    outputs = sweep_capacity(battery, phases, [0.0, 500.0, 1000.0])

    fig = plot_runtime_sweep(outputs)
    line = fig.axes[0].lines[0]
    # the invalid 0 mAh point is not drawn
    assert list(line.get_xdata()) == [500.0, 1000.0]
    plt.close(fig)
