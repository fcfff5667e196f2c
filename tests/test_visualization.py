import matplotlib.pyplot as plt
import numpy as np
import pytest

from s21comp.analysis import compensate
from s21comp.measurement import LoadOutcome, MeasurementSet, Sweep, SweepPoint
from s21comp.utils.constants import SERIES_COLORS
from s21comp.visualization import build_plot_data
from s21comp.visualization.plotly_viz import (
    plot_compensated_s21_interactive, plot_raw_s21_interactive,
)
from s21comp.visualization.plots import S21Plotter


@pytest.fixture
def measurements():
    sweeps = {
        "ref": [(1.0e9, -10.0, -1.0), (1.2344e9, -11.0, -1.1), (1.5e9, -12.0, -1.2)],
        "a": [(1.0e9, -10.0, -2.0), (1.2344e9, -11.0, -2.1), (1.5e9, 1.0, -2.2)],
        "b": [(1.0e9, -10.0, -3.0), (1.2344e9, -11.0, -3.1)],
    }
    return MeasurementSet.from_outcomes(
        LoadOutcome(label=k, sweep=Sweep(k, [SweepPoint(*p) for p in v]))
        for k, v in sweeps.items()
    )


def test_frequency_axis_in_ghz(measurements):
    data = build_plot_data(measurements)
    assert data.frequency_ghz == ["1.000", "1.234", "1.500"]


def test_raw_series_cover_every_sweep(measurements):
    data = build_plot_data(measurements)
    assert [s.label for s in data.raw_s21] == ["ref", "a", "b"]
    assert [s.color for s in data.raw_s21] == list(SERIES_COLORS[:3])
    assert data.compensated_s21 == []
    assert data.reference is None


def test_compensated_series_skip_reference(measurements):
    data = build_plot_data(measurements, compensate(measurements, "ref"))
    assert data.reference == "ref"
    assert [s.label for s in data.compensated_s21] == ["a", "b"]
    # Palette restarts for the compensated chart
    assert data.compensated_s21[0].color == SERIES_COLORS[0]
    np.testing.assert_allclose(data.compensated_s21[0].values[:2], [1.0, 1.0])


def test_palette_wraps():
    sweeps = [
        LoadOutcome(label=f"s{i}", sweep=Sweep(f"s{i}", [SweepPoint(1e9, -10.0, -1.0)]))
        for i in range(10)
    ]
    data = build_plot_data(MeasurementSet.from_outcomes(sweeps))
    assert data.raw_s21[8].color == SERIES_COLORS[0]
    assert data.raw_s21[9].color == SERIES_COLORS[1]


def test_plotly_figures(measurements):
    data = build_plot_data(measurements, compensate(measurements, "ref"))

    raw = plot_raw_s21_interactive(data)
    assert [t.name for t in raw.data] == ["ref", "a", "b"]
    assert list(raw.data[0].x) == [1.0, 1.234, 1.5]
    assert len(raw.data[2].x) == 2

    comp = plot_compensated_s21_interactive(data, theme="dark")
    assert [t.name for t in comp.data] == ["a", "b"]
    assert "ref" in comp.layout.title.text
    # NaN from S11 > 0 dB becomes a gap
    assert comp.data[0].y[2] is None


def test_matplotlib_plotter(tmp_path, measurements):
    data = build_plot_data(measurements, compensate(measurements, "ref"))
    path = tmp_path / "s21.png"
    fig = S21Plotter().plot_s21(data, save_path=str(path))
    try:
        assert path.exists() and path.stat().st_size > 0
        raw_ax, comp_ax = fig.axes
        assert len(raw_ax.lines) == 3
        assert len(comp_ax.lines) == 2
    finally:
        plt.close(fig)
