"""
Chart-ready series built from a measurement set and its compensation.

Both charts share one x axis: the set's frequency axis in GHz, rendered as
3-decimal labels. Series are matched to the axis by index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from ..analysis.compensation import CompensationResult
from ..measurement.measurement_set import MeasurementSet
from ..utils.constants import GHZ_DECIMALS, series_color
from ..utils.units import format_ghz


@dataclass
class PlotSeries:
    """One named line on a chart."""
    label: str
    values: np.ndarray
    color: str


@dataclass
class PlotData:
    """Shared GHz axis plus raw and compensated S21 series."""
    frequency_ghz: list[str] = field(default_factory=list)
    raw_s21: list[PlotSeries] = field(default_factory=list)
    compensated_s21: list[PlotSeries] = field(default_factory=list)
    reference: Optional[str] = None


def frequency_labels(measurements: MeasurementSet) -> list[str]:
    """Frequency axis as GHz labels with 3 decimals."""
    return [format_ghz(f, GHZ_DECIMALS) for f in measurements.frequency_axis]


def build_plot_data(measurements: MeasurementSet,
                    result: CompensationResult | None = None) -> PlotData:
    """
    Build series for the raw and compensated S21 charts.

    Raw series cover every loaded sweep; compensated series leave out the
    reference. Colours restart from the palette for each chart.
    """
    data = PlotData(frequency_ghz=frequency_labels(measurements))

    for i, (label, sweep) in enumerate(measurements.sweeps.items()):
        data.raw_s21.append(PlotSeries(label=label, values=sweep.s21_db, color=series_color(i)))

    if result is not None:
        data.reference = result.reference
        for i, (label, curve) in enumerate(result.plotted().items()):
            data.compensated_s21.append(PlotSeries(label=label, values=curve, color=series_color(i)))

    return data
