"""Visualization: chart series, interactive Plotly charts, static Matplotlib charts."""

from .series import PlotData, PlotSeries, build_plot_data
