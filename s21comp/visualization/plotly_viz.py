"""
Interactive Plotly-based visualizations for the web frontend.

All functions return Plotly figure objects (go.Figure) suitable
for display in Streamlit via st.plotly_chart().
"""

from __future__ import annotations

import numpy as np
import plotly.graph_objects as go

from .series import PlotData, PlotSeries

THEME_TEMPLATES = {
    "light": "plotly_white",
    "dark": "plotly_dark",
}


def _line_chart(labels: list[str], series: list[PlotSeries], title: str,
                y_title: str, theme: str) -> go.Figure:
    fig = go.Figure()
    axis = [float(v) for v in labels]

    for s in series:
        n = min(len(axis), len(s.values))
        # NaN and inf points are drawn as gaps
        y = [float(v) if np.isfinite(v) else None for v in s.values[:n]]
        fig.add_trace(go.Scatter(
            x=axis[:n], y=y,
            mode='lines', name=s.label,
            line=dict(color=s.color, width=2),
            hovertemplate='%{x:.3f} GHz<br>' + s.label + ': %{y:.3f} dB<extra></extra>',
        ))

    fig.update_layout(
        title=title,
        xaxis_title="Frequency (GHz)",
        yaxis_title=y_title,
        template=THEME_TEMPLATES.get(theme, THEME_TEMPLATES["light"]),
        legend=dict(orientation='h', yanchor='top', y=-0.2),
        height=450,
        hovermode='x unified',
    )
    return fig


def plot_raw_s21_interactive(data: PlotData, theme: str = "light",
                             title: str = "Raw S21") -> go.Figure:
    """Raw S21 of every loaded sweep."""
    return _line_chart(data.frequency_ghz, data.raw_s21, title, "S21 (dB)", theme)


def plot_compensated_s21_interactive(data: PlotData, theme: str = "light",
                                     title: str | None = None) -> go.Figure:
    """Compensated S21 of every non-reference sweep."""
    if title is None:
        title = "Compensated S21"
        if data.reference:
            title += f" (reference: {data.reference})"
    return _line_chart(data.frequency_ghz, data.compensated_s21, title,
                       "Compensated S21 (dB)", theme)
