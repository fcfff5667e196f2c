"""
Static S21 charts with Matplotlib.

Used by the command line to save the raw and compensated S21 charts as
an image next to the exported CSV.
"""

from __future__ import annotations

from .series import PlotData, PlotSeries


class S21Plotter:
    """Raw / compensated S21 charts from PlotData."""

    def __init__(self, style: str = "default", figsize: tuple = (10, 9)):
        """
        Args:
            style: Matplotlib style ('default', 'dark_background', etc.)
            figsize: Default figure size
        """
        self.style = style
        self.figsize = figsize
        self._setup_style()

    def _setup_style(self):
        """Configure matplotlib style."""
        import matplotlib.pyplot as plt
        try:
            plt.style.use(self.style)
        except OSError:
            pass
        plt.rcParams.update({
            'font.size': 11,
            'axes.grid': True,
            'grid.alpha': 0.3,
            'figure.dpi': 100,
        })

    @staticmethod
    def _draw(ax, axis: list[float], series: list[PlotSeries], title: str, y_label: str):
        for s in series:
            n = min(len(axis), len(s.values))
            ax.plot(axis[:n], s.values[:n], color=s.color, linewidth=2, label=s.label)
        ax.set_xlabel('Frequency (GHz)')
        ax.set_ylabel(y_label)
        ax.set_title(title)
        if series:
            ax.legend(loc='lower center', bbox_to_anchor=(0.5, -0.35),
                      ncol=min(4, len(series)), frameon=False)

    def plot_s21(self, data: PlotData, save_path: str | None = None):
        """
        Plot raw S21 (top) and compensated S21 (bottom).

        Args:
            data: Series from build_plot_data()
            save_path: Save plot to file

        Returns:
            The Matplotlib figure
        """
        import matplotlib.pyplot as plt

        fig, (ax_raw, ax_comp) = plt.subplots(2, 1, figsize=self.figsize, sharex=True)
        axis = [float(v) for v in data.frequency_ghz]

        self._draw(ax_raw, axis, data.raw_s21, 'Raw S21', 'S21 (dB)')
        comp_title = 'Compensated S21'
        if data.reference:
            comp_title += f' (reference: {data.reference})'
        self._draw(ax_comp, axis, data.compensated_s21, comp_title, 'Compensated S21 (dB)')

        plt.tight_layout()
        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
        return fig
