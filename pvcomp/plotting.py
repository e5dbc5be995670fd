from pathlib import Path

import numpy as np
from matplotlib.figure import Figure
from matplotlib.backends.backend_agg import FigureCanvasAgg

from .compensation import CompensationResult
from .constants import KEY_NAMES
from .errors import ExportError

class ResultPlotter:
    @staticmethod
    def plot(figure: Figure, result: CompensationResult):
        """Draws loudness/smoothed curves on top and the compensation bars below."""
        figure.clear()
        keys = np.arange(len(result.loudness))

        # Top Plot (Loudness)
        ax1 = figure.add_subplot(2, 1, 1)
        ax1.plot(keys, result.loudness, 'o-', markersize=3, label="Measured")
        ax1.plot(keys, result.smoothed, '-', linewidth=2, label="Smoothed")
        ax1.set_ylabel("Loudness [dB]")
        ax1.grid(True, alpha=0.3)
        ax1.legend(loc='lower right')

        # Bottom Plot (Compensation)
        ax2 = figure.add_subplot(2, 1, 2, sharex=ax1)
        comp = np.nan_to_num(result.compensation, nan=0.0, posinf=0.0, neginf=0.0)
        colors = np.where(comp >= 0, 'tab:green', 'tab:red')
        ax2.bar(keys, comp, color=colors, width=0.8)
        ax2.axhline(0.0, color='black', linewidth=0.8)
        ax2.set_ylabel("Compensation [dB]")
        ax2.grid(True, axis='y', alpha=0.3)

        # Label every C so the keyboard layout is readable
        ticks = [i for i, name in enumerate(KEY_NAMES[:len(keys)]) if name.startswith("C") and "#" not in name]
        ax2.set_xticks(ticks)
        ax2.set_xticklabels([KEY_NAMES[i] for i in ticks])
        ax2.set_xlabel("Key")

        figure.tight_layout()

    @staticmethod
    def export_png(filepath: Path, result: CompensationResult, dpi: int = 120):
        figure = Figure(figsize=(12, 6))
        FigureCanvasAgg(figure)
        ResultPlotter.plot(figure, result)
        try:
            figure.savefig(str(filepath), dpi=dpi)
        except OSError as e:
            raise ExportError(f"Failed to write plot {filepath}: {e}") from e
