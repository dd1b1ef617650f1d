"""
Chart rendering for frequency-table results.

Modules:
    charts:
        Frequency bar chart per class and an observed-vs-fitted overlay for
        the four curve fits. Correlation and both regressions are not charted.

    style:
        Shared rcParams, axis cleanup and multi-format figure saving.

Design Principle:
    No statistics are computed here. Functions receive a finished
    CalculationResult and only render it.
"""

from .charts import (
    VISUALIZATION_SUPPRESSED,
    plot_fit_overlay,
    plot_frequency_distribution,
    plot_result,
    shows_visualization,
)
from .style import apply_rcparams

__all__ = [
    "VISUALIZATION_SUPPRESSED",
    "plot_fit_overlay",
    "plot_frequency_distribution",
    "plot_result",
    "shows_visualization",
    "apply_rcparams",
]
