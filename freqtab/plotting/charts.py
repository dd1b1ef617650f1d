"""Render frequency distributions and data-vs-fit overlays for one result.

Charts only read a finished CalculationResult; nothing here computes
statistics. Correlation and both regressions are not charted at all, which is
a display policy and not an engine limitation.
"""

from __future__ import annotations

import os
from typing import List, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes

from ..problems import ProblemKind
from ..results import CalculationResult, CurveFitResults
from ..schema import COLUMNS
from .style import (
    COLORS,
    FONT_SIZES,
    STYLE,
    apply_rcparams,
    clean_axis,
    sanitize_filename,
    save_figure,
    set_axis_labels,
)

VISUALIZATION_SUPPRESSED = frozenset(
    {
        ProblemKind.CORRELATION,
        ProblemKind.REGRESSION_Y_ON_X,
        ProblemKind.REGRESSION_X_ON_Y,
    }
)


def shows_visualization(problem) -> bool:
    """Whether charts are drawn for ``problem``."""
    kind = problem if isinstance(problem, ProblemKind) else ProblemKind.from_label(problem)
    return kind not in VISUALIZATION_SUPPRESSED


def _frequencies(result: CalculationResult) -> np.ndarray:
    table = result.steps.table
    col = COLUMNS.frequency if COLUMNS.frequency in table.columns else COLUMNS.y
    return table[col].to_numpy(dtype=float)


def plot_frequency_distribution(result: CalculationResult, ax: Axes | None = None) -> Axes:
    """Draw one bar per class, labelled by class interval, in input order."""
    if ax is None:
        _, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
    table = result.steps.table
    labels = table[COLUMNS.interval].astype(str).tolist()
    positions = np.arange(len(labels))

    ax.bar(
        positions,
        _frequencies(result),
        color=COLORS["bar"],
        alpha=STYLE.BAR_ALPHA,
        label="Frequency",
    )
    ax.set_xticks(positions)
    ax.set_xticklabels(labels, rotation=0 if len(labels) <= 8 else 45)
    set_axis_labels(ax, x="Class interval", y="Frequency")
    clean_axis(ax, grid_axis="y")
    ax.legend(fontsize=FONT_SIZES["legend"])
    return ax


def plot_fit_overlay(result: CalculationResult, ax: Axes | None = None) -> Axes:
    """Scatter the observed (x, frequency) pairs and draw the fitted model.

    Raises:
        ValueError: If ``result`` is not a curve-fit result.
    """
    if not isinstance(result.results, CurveFitResults):
        raise ValueError(f"'{result.problem.value}' has no fitted curve to plot.")
    if ax is None:
        _, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)

    table = result.steps.table
    ax.scatter(
        table[COLUMNS.x].to_numpy(dtype=float),
        _frequencies(result),
        color=COLORS["data"],
        s=36,
        zorder=3,
        label="Data points",
    )

    curve = sorted(result.results.curve, key=lambda p: p.x)
    ax.plot(
        [p.x for p in curve],
        [p.y for p in curve],
        color=COLORS["fit"],
        linewidth=STYLE.LINEWIDTH,
        label="Fitted line" if result.results.curve_key == "fittedLine" else "Fitted curve",
    )
    set_axis_labels(ax, x="x", y="y (frequency)")
    clean_axis(ax, grid_axis="both")
    ax.legend(fontsize=FONT_SIZES["legend"])
    return ax


def plot_result(
    result: CalculationResult,
    output_dir: str = "output",
    formats: Sequence[str] = ("png",),
) -> List[str]:
    """Render every chart that applies to ``result`` and save it.

    Args:
        result (CalculationResult): Output of ``freqtab.compute``.
        output_dir (str, optional): Directory for the figures.
        formats (Sequence[str], optional): Any of ``png``, ``pdf``, ``svg``.

    Returns:
        list[str]: Saved primary paths; empty when charts are suppressed for
        the procedure.
    """
    if not shows_visualization(result.problem):
        return []

    apply_rcparams()
    os.makedirs(output_dir, exist_ok=True)
    stem = sanitize_filename(result.problem.slug)
    paths: List[str] = []

    fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
    plot_frequency_distribution(result, ax=ax)
    ax.set_title(result.problem.value, fontsize=FONT_SIZES["title"])
    paths.append(str(save_figure(fig, os.path.join(output_dir, f"{stem}_frequency"), formats=formats)))
    plt.close(fig)

    if isinstance(result.results, CurveFitResults):
        fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
        plot_fit_overlay(result, ax=ax)
        ax.set_title(result.problem.value, fontsize=FONT_SIZES["title"])
        paths.append(str(save_figure(fig, os.path.join(output_dir, f"{stem}_fit"), formats=formats)))
        plt.close(fig)

    return paths
