"""Write calculation results to reproducible CSV files.

This module is the export boundary between an in-memory CalculationResult and
tabular artifacts on disk. Numeric columns are written unformatted; the
reporting layer's fixed-decimal strings are for display only.
"""

from __future__ import annotations

import os
from typing import Dict

import pandas as pd

from .plotting.style import sanitize_filename
from .reporting import formulas_frame, humanize_key
from .results import CalculationResult, CurveFitResults


def _results_table(result: CalculationResult) -> pd.DataFrame:
    rows = []
    for key, value in result.results.as_dict().items():
        if isinstance(value, list):
            continue
        rows.append({"Measure": humanize_key(key), "Key": key, "Value": value})
    return pd.DataFrame(rows, columns=["Measure", "Key", "Value"])


def save_result_to_csv(
    result: CalculationResult, output_dir: str = "output", prefix: str | None = None
) -> Dict[str, str]:
    """Save the calculation table, results, formulas and fitted curve to CSV.

    Args:
        result (CalculationResult): Output of ``freqtab.compute``.
        output_dir (str): Directory where CSV outputs are written.
        prefix (str, optional): Filename prefix. Defaults to the procedure's
            slug so several procedures can share one directory.

    Returns:
        dict[str, str]: Paths keyed by ``calculation_table``, ``results``,
        ``formulas`` and, for curve fits, ``fitted_curve``.
    """
    os.makedirs(output_dir, exist_ok=True)
    stem = sanitize_filename(prefix if prefix is not None else result.problem.slug)

    paths = {
        "calculation_table": os.path.join(output_dir, f"{stem}_calculation_table.csv"),
        "results": os.path.join(output_dir, f"{stem}_results.csv"),
        "formulas": os.path.join(output_dir, f"{stem}_formulas.csv"),
    }
    result.steps.table.to_csv(paths["calculation_table"], index=False)
    _results_table(result).to_csv(paths["results"], index=False)
    formulas_frame(result).to_csv(paths["formulas"], index=False)

    if isinstance(result.results, CurveFitResults):
        paths["fitted_curve"] = os.path.join(output_dir, f"{stem}_fitted_curve.csv")
        pd.DataFrame(
            [point.as_dict() for point in result.results.curve], columns=["x", "y"]
        ).to_csv(paths["fitted_curve"], index=False)

    for kind, path in paths.items():
        print(f"Saved {kind.replace('_', ' ')} to {path}")

    return paths
