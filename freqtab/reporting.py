"""Format calculation results into display-ready tables and text.

This module is used after the engine has run; it never recomputes statistics.
Original numeric values stay in the result object, and every helper here
returns formatted copies.
"""

from __future__ import annotations

import math
import re
from typing import Iterable

import numpy as np
import pandas as pd

from .results import CalculationFailure, CalculationResult, Point

DEFAULT_DECIMALS = 2
MISSING = "-"

_CAMEL_BOUNDARY = re.compile(r"(?=[A-Z])")


def humanize_key(key: str) -> str:
    """Split a camelCase key into capitalized words.

    Examples:
        ``cumulativeFrequency`` -> ``Cumulative Frequency``;
        ``fDeviationSquared`` -> ``F Deviation Squared``;
        ``lnXLnY`` -> ``Ln X Ln Y``.
    """
    words = _CAMEL_BOUNDARY.sub(" ", str(key)).strip().split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def format_table_value(value, decimals: int = DEFAULT_DECIMALS) -> str:
    """Format one table or result cell for display.

    Args:
        value: A number, a ``Point``, an ``{"x", "y"}`` mapping, a sequence
            of points, text, or ``None``.
        decimals (int, optional): Fixed decimal places for numbers.

    Returns:
        str: ``"-"`` for missing or NaN values, ``"(x, y)"`` for points, a
        fixed-point number, or the text unchanged.
    """
    if value is None:
        return MISSING
    if isinstance(value, Point):
        return f"({value.x:.{decimals}f}, {value.y:.{decimals}f})"
    if isinstance(value, dict) and "x" in value and "y" in value:
        return f"({float(value['x']):.{decimals}f}, {float(value['y']):.{decimals}f})"
    if isinstance(value, (list, tuple)):
        return ", ".join(format_table_value(item, decimals) for item in value)
    if isinstance(value, (bool, np.bool_)):
        return str(bool(value))
    if isinstance(value, (int, float, np.number)):
        number = float(value)
        if not math.isfinite(number):
            return MISSING
        return f"{number:.{decimals}f}"
    return str(value)


def calculation_table_frame(
    result: CalculationResult, decimals: int = DEFAULT_DECIMALS
) -> pd.DataFrame:
    """Return the calculation table with readable headers and formatted cells."""
    table = result.steps.table
    out = pd.DataFrame(
        {
            humanize_key(col): [format_table_value(v, decimals) for v in table[col].tolist()]
            for col in table.columns
        }
    )
    return out


def results_frame(
    result: CalculationResult, decimals: int = DEFAULT_DECIMALS
) -> pd.DataFrame:
    """Return a two-column ``Measure`` / ``Value`` table of the results."""
    rows = []
    for key, value in result.results.as_dict().items():
        rows.append({"Measure": humanize_key(key), "Value": format_table_value(value, decimals)})
    return pd.DataFrame(rows, columns=["Measure", "Value"])


def formulas_frame(result: CalculationResult) -> pd.DataFrame:
    rows = [
        {"Name": humanize_key(key), "Formula": text}
        for key, text in result.formulas.items()
    ]
    return pd.DataFrame(rows, columns=["Name", "Formula"])


def _indent(lines: Iterable[str], prefix: str = "  ") -> list[str]:
    return [prefix + line for line in lines]


def render_text_report(
    result: CalculationResult | CalculationFailure, decimals: int = DEFAULT_DECIMALS
) -> str:
    """Render formulas, calculation steps and results as plain text."""
    if isinstance(result, CalculationFailure):
        title = result.problem.value if result.problem is not None else "Calculation"
        return f"{title}\n  Error: {result.message}"

    lines = [result.problem.value, "", "Formulas:"]
    lines += _indent(f"{humanize_key(k)}: {v}" for k, v in result.formulas.items())

    lines += ["", "Calculation Steps:"]
    table_text = calculation_table_frame(result, decimals).to_string(index=False)
    lines += _indent(table_text.splitlines())

    lines += ["", "Final Results:"]
    for key, value in result.results.as_dict().items():
        if isinstance(value, list):
            lines.append(f"  {humanize_key(key)}:")
            lines += _indent((format_table_value(p, decimals) for p in value), "    ")
        else:
            lines.append(f"  {humanize_key(key)}: {format_table_value(value, decimals)}")
    return "\n".join(lines)
