"""
Statistics engine for grouped-frequency tables.

``compute(problem, rows)`` runs one of twelve procedures and returns a
:class:`~freqtab.results.CalculationResult` holding:
- the formula text for the procedure (independent of the data),
- the per-row calculation table, in input order, and
- the final statistics, either scalar measures or fitted coefficients with
  the model evaluated at every input x.

Row roles:
- ``x`` is the class midpoint, or the value itself for bare-value rows. The
  discrete procedures use the midpoint as the representative point when
  given intervals.
- ``y`` is the row frequency for correlation, regression and curve fitting.

Failed preconditions (zero variance, zero standard deviation, non-positive
values under a logarithm, too few rows) raise ``DomainError``; use
``try_compute`` for a tagged failure instead of an exception.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Tuple

import numpy as np
import pandas as pd

from .data_processing import prepare_rows
from .errors import DomainError
from .problems import ProblemKind
from .results import (
    FITTED_CURVE,
    FITTED_LINE,
    CalculationFailure,
    CalculationResult,
    CalculationSteps,
    CurveFitResults,
    MeasureResults,
    Point,
    Results,
)
from .schema import COLUMNS as C
from .stats.central_tendency import (
    discrete_median,
    discrete_mode,
    grouped_median,
    grouped_mode,
    weighted_mean,
)
from .stats.curve_fit import CurveFit, fit_exponential, fit_line, fit_parabola, fit_power
from .stats.dispersion import mean_deviation, shape_measures
from .stats.regression import normal_equation_sums, pearson_correlation, regression_coefficients

Handler = Callable[[pd.DataFrame], Tuple[pd.DataFrame, Results]]

FORMULAS: Dict[ProblemKind, Dict[str, str]] = {
    ProblemKind.DISCRETE_CENTRAL_TENDENCY: {
        "mean": "Mean = Σfx / N",
        "median": "Median = x of the first row whose cumulative frequency ≥ N/2",
        "mode": "Mode = x with the highest frequency (first in order on ties)",
    },
    ProblemKind.CONTINUOUS_CENTRAL_TENDENCY: {
        "median": "Median = L + ((N/2 − cf) / f) × h",
        "mode": "Mode = L + ((f₁ − f₀) / (2f₁ − f₀ − f₂)) × h",
        "legend": (
            "L = lower limit of the median/modal class, cf = cumulative frequency "
            "before it, f/f₁ = its frequency, f₀/f₂ = frequencies of the preceding/"
            "following class, h = class width"
        ),
    },
    ProblemKind.DISCRETE_DISPERSION: {
        "mean": "Mean = Σfx / N",
        "meanDeviation": "Mean Deviation = Σf|x − x̄| / N",
        "standardDeviation": "σ = √(Σf(x − x̄)² / N)",
    },
    ProblemKind.CONTINUOUS_DISPERSION: {
        "midpoint": "x = (lower limit + upper limit) / 2",
        "mean": "Mean = Σfx / N",
        "meanDeviation": "Mean Deviation = Σf|x − x̄| / N",
        "standardDeviation": "σ = √(Σf(x − x̄)² / N)",
    },
    ProblemKind.SKEWNESS_KURTOSIS: {
        "moments": "μᵣ = Σf(x − x̄)ʳ / N",
        "skewness": "Skewness = μ₃ / σ³",
        "kurtosis": "Kurtosis = μ₄ / σ⁴",
    },
    ProblemKind.CORRELATION: {
        "correlation": "r = (NΣxy − ΣxΣy) / √((NΣx² − (Σx)²)(NΣy² − (Σy)²))",
        "variables": "x = class midpoint, y = frequency",
    },
    ProblemKind.REGRESSION_Y_ON_X: {
        "equation": "y = a + bx",
        "slope": "b = (NΣxy − ΣxΣy) / (NΣx² − (Σx)²)",
        "intercept": "a = ȳ − b·x̄",
    },
    ProblemKind.REGRESSION_X_ON_Y: {
        "equation": "x = a' + b'y",
        "slope": "b' = (NΣxy − ΣxΣy) / (NΣy² − (Σy)²)",
        "intercept": "a' = x̄ − b'·ȳ",
    },
    ProblemKind.STRAIGHT_LINE_FIT: {
        "equation": "y = a + bx",
        "normalEquations": "Σy = Na + bΣx ; Σxy = aΣx + bΣx²",
    },
    ProblemKind.PARABOLA_FIT: {
        "equation": "y = a + bx + cx²",
        "normalEquations": (
            "Σy = Na + bΣx + cΣx² ; Σxy = aΣx + bΣx² + cΣx³ ; "
            "Σx²y = aΣx² + bΣx³ + cΣx⁴"
        ),
    },
    ProblemKind.EXPONENTIAL_FIT: {
        "equation": "y = a·e^(bx)",
        "linearized": "ln y = ln a + bx",
    },
    ProblemKind.POWER_FIT: {
        "equation": "y = a·x^b",
        "linearized": "ln y = ln a + b·ln x",
    },
}


def _xf(base: pd.DataFrame) -> tuple[np.ndarray, np.ndarray]:
    return (
        base[C.x].to_numpy(dtype=float),
        base[C.frequency].to_numpy(dtype=float),
    )


def _xy_table(base: pd.DataFrame) -> pd.DataFrame:
    table = base[[C.interval, C.x]].copy()
    table[C.y] = base[C.frequency].to_numpy(dtype=float)
    return table


def _discrete_central_tendency(base: pd.DataFrame):
    x, f = _xf(base)
    table = base[[C.interval, C.x, C.frequency]].copy()
    table[C.fx] = f * x
    table[C.cumulative] = base[C.cumulative]

    n = float(np.sum(f))
    results = MeasureResults(
        {
            "totalFrequency": n,
            "sumFx": float(np.sum(f * x)),
            "mean": weighted_mean(x, f),
            "median": discrete_median(x, f),
            "mode": discrete_mode(x, f),
        }
    )
    return table, results


def _continuous_central_tendency(base: pd.DataFrame):
    lower = base[C.lower].to_numpy(dtype=float)
    width = base[C.width].to_numpy(dtype=float)
    f = base[C.frequency].to_numpy(dtype=float)
    table = base[
        [C.interval, C.lower, C.upper, C.width, C.x, C.frequency, C.cumulative]
    ].copy()

    median, median_idx = grouped_median(lower, width, f)
    mode, modal_idx = grouped_mode(lower, width, f)
    labels = base[C.interval].tolist()
    results = MeasureResults(
        {
            "totalFrequency": float(np.sum(f)),
            "medianClass": labels[median_idx],
            "median": median,
            "modalClass": labels[modal_idx],
            "mode": mode,
        }
    )
    return table, results


def _dispersion(base: pd.DataFrame, with_limits: bool):
    x, f = _xf(base)
    mean = weighted_mean(x, f)
    deviation = x - mean

    cols = [C.interval, C.lower, C.upper, C.x, C.frequency] if with_limits else [C.interval, C.x, C.frequency]
    table = base[cols].copy()
    table[C.fx] = f * x
    table[C.deviation] = deviation
    table[C.abs_deviation] = np.abs(deviation)
    table[C.f_abs_deviation] = f * np.abs(deviation)
    table[C.deviation_sq] = deviation**2
    table[C.f_deviation_sq] = f * deviation**2

    n = float(np.sum(f))
    variance = float(np.sum(f * deviation**2) / n)
    results = MeasureResults(
        {
            "totalFrequency": n,
            "mean": mean,
            "meanDeviation": mean_deviation(x, f, mean=mean),
            "variance": variance,
            "standardDeviation": float(np.sqrt(variance)),
        }
    )
    return table, results


def _discrete_dispersion(base: pd.DataFrame):
    return _dispersion(base, with_limits=False)


def _continuous_dispersion(base: pd.DataFrame):
    return _dispersion(base, with_limits=True)


def _skewness_kurtosis(base: pd.DataFrame):
    x, f = _xf(base)
    shape = shape_measures(x, f)
    deviation = x - shape["mean"]

    table = base[[C.interval, C.x, C.frequency]].copy()
    table[C.deviation] = deviation
    table[C.f_deviation_sq] = f * deviation**2
    table[C.f_deviation_cubed] = f * deviation**3
    table[C.f_deviation_fourth] = f * deviation**4

    results = MeasureResults(
        {
            "totalFrequency": float(np.sum(f)),
            "mean": shape["mean"],
            "variance": shape["variance"],
            "standardDeviation": shape["sd"],
            "thirdMoment": shape["m3"],
            "fourthMoment": shape["m4"],
            "skewness": shape["skewness"],
            "kurtosis": shape["kurtosis"],
            "excessKurtosis": shape["kurtosis"] - 3.0,
        }
    )
    return table, results


def _paired_table(base: pd.DataFrame) -> pd.DataFrame:
    table = _xy_table(base)
    x = table[C.x].to_numpy(dtype=float)
    y = table[C.y].to_numpy(dtype=float)
    table[C.xy] = x * y
    table[C.x_sq] = x**2
    table[C.y_sq] = y**2
    return table


def _correlation(base: pd.DataFrame):
    table = _paired_table(base)
    x = table[C.x].to_numpy(dtype=float)
    y = table[C.y].to_numpy(dtype=float)
    sums = normal_equation_sums(x, y)
    results = MeasureResults(
        {
            "n": sums["n"],
            "sumX": sums["sum_x"],
            "sumY": sums["sum_y"],
            "sumXY": sums["sum_xy"],
            "sumXSquared": sums["sum_x2"],
            "sumYSquared": sums["sum_y2"],
            "correlationCoefficient": pearson_correlation(x, y),
        }
    )
    return table, results


def _signed(value: float) -> str:
    return f"+ {value:.4g}" if value >= 0 else f"− {abs(value):.4g}"


def _regression_y_on_x(base: pd.DataFrame):
    table = _paired_table(base)
    coeffs = regression_coefficients(
        table[C.x].to_numpy(dtype=float), table[C.y].to_numpy(dtype=float)
    )
    results = MeasureResults(
        {
            "meanX": coeffs["xbar"],
            "meanY": coeffs["ybar"],
            "slope": coeffs["b"],
            "intercept": coeffs["a"],
            "equation": f"y = {coeffs['a']:.4g} {_signed(coeffs['b'])}x",
        }
    )
    return table, results


def _regression_x_on_y(base: pd.DataFrame):
    table = _paired_table(base)
    coeffs = regression_coefficients(
        table[C.y].to_numpy(dtype=float), table[C.x].to_numpy(dtype=float)
    )
    results = MeasureResults(
        {
            "meanX": coeffs["ybar"],
            "meanY": coeffs["xbar"],
            "slope": coeffs["b"],
            "intercept": coeffs["a"],
            "equation": f"x = {coeffs['a']:.4g} {_signed(coeffs['b'])}y",
        }
    )
    return table, results


def _curve(fit: CurveFit) -> tuple:
    return tuple(Point(x=px, y=py) for px, py in fit.points())


def _straight_line_fit(base: pd.DataFrame):
    table = _xy_table(base)
    x = table[C.x].to_numpy(dtype=float)
    y = table[C.y].to_numpy(dtype=float)
    table[C.xy] = x * y
    table[C.x_sq] = x**2

    fit = fit_line(x, y)
    table[C.fitted] = fit.yhat
    results = CurveFitResults(
        coefficients={
            "a": fit.a,
            "b": fit.b,
            "rSquared": fit.r2,
            "seB": fit.coefficients["se_b"],
            "ci95B": fit.coefficients["ci95_b"],
        },
        curve=_curve(fit),
        curve_key=FITTED_LINE,
    )
    return table, results


def _parabola_fit(base: pd.DataFrame):
    table = _xy_table(base)
    x = table[C.x].to_numpy(dtype=float)
    y = table[C.y].to_numpy(dtype=float)
    table[C.x_sq] = x**2
    table[C.x_cubed] = x**3
    table[C.x_fourth] = x**4
    table[C.xy] = x * y
    table[C.x_sq_y] = x**2 * y

    fit = fit_parabola(x, y)
    table[C.fitted] = fit.yhat
    results = CurveFitResults(
        coefficients={"a": fit.a, "b": fit.b, "c": fit.c, "rSquared": fit.r2},
        curve=_curve(fit),
        curve_key=FITTED_CURVE,
    )
    return table, results


def _exponential_fit(base: pd.DataFrame):
    table = _xy_table(base)
    x = table[C.x].to_numpy(dtype=float)
    y = table[C.y].to_numpy(dtype=float)

    fit = fit_exponential(x, y)
    ln_y = np.log(y)
    table[C.ln_y] = ln_y
    table[C.x_ln_y] = x * ln_y
    table[C.x_sq] = x**2
    table[C.fitted] = fit.yhat
    results = CurveFitResults(
        coefficients={"a": fit.a, "b": fit.b},
        curve=_curve(fit),
        curve_key=FITTED_CURVE,
    )
    return table, results


def _power_fit(base: pd.DataFrame):
    table = _xy_table(base)
    x = table[C.x].to_numpy(dtype=float)
    y = table[C.y].to_numpy(dtype=float)

    fit = fit_power(x, y)
    ln_x = np.log(x)
    ln_y = np.log(y)
    table[C.ln_x] = ln_x
    table[C.ln_y] = ln_y
    table[C.ln_x_ln_y] = ln_x * ln_y
    table[C.ln_x_sq] = ln_x**2
    table[C.fitted] = fit.yhat
    results = CurveFitResults(
        coefficients={"a": fit.a, "b": fit.b},
        curve=_curve(fit),
        curve_key=FITTED_CURVE,
    )
    return table, results


HANDLERS: Dict[ProblemKind, Handler] = {
    ProblemKind.DISCRETE_CENTRAL_TENDENCY: _discrete_central_tendency,
    ProblemKind.CONTINUOUS_CENTRAL_TENDENCY: _continuous_central_tendency,
    ProblemKind.DISCRETE_DISPERSION: _discrete_dispersion,
    ProblemKind.CONTINUOUS_DISPERSION: _continuous_dispersion,
    ProblemKind.SKEWNESS_KURTOSIS: _skewness_kurtosis,
    ProblemKind.CORRELATION: _correlation,
    ProblemKind.REGRESSION_Y_ON_X: _regression_y_on_x,
    ProblemKind.REGRESSION_X_ON_Y: _regression_x_on_y,
    ProblemKind.STRAIGHT_LINE_FIT: _straight_line_fit,
    ProblemKind.PARABOLA_FIT: _parabola_fit,
    ProblemKind.EXPONENTIAL_FIT: _exponential_fit,
    ProblemKind.POWER_FIT: _power_fit,
}


def compute(problem, rows: Iterable) -> CalculationResult:
    """Run one procedure against a frequency table.

    Args:
        problem: A :class:`ProblemKind` or its display label / slug.
        rows: Ordered rows, as :class:`~freqtab.data_processing.Row` objects
            or ``{"classInterval": ..., "frequency": ...}`` mappings.

    Returns:
        CalculationResult: Formulas, per-row calculation table and results.

    Raises:
        DomainError: If the procedure's preconditions fail for these rows.
        ValueError: If ``problem`` names no procedure.
    """
    kind = problem if isinstance(problem, ProblemKind) else ProblemKind.from_label(problem)
    base = prepare_rows(rows, problem=kind)
    try:
        table, results = HANDLERS[kind](base)
    except DomainError as exc:
        if exc.problem is None:
            exc.problem = kind
        raise
    return CalculationResult(
        problem=kind,
        formulas=dict(FORMULAS[kind]),
        steps=CalculationSteps(table=table.reset_index(drop=True)),
        results=results,
    )


def try_compute(problem, rows: Iterable) -> CalculationResult | CalculationFailure:
    """Like :func:`compute`, but return a CalculationFailure on DomainError."""
    kind = problem if isinstance(problem, ProblemKind) else ProblemKind.from_label(problem)
    try:
        return compute(kind, rows)
    except DomainError as exc:
        return CalculationFailure(problem=kind, message=exc.message)
