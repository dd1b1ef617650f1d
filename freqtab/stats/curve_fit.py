"""Least-squares curve fits over (x, y) pairs.

Models:
    line:        y = a + b x
    parabola:    y = a + b x + c x^2      (3x3 normal equations)
    exponential: y = a e^(b x)            (line in (x, ln y))
    power:       y = a x^b                (line in (ln x, ln y))

The log-linearized fits minimise squared error in log space, which is the
classical textbook procedure; they are not nonlinear least-squares fits in the
original space.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..errors import DomainError
from .regression import _as_pairs, linear_regression, normal_equation_sums


@dataclass(frozen=True)
class CurveFit:
    """Container for curve-fit outputs."""

    model: str
    coefficients: dict
    x: np.ndarray
    yhat: np.ndarray
    resid: np.ndarray
    ss_res: float
    r2: float
    notes: str = ""

    @property
    def a(self) -> float:
        return float(self.coefficients.get("a", math.nan))

    @property
    def b(self) -> float:
        return float(self.coefficients.get("b", math.nan))

    @property
    def c(self) -> float:
        return float(self.coefficients.get("c", math.nan))

    def points(self) -> list[tuple[float, float]]:
        return [(float(xi), float(yi)) for xi, yi in zip(self.x, self.yhat)]


def _finish(model: str, coefficients: dict, x: np.ndarray, y: np.ndarray, yhat: np.ndarray, notes: str = "") -> CurveFit:
    resid = y - yhat
    ss_res = float(np.sum(resid**2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))
    r2 = float(1.0 - ss_res / ss_tot) if ss_tot > 0 else math.nan
    return CurveFit(
        model=model,
        coefficients=coefficients,
        x=np.asarray(x, dtype=float),
        yhat=np.asarray(yhat, dtype=float),
        resid=np.asarray(resid, dtype=float),
        ss_res=ss_res,
        r2=r2,
        notes=notes,
    )


def fit_line(x: np.ndarray, y: np.ndarray) -> CurveFit:
    """Fit ``y = a + b x``; diagnostics come from :func:`linear_regression`."""
    x_arr, y_arr = _as_pairs(x, y, min_points=2)
    reg = linear_regression(x_arr, y_arr)
    yhat = reg["a"] + reg["b"] * x_arr
    coefficients = {
        "a": reg["a"],
        "b": reg["b"],
        "se_b": reg["se_b"],
        "ci95_b": reg["ci95_b"],
    }
    return _finish("line", coefficients, x_arr, y_arr, yhat)


def fit_parabola(x: np.ndarray, y: np.ndarray) -> CurveFit:
    """Fit ``y = a + b x + c x^2`` from the normal equations.

    The system solved is::

        Σy   = a n   + b Σx  + c Σx²
        Σxy  = a Σx  + b Σx² + c Σx³
        Σx²y = a Σx² + b Σx³ + c Σx⁴

    Raises:
        DomainError: If fewer than three points are given or the normal
            matrix is singular (fewer than three distinct x values).
    """
    x_arr, y_arr = _as_pairs(x, y, min_points=3)
    if len(np.unique(x_arr)) < 3:
        raise DomainError("Parabola fit needs at least three distinct x values.")

    n = float(len(x_arr))
    s1, s2, s3, s4 = (float(np.sum(x_arr**k)) for k in (1, 2, 3, 4))
    matrix = np.array(
        [
            [n, s1, s2],
            [s1, s2, s3],
            [s2, s3, s4],
        ],
        dtype=float,
    )
    rhs = np.array(
        [
            float(np.sum(y_arr)),
            float(np.sum(x_arr * y_arr)),
            float(np.sum(x_arr**2 * y_arr)),
        ],
        dtype=float,
    )
    try:
        a, b, c = np.linalg.solve(matrix, rhs)
    except np.linalg.LinAlgError as exc:
        raise DomainError(f"Parabola normal equations are singular: {exc}") from exc

    yhat = a + b * x_arr + c * x_arr**2
    return _finish("parabola", {"a": float(a), "b": float(b), "c": float(c)}, x_arr, y_arr, yhat)


def _log_line(u: np.ndarray, v: np.ndarray) -> tuple[float, float]:
    sums = normal_equation_sums(u, v)
    if sums["sxx"] <= 0:
        raise DomainError("Curve fit is undefined: the predictor has no variance.")
    slope = sums["sxy"] / sums["sxx"]
    intercept = (sums["sum_y"] - slope * sums["sum_x"]) / sums["n"]
    return float(intercept), float(slope)


def fit_exponential(x: np.ndarray, y: np.ndarray) -> CurveFit:
    """Fit ``y = a e^(b x)`` through ``ln y = ln a + b x``.

    Raises:
        DomainError: If any ``y <= 0``.
    """
    x_arr, y_arr = _as_pairs(x, y, min_points=2)
    if np.any(y_arr <= 0):
        raise DomainError("Exponential fit needs every y (frequency) to be positive.")

    ln_a, b = _log_line(x_arr, np.log(y_arr))
    a = math.exp(ln_a)
    yhat = a * np.exp(b * x_arr)
    return _finish("exponential", {"a": a, "b": b, "ln_a": ln_a}, x_arr, y_arr, yhat)


def fit_power(x: np.ndarray, y: np.ndarray) -> CurveFit:
    """Fit ``y = a x^b`` through ``ln y = ln a + b ln x``.

    Raises:
        DomainError: If any ``x <= 0`` or ``y <= 0``.
    """
    x_arr, y_arr = _as_pairs(x, y, min_points=2)
    if np.any(x_arr <= 0):
        raise DomainError("Power fit needs every x to be positive.")
    if np.any(y_arr <= 0):
        raise DomainError("Power fit needs every y (frequency) to be positive.")

    ln_a, b = _log_line(np.log(x_arr), np.log(y_arr))
    a = math.exp(ln_a)
    yhat = a * np.power(x_arr, b)
    return _finish("power", {"a": a, "b": b, "ln_a": ln_a}, x_arr, y_arr, yhat)
