"""Provide correlation and least-squares line utilities for paired data.

This module supports:
- the raw normal-equation sums (Σx, Σy, Σxy, Σx², Σy²),
- Pearson's correlation coefficient in its computational form, and
- ordinary least-squares straight lines with fit diagnostics.

Every routine works on one point per table row; frequencies are the ``y``
values here, not weights.
"""

from __future__ import annotations

import importlib.util
import math
import warnings
from typing import Dict

import numpy as np

from ..errors import DomainError

HAVE_SCIPY = importlib.util.find_spec("scipy") is not None
if HAVE_SCIPY:
    from scipy.stats import t as student_t


def _as_pairs(x: np.ndarray, y: np.ndarray, min_points: int) -> tuple[np.ndarray, np.ndarray]:
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if x_arr.shape != y_arr.shape:
        raise DomainError("x and y must have the same length.")
    if np.any(~np.isfinite(x_arr)) or np.any(~np.isfinite(y_arr)):
        raise DomainError("x and y must be finite.")
    if len(x_arr) < min_points:
        raise DomainError(
            f"At least {min_points} points are required, got {len(x_arr)}."
        )
    return x_arr, y_arr


def _deviations(v: np.ndarray) -> np.ndarray:
    """Return ``v - mean(v)``; exactly zero when every value is equal."""
    if np.all(v == v[0]):
        return np.zeros_like(v)
    return v - np.mean(v)


def normal_equation_sums(x: np.ndarray, y: np.ndarray) -> Dict[str, float]:
    """Return the sums used by the normal equations for a straight line.

    Returns:
        dict[str, float]: ``n``, ``sum_x``, ``sum_y``, ``sum_xy``,
        ``sum_x2``, ``sum_y2``, and the spreads ``sxx = nΣx² - (Σx)²``,
        ``syy = nΣy² - (Σy)²`` and ``sxy = nΣxy - ΣxΣy``.

    Note:
        The spreads are evaluated as ``nΣ(x - x̄)²`` etc., which is the same
        quantity without the cancellation of the raw form on large values.
    """
    x_arr, y_arr = _as_pairs(x, y, min_points=1)
    n = float(len(x_arr))
    dx = _deviations(x_arr)
    dy = _deviations(y_arr)
    return {
        "n": n,
        "sum_x": float(np.sum(x_arr)),
        "sum_y": float(np.sum(y_arr)),
        "sum_xy": float(np.sum(x_arr * y_arr)),
        "sum_x2": float(np.sum(x_arr**2)),
        "sum_y2": float(np.sum(y_arr**2)),
        "sxx": float(n * np.sum(dx**2)),
        "syy": float(n * np.sum(dy**2)),
        "sxy": float(n * np.sum(dx * dy)),
    }


def pearson_correlation(x: np.ndarray, y: np.ndarray) -> float:
    """Pearson's r, ``(nΣxy - ΣxΣy) / sqrt((nΣx² - (Σx)²)(nΣy² - (Σy)²))``.

    Raises:
        DomainError: If fewer than two points are given or either variable
            has no variance.
    """
    _as_pairs(x, y, min_points=2)
    sums = normal_equation_sums(x, y)
    if sums["sxx"] <= 0:
        raise DomainError("Correlation is undefined: x has no variance.")
    if sums["syy"] <= 0:
        raise DomainError("Correlation is undefined: y has no variance.")
    r = sums["sxy"] / math.sqrt(sums["sxx"] * sums["syy"])
    return float(min(1.0, max(-1.0, r)))


def regression_coefficients(x: np.ndarray, y: np.ndarray) -> Dict[str, float]:
    """Least-squares ``y = a + b x`` from the normal equations.

    Returns:
        dict[str, float]: ``a`` (intercept), ``b`` (slope), ``xbar``, ``ybar``.

    Raises:
        DomainError: If fewer than two points are given or x has no variance.
    """
    _as_pairs(x, y, min_points=2)
    sums = normal_equation_sums(x, y)
    if sums["sxx"] <= 0:
        raise DomainError("Regression is undefined: the predictor has no variance.")
    b = sums["sxy"] / sums["sxx"]
    xbar = sums["sum_x"] / sums["n"]
    ybar = sums["sum_y"] / sums["n"]
    return {"a": float(ybar - b * xbar), "b": float(b), "xbar": xbar, "ybar": ybar}


def linear_regression(
    x: np.ndarray, y: np.ndarray, min_points: int = 2
) -> Dict[str, float]:
    """Fit an ordinary least-squares straight line to paired data.

    Args:
        x (numpy.ndarray): Independent variable (row midpoints or values).
        y (numpy.ndarray): Dependent variable (row frequencies).
        min_points (int, optional): Minimum number of points required.
            Defaults to ``2``.

    Returns:
        dict[str, float]: ``a`` (intercept), ``b`` (slope), ``r2``
        (coefficient of determination), ``se_b`` and ``se_a`` (standard
        errors), ``ci95_b`` (95% half-width for the slope), ``n``, ``dof``,
        ``xbar`` and ``ybar``.

    Raises:
        DomainError: If there are fewer than ``min_points`` points or no
            variance in ``x``.

    Note:
        Standard errors need at least three points and are NaN otherwise.
        ``ci95_b`` also needs SciPy for the Student-t critical value.
    """
    x_arr, y_arr = _as_pairs(x, y, min_points=max(2, int(min_points)))
    coeffs = regression_coefficients(x_arr, y_arr)
    a, b = coeffs["a"], coeffs["b"]

    yhat = a + b * x_arr
    resid = y_arr - yhat
    sse = float(np.sum(resid**2))
    sst = float(np.sum((y_arr - y_arr.mean()) ** 2))
    r2 = 1.0 - sse / sst if sst > 0 else math.nan

    n = int(len(x_arr))
    dof = n - 2
    ssxx = float(np.sum((x_arr - coeffs["xbar"]) ** 2))

    se_a = math.nan
    se_b = math.nan
    ci95_b = math.nan
    if dof > 0 and ssxx > 0:
        mse = sse / dof
        se_b = float(np.sqrt(mse / ssxx))
        se_a = float(np.sqrt(mse * (1.0 / n + coeffs["xbar"] ** 2 / ssxx)))
        if HAVE_SCIPY:
            ci95_b = float(student_t.ppf(0.975, dof)) * se_b
        else:  # pragma: no cover - hard to force in test env with SciPy installed
            warnings.warn(
                "SciPy not available: slope confidence half-width is NaN.",
                RuntimeWarning,
                stacklevel=2,
            )

    return {
        "a": a,
        "b": b,
        "r2": float(r2),
        "se_a": se_a,
        "se_b": se_b,
        "ci95_b": ci95_b,
        "n": n,
        "dof": dof,
        "xbar": coeffs["xbar"],
        "ybar": coeffs["ybar"],
    }
