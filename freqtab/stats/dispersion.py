"""Deviation- and moment-based measures for frequency data.

All moments use the population denominator N (not N - 1); these are
descriptive measures of the tabulated distribution, not sample estimators.
"""

from __future__ import annotations

import math
from typing import Dict

import numpy as np

from ..errors import DomainError
from .central_tendency import weighted_mean

EPSILON = 1e-12


def central_moment(x: np.ndarray, f: np.ndarray, order: int, mean: float | None = None) -> float:
    """Return ``Σ f·(x - mean)^order / N``."""
    x_arr = np.asarray(x, dtype=float)
    f_arr = np.asarray(f, dtype=float)
    mu = weighted_mean(x_arr, f_arr) if mean is None else float(mean)
    return float(np.sum(f_arr * (x_arr - mu) ** order) / np.sum(f_arr))


def mean_deviation(x: np.ndarray, f: np.ndarray, mean: float | None = None) -> float:
    """Return ``Σ f·|x - mean| / N``."""
    x_arr = np.asarray(x, dtype=float)
    f_arr = np.asarray(f, dtype=float)
    mu = weighted_mean(x_arr, f_arr) if mean is None else float(mean)
    return float(np.sum(f_arr * np.abs(x_arr - mu)) / np.sum(f_arr))


def standard_deviation(x: np.ndarray, f: np.ndarray, mean: float | None = None) -> float:
    """Population standard deviation ``sqrt(Σ f·(x - mean)^2 / N)``."""
    return math.sqrt(max(central_moment(x, f, 2, mean=mean), 0.0))


def _is_degenerate(sd: float, x: np.ndarray) -> bool:
    scale = max(1.0, float(np.max(np.abs(np.asarray(x, dtype=float)))))
    return (not np.isfinite(sd)) or sd <= EPSILON * scale


def shape_measures(x: np.ndarray, f: np.ndarray) -> Dict[str, float]:
    """Compute the standardized third and fourth central moments.

    Args:
        x (numpy.ndarray): Representative value per row.
        f (numpy.ndarray): Row frequencies.

    Returns:
        dict[str, float]: ``mean``, ``variance``, ``sd``, ``m3``, ``m4``,
        ``skewness`` (``m3 / sd^3``) and ``kurtosis`` (``m4 / sd^4``, raw,
        not excess).

    Raises:
        DomainError: If the standard deviation is zero, i.e. all frequency
            sits on a single ``x``.
    """
    mu = weighted_mean(x, f)
    variance = central_moment(x, f, 2, mean=mu)
    sd = math.sqrt(max(variance, 0.0))
    if _is_degenerate(sd, x):
        raise DomainError(
            "Skewness and kurtosis are undefined when the standard deviation is zero."
        )
    m3 = central_moment(x, f, 3, mean=mu)
    m4 = central_moment(x, f, 4, mean=mu)
    return {
        "mean": mu,
        "variance": variance,
        "sd": sd,
        "m3": m3,
        "m4": m4,
        "skewness": m3 / sd**3,
        "kurtosis": m4 / sd**4,
    }
