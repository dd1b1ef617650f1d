"""Mean, median and mode for ungrouped and grouped frequency data.

Class selection follows input order: the median class is the first row whose
cumulative frequency reaches N/2, and the modal class is the first row holding
the maximum frequency. Rows are never re-sorted here.
"""

from __future__ import annotations

import numpy as np

from ..errors import DomainError


def weighted_mean(x: np.ndarray, f: np.ndarray) -> float:
    """Return ``Σ f·x / Σ f``.

    Raises:
        DomainError: If the total frequency is zero.
    """
    x_arr = np.asarray(x, dtype=float)
    f_arr = np.asarray(f, dtype=float)
    n = float(np.sum(f_arr))
    if n <= 0:
        raise DomainError("Total frequency N is zero.")
    return float(np.sum(f_arr * x_arr) / n)


def locate_median_class(cumulative: np.ndarray, n: float) -> int:
    """Index of the first row whose cumulative frequency is at least ``n/2``."""
    cf = np.asarray(cumulative, dtype=float)
    hits = np.flatnonzero(cf >= n / 2.0)
    if len(hits) == 0:
        raise DomainError("Cumulative frequency never reaches N/2.")
    return int(hits[0])


def locate_modal_class(f: np.ndarray) -> int:
    """Index of the first row with the highest frequency."""
    # np.argmax returns the first maximum, which is the documented tie policy.
    return int(np.argmax(np.asarray(f, dtype=float)))


def discrete_median(x: np.ndarray, f: np.ndarray) -> float:
    f_arr = np.asarray(f, dtype=float)
    idx = locate_median_class(np.cumsum(f_arr), float(np.sum(f_arr)))
    return float(np.asarray(x, dtype=float)[idx])


def discrete_mode(x: np.ndarray, f: np.ndarray) -> float:
    return float(np.asarray(x, dtype=float)[locate_modal_class(f)])


def grouped_median(
    lower: np.ndarray, width: np.ndarray, f: np.ndarray
) -> tuple[float, int]:
    """Interpolate the median inside the median class.

    ``median = L + ((N/2 - cf_before) / f_m) * h``

    Returns:
        tuple[float, int]: The median and the index of the median class.
    """
    f_arr = np.asarray(f, dtype=float)
    cf = np.cumsum(f_arr)
    n = float(cf[-1])
    idx = locate_median_class(cf, n)
    cf_before = float(cf[idx - 1]) if idx > 0 else 0.0
    f_m = float(f_arr[idx])
    if f_m <= 0:
        raise DomainError("Median class has zero frequency.")
    L = float(np.asarray(lower, dtype=float)[idx])
    h = float(np.asarray(width, dtype=float)[idx])
    return L + ((n / 2.0 - cf_before) / f_m) * h, idx


def grouped_mode(
    lower: np.ndarray, width: np.ndarray, f: np.ndarray
) -> tuple[float, int]:
    """Interpolate the mode inside the modal class.

    ``mode = L + ((f_m - f_prev) / (2 f_m - f_prev - f_next)) * h``, with a
    missing neighbour (first or last class) counted as zero frequency.

    Returns:
        tuple[float, int]: The mode and the index of the modal class.

    Raises:
        DomainError: If the denominator is zero (modal class and both
            neighbours share the same frequency).
    """
    f_arr = np.asarray(f, dtype=float)
    idx = locate_modal_class(f_arr)
    f_m = float(f_arr[idx])
    f_prev = float(f_arr[idx - 1]) if idx > 0 else 0.0
    f_next = float(f_arr[idx + 1]) if idx + 1 < len(f_arr) else 0.0
    denom = 2.0 * f_m - f_prev - f_next
    if denom == 0:
        raise DomainError(
            "Grouped mode is undefined: the modal class and its neighbours "
            "have equal frequencies."
        )
    L = float(np.asarray(lower, dtype=float)[idx])
    h = float(np.asarray(width, dtype=float)[idx])
    return L + ((f_m - f_prev) / denom) * h, idx
