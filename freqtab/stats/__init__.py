"""
Statistical reducers for frequency tables.

This subpackage provides the numerical routines behind every procedure. All
functions operate on arrays and primitive types; nothing here knows about
rows, labels or problem kinds.

Modules:
    central_tendency:
        Weighted mean, ungrouped median/mode, and grouped-data median/mode
        interpolation with first-match class selection.

    dispersion:
        Mean deviation, population standard deviation, central moments,
        skewness and kurtosis.

    regression:
        Normal-equation sums, Pearson correlation, and least-squares straight
        lines with standard errors.

    curve_fit:
        Line, parabola, exponential and power fits returning a CurveFit.

Design Principle:
    Failed mathematical preconditions raise freqtab.errors.DomainError.
"""

from .central_tendency import (
    discrete_median,
    discrete_mode,
    grouped_median,
    grouped_mode,
    locate_median_class,
    locate_modal_class,
    weighted_mean,
)
from .curve_fit import CurveFit, fit_exponential, fit_line, fit_parabola, fit_power
from .dispersion import central_moment, mean_deviation, shape_measures, standard_deviation
from .regression import (
    linear_regression,
    normal_equation_sums,
    pearson_correlation,
    regression_coefficients,
)

__all__ = [
    "weighted_mean",
    "discrete_median",
    "discrete_mode",
    "grouped_median",
    "grouped_mode",
    "locate_median_class",
    "locate_modal_class",
    "central_moment",
    "mean_deviation",
    "standard_deviation",
    "shape_measures",
    "normal_equation_sums",
    "pearson_correlation",
    "regression_coefficients",
    "linear_regression",
    "CurveFit",
    "fit_line",
    "fit_parabola",
    "fit_exponential",
    "fit_power",
]
