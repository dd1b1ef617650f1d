"""The closed set of procedures the engine can run on a frequency table."""

from __future__ import annotations

import re
from enum import Enum


class ProblemKind(str, Enum):
    """One member per procedure; values are the fixed display labels.

    For correlation, both regressions and the four curve fits the dependent
    variable ``y`` is the row frequency, paired with the row's representative
    ``x``. No second numeric series is collected.
    """

    DISCRETE_CENTRAL_TENDENCY = "Mean, Median & Mode (Discrete Data)"
    CONTINUOUS_CENTRAL_TENDENCY = "Median & Mode (Continuous Data)"
    DISCRETE_DISPERSION = "Mean Deviation & Std Dev (Discrete Data)"
    CONTINUOUS_DISPERSION = "Mean Deviation & Std Dev (Continuous Data)"
    SKEWNESS_KURTOSIS = "Skewness & Kurtosis"
    CORRELATION = "Correlation Coefficient"
    REGRESSION_Y_ON_X = "Regression (Y on X)"
    REGRESSION_X_ON_Y = "Regression (X on Y)"
    STRAIGHT_LINE_FIT = "Straight Line Fit"
    PARABOLA_FIT = "Parabola Fit"
    EXPONENTIAL_FIT = "Exponential Curve Fit"
    POWER_FIT = "Power Curve Fit"

    @property
    def label(self) -> str:
        return self.value

    @property
    def slug(self) -> str:
        """Lower-case, dash-separated form usable on a command line."""
        text = self.value.lower().replace("&", " ")
        return re.sub(r"[^a-z0-9]+", "-", text).strip("-")

    @property
    def requires_intervals(self) -> bool:
        """Whether grouped-data formulas need ``lower < upper`` on every row."""
        return self in _CONTINUOUS

    @property
    def is_curve_fit(self) -> bool:
        return self in _CURVE_FITS

    @property
    def family(self) -> str:
        return "curve_fit" if self.is_curve_fit else "measures"

    @property
    def min_rows(self) -> int:
        return _MIN_ROWS.get(self, 1)

    @classmethod
    def from_label(cls, text: str) -> "ProblemKind":
        """Resolve a display label, slug or member name to a member.

        Raises:
            ValueError: If ``text`` names no procedure.
        """
        needle = str(text).strip()
        for member in cls:
            if needle in (member.value, member.slug, member.name):
                return member
        lowered = needle.lower()
        for member in cls:
            if lowered in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(
            f"Unknown problem '{text}'. Expected one of: "
            + ", ".join(member.value for member in cls)
        )


_CONTINUOUS = frozenset(
    {
        ProblemKind.CONTINUOUS_CENTRAL_TENDENCY,
        ProblemKind.CONTINUOUS_DISPERSION,
    }
)

_CURVE_FITS = frozenset(
    {
        ProblemKind.STRAIGHT_LINE_FIT,
        ProblemKind.PARABOLA_FIT,
        ProblemKind.EXPONENTIAL_FIT,
        ProblemKind.POWER_FIT,
    }
)

_MIN_ROWS = {
    ProblemKind.CORRELATION: 2,
    ProblemKind.REGRESSION_Y_ON_X: 2,
    ProblemKind.REGRESSION_X_ON_Y: 2,
    ProblemKind.STRAIGHT_LINE_FIT: 2,
    ProblemKind.PARABOLA_FIT: 3,
    ProblemKind.EXPONENTIAL_FIT: 2,
    ProblemKind.POWER_FIT: 2,
}
