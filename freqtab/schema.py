"""Define standardized column names for calculation tables."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TableColumns:
    """Container for calculation-table column keys.

    Keys are camelCase so a renderer can split them into words
    (``cumulativeFrequency`` -> ``Cumulative Frequency``); the same keys appear
    in the serialized ``calculationTable`` records.

    Attributes:
        interval: Display label of the row, ``"10-20"`` or ``"7"``.
        lower: Lower class limit L (equals the value for bare-value rows).
        upper: Upper class limit (equals the value for bare-value rows).
        width: Class width h = upper - lower.
        x: Representative point: interval midpoint or the bare value.
        y: Paired dependent value for correlation, regression and fits.
            Always the row frequency; no second series is collected.
        frequency: Observed count f for the row.
        cumulative: Running total of f up to and including the row, in input
            order.
        fitted: Model prediction at ``x`` for the curve-fitting procedures.
    """

    interval: str = "classInterval"
    lower: str = "lowerLimit"
    upper: str = "upperLimit"
    width: str = "classWidth"
    x: str = "x"
    y: str = "y"
    frequency: str = "frequency"
    cumulative: str = "cumulativeFrequency"
    fx: str = "fx"
    deviation: str = "deviation"
    abs_deviation: str = "absDeviation"
    f_abs_deviation: str = "fAbsDeviation"
    deviation_sq: str = "deviationSquared"
    f_deviation_sq: str = "fDeviationSquared"
    f_deviation_cubed: str = "fDeviationCubed"
    f_deviation_fourth: str = "fDeviationFourth"
    xy: str = "xy"
    x_sq: str = "xSquared"
    y_sq: str = "ySquared"
    x_cubed: str = "xCubed"
    x_fourth: str = "xFourth"
    x_sq_y: str = "xSquaredY"
    ln_x: str = "lnX"
    ln_y: str = "lnY"
    x_ln_y: str = "xLnY"
    ln_x_ln_y: str = "lnXLnY"
    ln_x_sq: str = "lnXSquared"
    fitted: str = "fitted"


COLUMNS = TableColumns()
