"""Tests for procedure dispatch and the assembled calculation results."""

import numpy as np
import pytest

from freqtab.data_processing import Row, make_row
from freqtab.engine import FORMULAS, HANDLERS, compute, try_compute
from freqtab.errors import DomainError
from freqtab.problems import ProblemKind
from freqtab.results import CalculationFailure, CurveFitResults, MeasureResults

# Frequencies are a rounded 1.9 * e^(0.5076 x).
GROWTH_ROWS = [
    {"classInterval": str(x), "frequency": f}
    for x, f in zip(range(2, 9), [5, 9, 15, 24, 40, 66, 109])
]


def _bare(pairs):
    return [make_row(str(x), str(f)) for x, f in pairs]


def test_every_procedure_has_handler_and_formulas():
    assert set(HANDLERS) == set(ProblemKind)
    assert set(FORMULAS) == set(ProblemKind)
    assert all(FORMULAS[kind] for kind in ProblemKind)


def test_problem_labels_and_slugs():
    assert [kind.value for kind in ProblemKind] == [
        "Mean, Median & Mode (Discrete Data)",
        "Median & Mode (Continuous Data)",
        "Mean Deviation & Std Dev (Discrete Data)",
        "Mean Deviation & Std Dev (Continuous Data)",
        "Skewness & Kurtosis",
        "Correlation Coefficient",
        "Regression (Y on X)",
        "Regression (X on Y)",
        "Straight Line Fit",
        "Parabola Fit",
        "Exponential Curve Fit",
        "Power Curve Fit",
    ]
    assert ProblemKind.SKEWNESS_KURTOSIS.slug == "skewness-kurtosis"
    assert ProblemKind.REGRESSION_Y_ON_X.slug == "regression-y-on-x"
    assert ProblemKind.from_label("regression-x-on-y") is ProblemKind.REGRESSION_X_ON_Y
    assert ProblemKind.from_label("power curve fit") is ProblemKind.POWER_FIT
    assert ProblemKind.from_label("PARABOLA_FIT") is ProblemKind.PARABOLA_FIT
    with pytest.raises(ValueError, match="Unknown problem"):
        ProblemKind.from_label("Histogram")


def test_problem_properties():
    assert ProblemKind.CONTINUOUS_DISPERSION.requires_intervals
    assert not ProblemKind.DISCRETE_DISPERSION.requires_intervals
    assert ProblemKind.EXPONENTIAL_FIT.family == "curve_fit"
    assert ProblemKind.CORRELATION.family == "measures"
    assert ProblemKind.PARABOLA_FIT.min_rows == 3
    assert ProblemKind.REGRESSION_Y_ON_X.min_rows == 2
    assert ProblemKind.SKEWNESS_KURTOSIS.min_rows == 1


def test_continuous_central_tendency(grouped_rows):
    result = compute(ProblemKind.CONTINUOUS_CENTRAL_TENDENCY, grouped_rows)
    assert isinstance(result.results, MeasureResults)
    assert result.results["totalFrequency"] == 16
    assert result.results["medianClass"] == "20-30"
    assert result.results["modalClass"] == "20-30"
    assert np.isclose(result.results["median"], 23.75)
    assert np.isclose(result.results["mode"], 23.75)


def test_discrete_central_tendency_on_bare_values(discrete_rows):
    result = compute("Mean, Median & Mode (Discrete Data)", discrete_rows)
    assert list(result.steps.table.columns) == [
        "classInterval",
        "x",
        "frequency",
        "fx",
        "cumulativeFrequency",
    ]
    assert np.isclose(result.results["mean"], 37.0 / 14.0)
    assert result.results["median"] == 3.0
    assert result.results["mode"] == 3.0
    assert result.results["sumFx"] == 37.0


def test_discrete_procedures_use_midpoints_for_intervals(grouped_rows):
    result = compute(ProblemKind.DISCRETE_CENTRAL_TENDENCY, grouped_rows)
    assert np.isclose(result.results["mean"], 23.75)
    assert result.results["median"] == 25.0
    assert result.results["mode"] == 25.0


def test_dispersion_tables_and_results(grouped_rows, discrete_rows):
    discrete = compute(ProblemKind.DISCRETE_DISPERSION, discrete_rows)
    assert np.isclose(discrete.results["meanDeviation"], 41.0 / 49.0)
    assert np.isclose(
        discrete.results["standardDeviation"] ** 2, discrete.results["variance"]
    )
    assert "fAbsDeviation" in discrete.steps.table.columns

    continuous = compute(ProblemKind.CONTINUOUS_DISPERSION, grouped_rows)
    assert {"lowerLimit", "upperLimit", "fDeviationSquared"} <= set(
        continuous.steps.table.columns
    )
    assert np.isclose(continuous.results["mean"], 23.75)


def test_continuous_procedures_reject_bare_values(discrete_rows):
    with pytest.raises(DomainError, match="class intervals") as excinfo:
        compute(ProblemKind.CONTINUOUS_DISPERSION, discrete_rows)
    assert excinfo.value.problem is ProblemKind.CONTINUOUS_DISPERSION


def test_skewness_kurtosis_symmetric_table():
    rows = [make_row(r, "4") for r in ("0-10", "10-20", "20-30")]
    result = compute(ProblemKind.SKEWNESS_KURTOSIS, rows)
    assert np.isclose(result.results["mean"], 15.0)
    assert np.isclose(result.results["skewness"], 0.0)
    assert np.isclose(
        result.results["excessKurtosis"], result.results["kurtosis"] - 3.0
    )


def test_skewness_single_row_is_domain_error():
    failure = try_compute(ProblemKind.SKEWNESS_KURTOSIS, [make_row("10-20", "5")])
    assert isinstance(failure, CalculationFailure)
    assert not failure.ok
    assert "standard deviation is zero" in failure.message


def test_correlation_and_regressions_pair_x_with_frequency():
    rows = _bare([(1, 2), (2, 4), (3, 6)])
    corr = compute(ProblemKind.CORRELATION, rows)
    assert np.isclose(corr.results["correlationCoefficient"], 1.0)
    assert corr.results["n"] == 3
    assert corr.results["sumXY"] == 28

    y_on_x = compute(ProblemKind.REGRESSION_Y_ON_X, rows)
    assert np.isclose(y_on_x.results["slope"], 2.0)
    assert np.isclose(y_on_x.results["intercept"], 0.0)
    assert y_on_x.results["equation"] == "y = 0 + 2x"

    x_on_y = compute(ProblemKind.REGRESSION_X_ON_Y, rows)
    assert np.isclose(x_on_y.results["slope"], 0.5)
    assert np.isclose(x_on_y.results["meanX"], 2.0)
    assert np.isclose(x_on_y.results["meanY"], 4.0)


def test_constant_frequency_correlation_fails_without_raising():
    outcome = try_compute("correlation-coefficient", _bare([(1, 5), (2, 5), (3, 5)]))
    assert isinstance(outcome, CalculationFailure)
    assert outcome.problem is ProblemKind.CORRELATION
    assert outcome.as_dict() == {
        "problem": "Correlation Coefficient",
        "error": outcome.message,
    }


def test_straight_line_fit_reports_fitted_line():
    rows = _bare([(1, 3), (2, 5), (3, 7), (4, 9)])
    result = compute(ProblemKind.STRAIGHT_LINE_FIT, rows)
    assert isinstance(result.results, CurveFitResults)
    assert np.isclose(result.results["a"], 1.0)
    assert np.isclose(result.results["b"], 2.0)
    curve = result.results["fittedLine"]
    assert [p.x for p in curve] == [1.0, 2.0, 3.0, 4.0]
    assert np.allclose([p.y for p in curve], [3.0, 5.0, 7.0, 9.0])
    assert "fittedLine" in result.as_dict()["results"]


def test_fitted_line_matches_coefficients(grouped_rows):
    result = compute(ProblemKind.STRAIGHT_LINE_FIT, grouped_rows)
    a, b = result.results["a"], result.results["b"]
    for point in result.results["fittedLine"]:
        assert point.y == pytest.approx(a + b * point.x, rel=1e-9)
    assert result.steps.table["fitted"].tolist() == pytest.approx(
        [p.y for p in result.results["fittedLine"]], rel=1e-9
    )


def test_parabola_fit_needs_three_rows(grouped_rows):
    with pytest.raises(DomainError, match="At least 3 rows"):
        compute(ProblemKind.PARABOLA_FIT, grouped_rows[:2])
    result = compute(ProblemKind.PARABOLA_FIT, grouped_rows)
    assert len(result.results["fittedCurve"]) == 3
    assert "xSquaredY" in result.steps.table.columns


def test_exponential_fit_on_growth_table():
    result = compute(ProblemKind.EXPONENTIAL_FIT, GROWTH_ROWS)
    assert abs(result.results["a"] - 1.90) < 0.15
    assert abs(result.results["b"] - 0.5076) < 0.02
    assert "lnY" in result.steps.table.columns


def test_exponential_fit_exact_with_float_frequencies():
    rows = [
        {"classInterval": x, "frequency": 2.0 * np.exp(0.5 * x)} for x in (1, 2, 3, 4)
    ]
    result = compute(ProblemKind.EXPONENTIAL_FIT, rows)
    assert np.isclose(result.results["a"], 2.0, atol=1e-9)
    assert np.isclose(result.results["b"], 0.5, atol=1e-9)


def test_log_fits_reject_non_positive_values():
    zero_freq = [
        {"classInterval": "1", "frequency": 0},
        {"classInterval": "2", "frequency": 3},
    ]
    with pytest.raises(DomainError, match="positive"):
        compute(ProblemKind.EXPONENTIAL_FIT, zero_freq)

    zero_x = [Row(lower=0, upper=0, frequency=3), Row(lower=1, upper=1, frequency=4)]
    with pytest.raises(DomainError, match="every x") as excinfo:
        compute(ProblemKind.POWER_FIT, zero_x)
    assert excinfo.value.problem is ProblemKind.POWER_FIT


def test_power_fit_on_intervals(grouped_rows):
    result = compute(ProblemKind.POWER_FIT, grouped_rows)
    assert {"lnX", "lnY", "lnXLnY", "lnXSquared"} <= set(result.steps.table.columns)
    assert result.results["a"] > 0


def test_result_shape_and_row_order(grouped_rows):
    reversed_rows = list(reversed(grouped_rows))
    result = compute(ProblemKind.DISCRETE_DISPERSION, reversed_rows)
    payload = result.as_dict()
    assert set(payload) == {"formulas", "steps", "results"}
    table = payload["steps"]["calculationTable"]
    assert [rec["classInterval"] for rec in table] == ["30-40", "20-30", "10-20"]
    assert isinstance(table[0]["frequency"], float)
    assert list(result.steps.table.index) == [0, 1, 2]


def test_formulas_do_not_depend_on_data(grouped_rows, discrete_rows):
    first = compute(ProblemKind.DISCRETE_DISPERSION, grouped_rows)
    second = compute(ProblemKind.DISCRETE_DISPERSION, discrete_rows)
    assert first.formulas == second.formulas


def test_unknown_problem_is_value_error(grouped_rows):
    with pytest.raises(ValueError, match="Unknown problem"):
        compute("Histogram", grouped_rows)


def test_large_midpoints_still_correlate():
    rows = [make_row("10000000-10000002", "1"), make_row("10000002-10000004", "2")]
    result = try_compute(ProblemKind.CORRELATION, rows)
    assert result.ok
    assert np.isclose(result.results["correlationCoefficient"], 1.0)

    line = compute(
        ProblemKind.STRAIGHT_LINE_FIT,
        [make_row("10000000-10000002", "3"), make_row("10000002-10000004", "5")],
    )
    assert np.isclose(line.results["b"], 1.0)


def test_large_frequencies_still_regress():
    rows = _bare([(1, 1000000), (2, 1000001), (3, 1000000)])
    result = try_compute(ProblemKind.REGRESSION_X_ON_Y, rows)
    assert result.ok
    assert abs(result.results["slope"]) < 1e-9
    assert np.isclose(result.results["meanX"], 2.0)

    growing = _bare([(1, 1000000), (2, 1000001), (3, 1000002)])
    corr = compute(ProblemKind.CORRELATION, growing)
    assert np.isclose(corr.results["correlationCoefficient"], 1.0)


def test_grouped_median_class_when_cumulative_hits_half_exactly():
    rows = [make_row("10-20", "8"), make_row("20-30", "8")]
    result = compute(ProblemKind.CONTINUOUS_CENTRAL_TENDENCY, rows)
    assert result.results["medianClass"] == "10-20"
    assert np.isclose(result.results["median"], 20.0)
    assert result.results["modalClass"] == "10-20"
    assert np.isclose(result.results["mode"], 20.0)


def test_discrete_median_when_cumulative_hits_half_exactly():
    result = compute(ProblemKind.DISCRETE_CENTRAL_TENDENCY, _bare([(1, 2), (2, 2), (3, 4)]))
    assert result.steps.table["cumulativeFrequency"].tolist() == [2.0, 4.0, 8.0]
    assert result.results["median"] == 2.0
    assert result.results["mode"] == 3.0


def test_regression_slopes_multiply_to_r_squared():
    rows = _bare([(1, 2), (2, 3), (3, 5), (4, 4), (5, 6)])
    b_yx = compute(ProblemKind.REGRESSION_Y_ON_X, rows).results["slope"]
    b_xy = compute(ProblemKind.REGRESSION_X_ON_Y, rows).results["slope"]
    r = compute(ProblemKind.CORRELATION, rows).results["correlationCoefficient"]
    assert np.isclose(b_yx * b_xy, r**2)


def test_non_numeric_interval_pair_is_a_failure_not_a_crash():
    rows = [
        {"classInterval": ("a", "b"), "frequency": 1},
        {"classInterval": (1, 2), "frequency": 2},
    ]
    outcome = try_compute(ProblemKind.CORRELATION, rows)
    assert isinstance(outcome, CalculationFailure)
    assert "not numeric" in outcome.message
