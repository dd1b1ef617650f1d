"""Tests for CSV export of calculation results."""

import os

import pandas as pd

from freqtab.engine import compute
from freqtab.output import save_result_to_csv
from freqtab.problems import ProblemKind


def test_save_measure_result(tmp_path, grouped_rows, capsys):
    result = compute(ProblemKind.CONTINUOUS_DISPERSION, grouped_rows)
    paths = save_result_to_csv(result, output_dir=str(tmp_path))

    assert set(paths) == {"calculation_table", "results", "formulas"}
    assert all(os.path.exists(p) for p in paths.values())
    assert os.path.basename(paths["results"]) == (
        "mean-deviation-std-dev-continuous-data_results.csv"
    )

    table = pd.read_csv(paths["calculation_table"])
    assert table["classInterval"].tolist() == ["10-20", "20-30", "30-40"]

    results = pd.read_csv(paths["results"])
    assert list(results.columns) == ["Measure", "Key", "Value"]
    assert "meanDeviation" in results["Key"].tolist()

    assert "Saved results to" in capsys.readouterr().out


def test_save_curve_fit_writes_fitted_curve(tmp_path, grouped_rows):
    result = compute(ProblemKind.PARABOLA_FIT, grouped_rows)
    paths = save_result_to_csv(result, output_dir=str(tmp_path), prefix="run 1")

    assert os.path.basename(paths["fitted_curve"]) == "run_1_fitted_curve.csv"
    curve = pd.read_csv(paths["fitted_curve"])
    assert list(curve.columns) == ["x", "y"]
    assert curve["x"].tolist() == [15.0, 25.0, 35.0]

    results = pd.read_csv(paths["results"])
    assert "fittedCurve" not in results["Key"].tolist()
