"""End-to-end tests for the command-line driver."""

import logging
import os

import pytest

import main as cli

GROUPED_ARGS = ["--row", "10-20:5", "--row", "20-30:8", "--row", "30-40:3"]


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def test_runs_all_procedures(tmp_path, capsys):
    code = cli.main(GROUPED_ARGS + ["--outdir", str(tmp_path), "--no-plots"])
    assert code == cli.EXIT_OK

    out = capsys.readouterr().out
    assert "Median & Mode (Continuous Data)" in out
    assert "Power Curve Fit" in out
    assert os.path.exists(tmp_path / "parabola-fit_fitted_curve.csv")
    assert not any(name.endswith(".png") for name in os.listdir(tmp_path))


def test_single_problem_with_plots_and_log_file(tmp_path):
    log_file = tmp_path / "run.log"
    code = cli.main(
        GROUPED_ARGS
        + [
            "--problem",
            "straight-line-fit",
            "--outdir",
            str(tmp_path),
            "--log-file",
            str(log_file),
        ]
    )
    assert code == cli.EXIT_OK
    assert os.path.exists(tmp_path / "straight-line-fit_fit.png")
    assert "Total execution time" in log_file.read_text()


def test_reads_rows_from_csv(tmp_path):
    csv_path = tmp_path / "table.csv"
    csv_path.write_text("Class Interval,Frequency\n1,2\n2,4\n3,5\n4,3\n")
    code = cli.main(
        [
            "--input",
            str(csv_path),
            "--problem",
            "Mean, Median & Mode (Discrete Data)",
            "--outdir",
            str(tmp_path / "out"),
            "--no-plots",
        ]
    )
    assert code == cli.EXIT_OK
    assert os.path.exists(tmp_path / "out" / "mean-median-mode-discrete-data_results.csv")


@pytest.mark.parametrize(
    "extra",
    [
        ["--row", "20-10:5"],
        ["--row", "10-20"],
        ["--row", "10-20:0"],
        ["--rows-limit", "2"],
        ["--rows-limit", "4"],
        ["--problem", "histogram"],
    ],
)
def test_input_errors_exit_with_one(tmp_path, extra):
    code = cli.main(GROUPED_ARGS + extra + ["--outdir", str(tmp_path), "--no-plots"])
    assert code == cli.EXIT_INPUT_ERROR


def test_no_rows_is_input_error(tmp_path):
    assert cli.main(["--outdir", str(tmp_path)]) == cli.EXIT_INPUT_ERROR


def test_all_requested_procedures_failing_exits_with_two(tmp_path, capsys):
    code = cli.main(
        [
            "--row",
            "1:5",
            "--row",
            "2:5",
            "--problem",
            "correlation-coefficient",
            "--outdir",
            str(tmp_path),
            "--no-plots",
        ]
    )
    assert code == cli.EXIT_DOMAIN_ERROR
    assert "Error:" in capsys.readouterr().out
    assert os.listdir(tmp_path) == []


def test_partial_failures_still_succeed(tmp_path):
    code = cli.main(
        ["--row", "1:5", "--row", "2:5", "--outdir", str(tmp_path), "--no-plots"]
    )
    assert code == cli.EXIT_OK
