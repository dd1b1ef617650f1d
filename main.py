#!/usr/bin/env python3
"""
Main script for running frequency-table statistics.
"""

# Pipeline overview (README-style):
# 1) Collect rows from a CSV file or repeated --row "low-high:frequency"
#    arguments, applying the entry-form validation and row limit.
# 2) Run each requested procedure through the statistics engine; domain
#    errors are reported per procedure and do not stop the others.
# 3) Print formulas, calculation steps and results, then export CSV tables
#    and charts for every procedure that succeeded.

import argparse
import logging
import os
import sys
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from freqtab.data_processing import RowCollector, load_rows_csv
from freqtab.engine import try_compute
from freqtab.errors import RowInputError
from freqtab.output import save_result_to_csv
from freqtab.plotting import plot_result
from freqtab.problems import ProblemKind
from freqtab.reporting import DEFAULT_DECIMALS, render_text_report
from freqtab.results import CalculationFailure

DEFAULT_OUTPUT_DIR = "output"

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_DOMAIN_ERROR = 2


def configure_logging(log_file=None):
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w"))
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def _split_row_argument(text):
    """Split ``"10-20:5"`` into ``("10-20", "5")``."""
    interval, sep, frequency = str(text).rpartition(":")
    if not sep:
        raise RowInputError(
            f"Row '{text}' must look like 'low-high:frequency' (e.g., 10-20:5)"
        )
    return interval, frequency


def collect_rows(input_path=None, row_args=(), rows_limit=None):
    """Build a ready RowCollector from a CSV file and/or --row arguments.

    Raises:
        RowInputError: If any row is invalid, no rows are supplied, or the
            number of rows does not match ``rows_limit``.
    """
    pairs = []
    if input_path:
        pairs.extend((row.display, row.frequency) for row in load_rows_csv(input_path))
    pairs.extend(_split_row_argument(text) for text in row_args)
    if not pairs:
        raise RowInputError("No rows supplied. Use --input or --row.")

    collector = RowCollector(rows_limit if rows_limit is not None else len(pairs))
    for interval, frequency in pairs:
        collector.add_row(interval, frequency)
    if not collector.is_ready:
        raise RowInputError(
            f"Rows limit is {collector.rows_limit} but only {len(collector)} rows "
            "were supplied"
        )
    return collector


def resolve_problems(names):
    if not names or any(str(name).strip().lower() == "all" for name in names):
        return list(ProblemKind)
    return [ProblemKind.from_label(name) for name in names]


def _build_arg_parser():
    parser = argparse.ArgumentParser(
        description="Descriptive statistics, regression and curve fits for a "
        "grouped-frequency table."
    )
    parser.add_argument(
        "--input", default=None, help="CSV with 'Class Interval' and 'Frequency' columns."
    )
    parser.add_argument(
        "--row",
        action="append",
        default=[],
        help="One row as 'low-high:frequency' or 'value:frequency'; repeatable.",
    )
    parser.add_argument(
        "--rows-limit",
        type=int,
        default=None,
        help="Expected number of rows (default: number of rows supplied).",
    )
    parser.add_argument(
        "--problem",
        action="append",
        default=[],
        help="Procedure label, slug or 'all' (default: all); repeatable.",
    )
    parser.add_argument(
        "--outdir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    parser.add_argument(
        "--decimals",
        type=int,
        default=DEFAULT_DECIMALS,
        help="Decimal places in printed tables.",
    )
    parser.add_argument("--no-plots", action="store_true", help="Skip chart output.")
    parser.add_argument("--log-file", default=None, help="Also write the log here.")
    return parser


def main(argv=None):
    """Main execution function with step-by-step logging."""
    args = _build_arg_parser().parse_args(argv)
    configure_logging(args.log_file)

    start_time = time.time()
    logging.info("Initializing frequency-table statistics pipeline")

    try:
        collector = collect_rows(args.input, args.row, args.rows_limit)
        problems = resolve_problems(args.problem)
    except (RowInputError, ValueError) as exc:
        logging.error("Input rejected: %s", exc)
        return EXIT_INPUT_ERROR

    rows = collector.rows
    logging.info("Collected %d rows (N = %g)", len(rows), sum(r.frequency for r in rows))
    logging.info("Running %d procedure(s)", len(problems))

    os.makedirs(args.outdir, exist_ok=True)
    logging.info("Output directory ensured: %s", args.outdir)

    failures = 0
    for problem in problems:
        step_start = time.time()
        outcome = try_compute(problem, rows)
        if isinstance(outcome, CalculationFailure):
            failures += 1
            logging.warning("%s: %s", problem.value, outcome.message)
            print(render_text_report(outcome, args.decimals))
            print()
            continue

        print(render_text_report(outcome, args.decimals))
        print()
        paths = save_result_to_csv(outcome, args.outdir)
        if not args.no_plots:
            for path in plot_result(outcome, args.outdir):
                logging.info("  - Chart: %s", path)
        logging.info(
            "%s completed in %.3f seconds (%d files)",
            problem.value,
            time.time() - step_start,
            len(paths),
        )

    total_duration = time.time() - start_time
    logging.info(f"Total execution time: {total_duration:.2f} seconds")

    if failures == len(problems):
        logging.error("Every requested procedure failed; no results written.")
        return EXIT_DOMAIN_ERROR
    if failures:
        logging.warning("%d of %d procedure(s) were undefined for these rows", failures, len(problems))
    logging.info("Analysis pipeline completed successfully")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
