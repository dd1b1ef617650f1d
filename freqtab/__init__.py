"""
A Python package for descriptive statistics on grouped-frequency tables.

Computes central tendency, dispersion, shape, correlation, regression and
curve fits from class intervals paired with frequencies, returning the
per-row calculation table, the final results and the formulas used.

Modules:
    - data_processing: Parses and collects rows and prepares the base table.
    - engine: Dispatches a procedure and assembles the result.
    - stats: Numerical reducers (central tendency, dispersion, regression, fits).
    - reporting: Formats results for display.
    - output: Writes results to CSV.
    - plotting: Renders frequency and fit charts.
"""

__version__ = "1.0.0"

from .data_processing import (
    EntryState,
    Row,
    RowCollector,
    load_rows_csv,
    make_row,
    parse_class_interval,
    parse_frequency,
    prepare_rows,
)
from .engine import compute, try_compute
from .errors import DomainError, RowInputError
from .problems import ProblemKind
from .results import (
    CalculationFailure,
    CalculationResult,
    CurveFitResults,
    MeasureResults,
    Point,
)

__all__ = [
    # Rows
    "Row",
    "RowCollector",
    "EntryState",
    "load_rows_csv",
    "make_row",
    "parse_class_interval",
    "parse_frequency",
    "prepare_rows",
    # Engine
    "ProblemKind",
    "compute",
    "try_compute",
    "CalculationResult",
    "CalculationFailure",
    "MeasureResults",
    "CurveFitResults",
    "Point",
    # Errors
    "DomainError",
    "RowInputError",
]
