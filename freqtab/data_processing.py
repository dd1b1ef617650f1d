"""
Handles row parsing, row-limit bookkeeping, and calculation-table preparation.
"""

# Algorithm summary: parse "low-high" (or bare value) class labels and
# frequencies with the same rules the entry form applies, collect rows up to a
# user-chosen limit, then lay the rows out as a DataFrame with midpoints and
# cumulative frequencies in input order for the engine's reducers.

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Sequence

import numpy as np
import pandas as pd

from .errors import DomainError, RowInputError
from .problems import ProblemKind
from .schema import COLUMNS

INTERVAL_PATTERN = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")
VALUE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*$")

MSG_INTERVAL = "Class interval must be in format 'x-x' (e.g., 10-20)"
MSG_FREQUENCY = "Frequency must be a positive number"
MSG_NO_LIMIT = "Please set a rows limit first"
MSG_LIMIT_REACHED = "Row limit reached"


@dataclass(frozen=True)
class Row:
    """One observation bucket of the frequency table.

    Bare-value rows (discrete data) carry the value in both limits.
    """

    lower: float
    upper: float
    frequency: float
    label: str = ""

    @property
    def is_interval(self) -> bool:
        return self.upper > self.lower

    @property
    def width(self) -> float:
        return float(self.upper - self.lower)

    @property
    def midpoint(self) -> float:
        return (float(self.lower) + float(self.upper)) / 2.0

    @property
    def display(self) -> str:
        if self.label:
            return self.label
        if self.is_interval:
            return f"{self.lower:g}-{self.upper:g}"
        return f"{self.lower:g}"


def parse_class_interval(text) -> tuple[float, float]:
    """Parse a ``low-high`` interval or a bare positive value.

    Args:
        text: User input such as ``"10-20"`` or ``"7"``.

    Returns:
        tuple[float, float]: ``(lower, upper)``; both equal the value for a
        bare entry.

    Raises:
        RowInputError: If the text matches neither form, if ``low >= high``,
            or if a bare value is not positive.
    """
    raw = str(text)
    match = INTERVAL_PATTERN.match(raw)
    if match:
        low, high = int(match.group(1)), int(match.group(2))
        if low >= high:
            raise RowInputError(MSG_INTERVAL)
        return float(low), float(high)

    match = VALUE_PATTERN.match(raw)
    if match:
        value = float(match.group(1))
        if value <= 0:
            raise RowInputError("Value must be a positive number")
        return value, value

    raise RowInputError(MSG_INTERVAL)


def parse_frequency(text) -> int:
    """Parse a positive integer frequency.

    Raises:
        RowInputError: If ``text`` is empty, non-numeric, fractional or not
            positive.
    """
    try:
        value = float(str(text).strip())
    except ValueError:
        raise RowInputError(MSG_FREQUENCY) from None
    if not np.isfinite(value) or value <= 0 or value != int(value):
        raise RowInputError(MSG_FREQUENCY)
    return int(value)


def make_row(interval_text, frequency_text) -> Row:
    """Validate one entry-form pair and build a :class:`Row`."""
    lower, upper = parse_class_interval(interval_text)
    frequency = parse_frequency(frequency_text)
    return Row(lower=lower, upper=upper, frequency=frequency, label=str(interval_text).strip())


class EntryState(Enum):
    NO_DATA = "no_data"
    COLLECTING_ROWS = "collecting_rows"
    READY = "ready"


class RowCollector:
    """Collect validated rows up to a user-chosen limit.

    The collector is ready for analysis once the number of rows equals the
    limit. Lowering the limit below the current row count discards all rows.
    """

    def __init__(self, rows_limit: int | None = None):
        self._rows: List[Row] = []
        self.rows_limit: int | None = None
        if rows_limit is not None:
            self.set_rows_limit(rows_limit)

    def set_rows_limit(self, limit) -> None:
        try:
            value = int(limit)
        except (TypeError, ValueError):
            value = 0
        if value <= 0:
            self.rows_limit = None
            return
        self.rows_limit = value
        if value < len(self._rows):
            self._rows.clear()

    def add_row(self, interval_text, frequency_text) -> Row:
        """Validate and append one row.

        Raises:
            RowInputError: If no limit is set, the row is malformed, or the
                limit has already been reached.
        """
        if not self.rows_limit:
            raise RowInputError(MSG_NO_LIMIT)
        row = make_row(interval_text, frequency_text)
        if len(self._rows) >= self.rows_limit:
            raise RowInputError(MSG_LIMIT_REACHED)
        self._rows.append(row)
        return row

    def delete_row(self, index: int) -> Row:
        return self._rows.pop(index)

    @property
    def rows(self) -> tuple[Row, ...]:
        return tuple(self._rows)

    @property
    def state(self) -> EntryState:
        if not self._rows:
            return EntryState.NO_DATA
        if self.rows_limit is not None and len(self._rows) == self.rows_limit:
            return EntryState.READY
        return EntryState.COLLECTING_ROWS

    @property
    def is_ready(self) -> bool:
        return self.state is EntryState.READY

    def __len__(self) -> int:
        return len(self._rows)


_CSV_INTERVAL_NAMES = ("class interval", "classinterval", "interval", "class")
_CSV_FREQUENCY_NAMES = ("frequency", "freq", "f")


def _resolve_column(frame: pd.DataFrame, candidates: tuple[str, ...], label: str) -> str:
    lookup = {str(col).strip().lower(): str(col) for col in frame.columns}
    for name in candidates:
        found = lookup.get(name)
        if found is not None:
            return found
    raise RowInputError(
        f"No {label} column found. Available columns: {list(frame.columns)}"
    )


def load_rows_csv(filepath) -> List[Row]:
    """Load a frequency table from a CSV file.

    Args:
        filepath: Path to a CSV with a class-interval column (``Class
            Interval`` or ``classInterval``) and a ``Frequency`` column.

    Returns:
        list[Row]: Parsed rows in file order.

    Raises:
        RowInputError: If a column is missing or any row fails validation.
            The message names the offending 1-based data row.
    """
    frame = pd.read_csv(filepath, dtype=str, keep_default_na=False)
    interval_col = _resolve_column(frame, _CSV_INTERVAL_NAMES, "class interval")
    frequency_col = _resolve_column(frame, _CSV_FREQUENCY_NAMES, "frequency")

    rows = []
    for idx, record in enumerate(frame.itertuples(index=False), start=1):
        values = dict(zip(frame.columns, record))
        try:
            rows.append(make_row(values[interval_col], values[frequency_col]))
        except RowInputError as exc:
            raise RowInputError(f"Row {idx}: {exc}") from exc
    return rows


def coerce_row(item) -> Row:
    """Accept a :class:`Row` or an entry-form mapping and return a Row.

    Mappings use the keys ``classInterval`` and ``frequency``; the interval
    may be a ``"low-high"`` string, a bare number (string or numeric) or a
    ``(low, high)`` pair. Frequencies are taken as given so the engine can
    apply its own domain checks.
    """
    if isinstance(item, Row):
        return item
    if not isinstance(item, Mapping):
        raise DomainError(f"Unsupported row type: {type(item).__name__}")

    interval = item.get("classInterval", item.get("value"))
    frequency = item.get("frequency")
    if interval is None or frequency is None:
        raise DomainError("Each row needs 'classInterval' and 'frequency'.")

    if isinstance(interval, (tuple, list)) and len(interval) == 2:
        try:
            lower, upper = float(interval[0]), float(interval[1])
        except (TypeError, ValueError):
            raise DomainError(f"Class interval {interval!r} is not numeric.") from None
        label = f"{lower:g}-{upper:g}"
    elif isinstance(interval, (int, float, np.integer, np.floating)):
        lower = upper = float(interval)
        label = f"{lower:g}"
    else:
        try:
            lower, upper = parse_class_interval(interval)
        except RowInputError as exc:
            raise DomainError(str(exc)) from exc
        label = str(interval).strip()

    if upper < lower:
        raise DomainError(f"Class interval {label} has lower limit above upper limit.")
    try:
        freq = float(frequency)
    except (TypeError, ValueError):
        raise DomainError(f"Frequency {frequency!r} for {label} is not numeric.") from None
    return Row(lower=lower, upper=upper, frequency=freq, label=label)


def prepare_rows(
    rows: Iterable, problem: ProblemKind | None = None, min_rows: int = 1
) -> pd.DataFrame:
    """Lay rows out as the base calculation table.

    Args:
        rows: Ordered :class:`Row` objects or entry-form mappings. Rows are
            assumed to be sorted by class already and are never re-sorted.
        problem: Procedure the table is prepared for; supplies the minimum row
            count and whether class intervals are required.
        min_rows: Minimum row count when ``problem`` is not given.

    Returns:
        pandas.DataFrame: Columns ``classInterval``, ``lowerLimit``,
        ``upperLimit``, ``classWidth``, ``x``, ``frequency`` and
        ``cumulativeFrequency`` in input order.

    Raises:
        DomainError: On too few rows, a negative or non-finite frequency, a
            zero total frequency, or a bare-value row for a procedure that
            needs class intervals.
    """
    coerced: Sequence[Row] = [coerce_row(item) for item in rows]
    required = problem.min_rows if problem is not None else int(min_rows)

    if not coerced:
        raise DomainError("No rows supplied.", problem)
    if len(coerced) < required:
        raise DomainError(
            f"At least {required} rows are required, got {len(coerced)}.", problem
        )

    frequency = np.array([row.frequency for row in coerced], dtype=float)
    if np.any(~np.isfinite(frequency)) or np.any(frequency < 0):
        raise DomainError("Frequencies must be finite and non-negative.", problem)
    if float(np.sum(frequency)) <= 0:
        raise DomainError("Total frequency N is zero.", problem)

    if problem is not None and problem.requires_intervals:
        bare = [row.display for row in coerced if not row.is_interval]
        if bare:
            raise DomainError(
                "Grouped-data formulas need class intervals (low-high); "
                f"got bare values: {', '.join(bare)}.",
                problem,
            )

    lower = np.array([row.lower for row in coerced], dtype=float)
    upper = np.array([row.upper for row in coerced], dtype=float)

    return pd.DataFrame(
        {
            COLUMNS.interval: [row.display for row in coerced],
            COLUMNS.lower: lower,
            COLUMNS.upper: upper,
            COLUMNS.width: upper - lower,
            COLUMNS.x: (lower + upper) / 2.0,
            COLUMNS.frequency: frequency,
            COLUMNS.cumulative: np.cumsum(frequency),
        }
    )
