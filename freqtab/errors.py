"""Exception types for the two failure tiers of a frequency-table analysis.

``RowInputError`` covers problems with what the user typed (interval syntax,
frequency, row limit) and is raised before any statistics run.
``DomainError`` is raised by the engine when a procedure's mathematical
precondition does not hold for otherwise well-formed rows.

Both derive from ``ValueError`` so callers that only care about "bad data"
can catch one type.
"""

from __future__ import annotations


class RowInputError(ValueError):
    """A row (or the row limit) was rejected by input validation."""


class DomainError(ValueError):
    """A statistic is undefined for the supplied rows.

    Attributes:
        problem: The procedure being computed, or ``None`` when the failure
            happened before a procedure was chosen.
    """

    def __init__(self, message: str, problem=None):
        super().__init__(message)
        self.problem = problem

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""
