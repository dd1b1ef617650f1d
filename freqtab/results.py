"""Result containers returned by the statistics engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

import numpy as np
import pandas as pd

from .problems import ProblemKind

FITTED_LINE = "fittedLine"
FITTED_CURVE = "fittedCurve"


def _plain(value):
    """Convert numpy scalars to built-in numbers for serialization."""
    if isinstance(value, np.generic):
        return value.item()
    return value


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def as_dict(self) -> Dict[str, float]:
        return {"x": float(self.x), "y": float(self.y)}


@dataclass(frozen=True)
class MeasureResults:
    """Scalar measures keyed by statistic name (insertion order kept)."""

    values: Dict[str, Union[float, str]]
    family: str = field(default="measures", init=False)

    def __getitem__(self, key: str):
        return self.values[key]

    def as_dict(self) -> Dict[str, object]:
        return {key: _plain(value) for key, value in self.values.items()}


@dataclass(frozen=True)
class CurveFitResults:
    """Fitted coefficients plus the model evaluated at each input x."""

    coefficients: Dict[str, float]
    curve: Tuple[Point, ...]
    curve_key: str = FITTED_CURVE
    family: str = field(default="curve_fit", init=False)

    def __getitem__(self, key: str):
        if key == self.curve_key:
            return self.curve
        return self.coefficients[key]

    def as_dict(self) -> Dict[str, object]:
        out: Dict[str, object] = {
            key: _plain(value) for key, value in self.coefficients.items()
        }
        out[self.curve_key] = [point.as_dict() for point in self.curve]
        return out


Results = Union[MeasureResults, CurveFitResults]


@dataclass(frozen=True)
class CalculationSteps:
    """Per-row derived table, in input order."""

    table: pd.DataFrame

    @property
    def calculation_table(self) -> List[Dict[str, object]]:
        records = self.table.to_dict(orient="records")
        return [{key: _plain(value) for key, value in rec.items()} for rec in records]


@dataclass(frozen=True)
class CalculationResult:
    problem: ProblemKind
    formulas: Dict[str, str]
    steps: CalculationSteps
    results: Results

    @property
    def ok(self) -> bool:
        return True

    def as_dict(self) -> Dict[str, object]:
        """Return the JSON-compatible ``{formulas, steps, results}`` mapping."""
        return {
            "formulas": dict(self.formulas),
            "steps": {"calculationTable": self.steps.calculation_table},
            "results": self.results.as_dict(),
        }


@dataclass(frozen=True)
class CalculationFailure:
    """Tagged failure returned instead of a result when a statistic is undefined."""

    problem: ProblemKind | None
    message: str

    @property
    def ok(self) -> bool:
        return False

    def as_dict(self) -> Dict[str, object]:
        return {
            "problem": self.problem.value if self.problem is not None else None,
            "error": self.message,
        }

