from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict


class CalculationError(ValueError):
    kind = "calculation_error"

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class MissingInput(CalculationError):
    kind = "missing_input"

    def __init__(self, mode: str, fields: Iterable[str]):
        self.mode = mode
        self.fields = list(fields)
        super().__init__([f"{mode} requires {name}" for name in self.fields])


class DegenerateSolve(CalculationError):
    kind = "degenerate_solve"

    def __init__(self, message: str):
        super().__init__([message])


class NumericDivergence(CalculationError):
    kind = "numeric_divergence"

    def __init__(self, message: str, iterations: int):
        super().__init__([message])
        self.iterations = iterations


class WarningCode(str, Enum):
    UNREACHABLE = "unreachable"
    CONTINUOUS_CONTRIBUTIONS_IGNORED = "continuous_contributions_ignored"


class CalculationWarning(BaseModel):
    """Non-fatal condition the caller should surface next to the result."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    code: WarningCode
    message: str


def unreachable(message: str) -> CalculationWarning:
    return CalculationWarning(code=WarningCode.UNREACHABLE, message=message)
