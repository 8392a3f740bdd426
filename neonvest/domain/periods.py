"""Compounding frequencies and their periods-per-year."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Union


class CompoundingFrequency(str, Enum):
    ANNUALLY = "annually"
    SEMIANNUALLY = "semiannually"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"
    SEMIMONTHLY = "semimonthly"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"
    DAILY = "daily"
    CONTINUOUSLY = "continuously"


class _Continuous:
    """Marker for compounding with no discrete period count."""

    _instance = None

    def __new__(cls) -> "_Continuous":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CONTINUOUS"


CONTINUOUS = _Continuous()

PeriodsPerYear = Union[int, _Continuous]

_PERIODS: Dict[CompoundingFrequency, PeriodsPerYear] = {
    CompoundingFrequency.ANNUALLY: 1,
    CompoundingFrequency.SEMIANNUALLY: 2,
    CompoundingFrequency.QUARTERLY: 4,
    CompoundingFrequency.MONTHLY: 12,
    CompoundingFrequency.SEMIMONTHLY: 24,
    CompoundingFrequency.BIWEEKLY: 26,
    CompoundingFrequency.WEEKLY: 52,
    CompoundingFrequency.DAILY: 365,
    CompoundingFrequency.CONTINUOUSLY: CONTINUOUS,
}


def periods_per_year(frequency: CompoundingFrequency) -> PeriodsPerYear:
    return _PERIODS[CompoundingFrequency(frequency)]


def is_continuous(frequency: CompoundingFrequency) -> bool:
    return periods_per_year(frequency) is CONTINUOUS


def discrete_periods(frequency: CompoundingFrequency) -> int:
    """Periods per year for a discrete frequency; raises for continuous."""
    periods = periods_per_year(frequency)
    if periods is CONTINUOUS:
        raise ValueError("continuous compounding has no discrete period count")
    return periods  # type: ignore[return-value]


def total_periods(duration_years: float, frequency: CompoundingFrequency) -> int:
    return int(round(duration_years * discrete_periods(frequency)))
