from __future__ import annotations

import logging
import math
from typing import List

from pydantic import BaseModel, ConfigDict

from neonvest.domain.errors import CalculationWarning, WarningCode
from neonvest.domain.periods import (
    CompoundingFrequency,
    discrete_periods,
    is_continuous,
    total_periods,
)

logger = logging.getLogger(__name__)


class YearlyRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    startingBalance: float
    contributions: float
    interestEarned: float
    endingBalance: float


class ProjectionResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    futureValue: float
    totalInterest: float
    # includes the initial capital
    totalContributions: float
    yearly: List[YearlyRecord]
    warnings: List[CalculationWarning] = []


def simulate(
    capital: float,
    contribution: float,
    rate_percent: float,
    duration_years: float,
    frequency: CompoundingFrequency,
) -> ProjectionResult:
    """
    Project the balance period by period and roll it up into yearly records.

    Per discrete period:
      1) Accrue interest on the running balance.
      2) Add the periodic contribution (end of period).

    Continuous compounding grows the initial capital only; contributions are
    not modeled there and a warning is attached when one was supplied.
    """
    if is_continuous(frequency):
        return _simulate_continuous(capital, contribution, rate_percent, duration_years)
    return _simulate_discrete(capital, contribution, rate_percent, duration_years, frequency)


def _simulate_discrete(
    capital: float,
    contribution: float,
    rate_percent: float,
    duration_years: float,
    frequency: CompoundingFrequency,
) -> ProjectionResult:
    periods = discrete_periods(frequency)
    rate_per_period = rate_percent / 100 / periods
    n = total_periods(duration_years, frequency)

    balance = float(capital)
    total_contributions = float(capital)
    records: List[YearlyRecord] = []

    year_start = balance
    year_interest = 0.0
    year_contributions = 0.0
    periods_in_year = 0

    for period in range(1, n + 1):
        interest = balance * rate_per_period
        balance += interest
        year_interest += interest

        if contribution > 0:
            balance += contribution
            year_contributions += contribution
            total_contributions += contribution

        periods_in_year += 1
        if periods_in_year == periods or period == n:
            records.append(
                YearlyRecord(
                    year=len(records) + 1,
                    startingBalance=year_start,
                    contributions=year_contributions,
                    interestEarned=year_interest,
                    endingBalance=balance,
                )
            )
            year_start = balance
            year_interest = 0.0
            year_contributions = 0.0
            periods_in_year = 0

    return ProjectionResult(
        futureValue=balance,
        totalInterest=balance - total_contributions,
        totalContributions=total_contributions,
        yearly=records,
    )


def _simulate_continuous(
    capital: float,
    contribution: float,
    rate_percent: float,
    duration_years: float,
) -> ProjectionResult:
    rate = rate_percent / 100
    warnings: List[CalculationWarning] = []
    if contribution > 0:
        message = (
            "Continuous compounding does not model periodic contributions; "
            "the projection uses the initial investment only."
        )
        logger.warning("%s (contribution=%s)", message, contribution)
        warnings.append(
            CalculationWarning(code=WarningCode.CONTINUOUS_CONTRIBUTIONS_IGNORED, message=message)
        )

    def value_at(t: float) -> float:
        return capital * math.exp(rate * t)

    records: List[YearlyRecord] = []
    previous = float(capital)
    for year in range(1, math.ceil(duration_years) + 1):
        ending = value_at(min(year, duration_years))
        records.append(
            YearlyRecord(
                year=year,
                startingBalance=previous,
                contributions=0.0,
                interestEarned=ending - previous,
                endingBalance=ending,
            )
        )
        previous = ending

    future_value = value_at(duration_years)
    return ProjectionResult(
        futureValue=future_value,
        totalInterest=future_value - capital,
        totalContributions=float(capital),
        yearly=records,
        warnings=warnings,
    )
