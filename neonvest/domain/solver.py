from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from neonvest.domain.errors import (
    CalculationWarning,
    DegenerateSolve,
    NumericDivergence,
    WarningCode,
    unreachable,
)
from neonvest.domain.periods import (
    CompoundingFrequency,
    discrete_periods,
    is_continuous,
    total_periods,
)
from neonvest.models import (
    CalculationMode,
    CalculationRequest,
    ContributionAmountRequest,
    FutureValueRequest,
    InterestRateRequest,
    InvestmentDurationRequest,
)

logger = logging.getLogger(__name__)

# Tunable numerics for the rate search.
FV_TOLERANCE = 0.01
RELAXED_FV_TOLERANCE = FV_TOLERANCE * 100
MAX_BISECTION_ITERATIONS = 100
MIN_RATE_PERCENT = 0.0
MAX_RATE_PERCENT = 500.0

ANNUITY_DENOMINATOR_EPSILON = 1e-9
ZERO_RATE_EPSILON = 1e-12


@dataclass
class Solution:
    mode: CalculationMode
    value: Optional[float] = None
    warnings: List[CalculationWarning] = field(default_factory=list)
    iterations: int = 0


def future_value_closed_form(
    capital: float,
    contribution: float,
    rate_per_period: float,
    n_periods: float,
) -> float:
    """Future value with end-of-period contributions; zero rate uses the linear limit."""
    if abs(rate_per_period) < ZERO_RATE_EPSILON:
        return capital + contribution * n_periods
    growth = (1 + rate_per_period) ** n_periods
    return capital * growth + contribution * (growth - 1) / rate_per_period


def solve(request: CalculationRequest) -> Solution:
    """Resolve whichever quantity the request's calculation mode leaves unknown."""
    if isinstance(request, FutureValueRequest):
        return Solution(mode=CalculationMode.FUTURE_VALUE)
    if isinstance(request, ContributionAmountRequest):
        return solve_contribution(
            capital=request.initialInvestment,
            rate_percent=request.interestRate,
            duration_years=request.investmentDuration,
            target=request.targetFutureValue,
            frequency=request.compoundingFrequency,
        )
    if isinstance(request, InterestRateRequest):
        return solve_rate(
            capital=request.initialInvestment,
            contribution=request.contributionAmount,
            duration_years=request.investmentDuration,
            target=request.targetFutureValue,
            frequency=request.compoundingFrequency,
        )
    if isinstance(request, InvestmentDurationRequest):
        return solve_duration(
            capital=request.initialInvestment,
            contribution=request.contributionAmount,
            rate_percent=request.interestRate,
            target=request.targetFutureValue,
            frequency=request.compoundingFrequency,
        )
    raise TypeError(f"unsupported calculation request {type(request).__name__}")


def solve_contribution(
    capital: float,
    rate_percent: float,
    duration_years: float,
    target: float,
    frequency: CompoundingFrequency,
) -> Solution:
    mode = CalculationMode.CONTRIBUTION_AMOUNT
    if is_continuous(frequency):
        raise DegenerateSolve(
            "contribution cannot be solved under continuous compounding; contributions are not modeled"
        )

    r = rate_percent / 100 / discrete_periods(frequency)
    n = total_periods(duration_years, frequency)
    if n == 0:
        raise DegenerateSolve("contribution cannot be solved over zero periods")

    if r == 0:
        contribution = (target - capital) / n
    else:
        growth = (1 + r) ** n
        denominator = growth - 1
        if abs(denominator) < ANNUITY_DENOMINATOR_EPSILON:
            raise DegenerateSolve("annuity factor is zero for these inputs")
        contribution = (target - capital * growth) * r / denominator

    if not math.isfinite(contribution) or contribution < 0:
        message = (
            "Target is unachievable with positive contributions; contribution set to 0."
        )
        logger.warning("%s (target=%s, capital=%s, contribution=%s)", message, target, capital, contribution)
        return Solution(mode=mode, value=0.0, warnings=[unreachable(message)])

    return Solution(mode=mode, value=contribution)


def solve_duration(
    capital: float,
    contribution: float,
    rate_percent: float,
    target: float,
    frequency: CompoundingFrequency,
) -> Solution:
    mode = CalculationMode.INVESTMENT_DURATION
    if target <= capital and contribution <= 0:
        return Solution(mode=mode, value=0.0)

    if is_continuous(frequency):
        return _solve_duration_continuous(capital, contribution, rate_percent, target)

    periods = discrete_periods(frequency)
    r = rate_percent / 100 / periods

    if r == 0:
        if contribution <= 0:
            raise DegenerateSolve("target cannot be reached with 0% interest and no contributions")
        n_periods = (target - capital) / contribution
    else:
        denominator = capital * r + contribution
        numerator = target * r + contribution
        if denominator <= 0 or numerator / denominator <= 0:
            raise DegenerateSolve("duration undefined: non-positive logarithm argument")
        n_periods = math.log(numerator / denominator) / math.log(1 + r)

    duration = n_periods / periods
    return _checked_duration(mode, duration, target, capital)


def _solve_duration_continuous(
    capital: float,
    contribution: float,
    rate_percent: float,
    target: float,
) -> Solution:
    mode = CalculationMode.INVESTMENT_DURATION
    rate = rate_percent / 100
    if capital <= 0 or rate <= 0 or target <= 0:
        raise DegenerateSolve("duration undefined: continuous growth needs positive capital, rate and target")
    solution = _checked_duration(mode, math.log(target / capital) / rate, target, capital)
    solution.warnings.extend(_continuous_contribution_warnings(contribution))
    return solution


def _checked_duration(mode: CalculationMode, duration: float, target: float, capital: float) -> Solution:
    if not math.isfinite(duration) or duration < 0:
        message = "Target is unachievable or the duration is invalid; duration set to 0."
        logger.warning("%s (target=%s, capital=%s, duration=%s)", message, target, capital, duration)
        return Solution(mode=mode, value=0.0, warnings=[unreachable(message)])
    return Solution(mode=mode, value=duration)


def solve_rate(
    capital: float,
    contribution: float,
    duration_years: float,
    target: float,
    frequency: CompoundingFrequency,
) -> Solution:
    """
    Bisection over the annual rate (percent) in [0, 500].

    Each step evaluates the closed-form discrete future value at the midpoint
    and keeps the half of the bracket that still contains the target. The
    search stops on a future value within FV_TOLERANCE, on a bracket that can
    no longer be halved in floating point, or after MAX_BISECTION_ITERATIONS.
    Only then is the midpoint held to RELAXED_FV_TOLERANCE.
    """
    mode = CalculationMode.INTEREST_RATE
    if is_continuous(frequency):
        return _solve_rate_continuous(capital, contribution, duration_years, target)

    periods = discrete_periods(frequency)
    n = total_periods(duration_years, frequency)
    contributed = capital + contribution * n

    if target < contributed - FV_TOLERANCE:
        message = (
            "Target is below total contributions; no non-negative rate reaches it. Rate set to 0."
        )
        logger.warning("%s (target=%s, contributed=%s)", message, target, contributed)
        return Solution(mode=mode, value=0.0, warnings=[unreachable(message)])
    if abs(target - contributed) < FV_TOLERANCE:
        return Solution(mode=mode, value=0.0)
    if n == 0:
        raise DegenerateSolve("interest rate cannot be solved over zero periods")

    def fv_at(rate_percent: float) -> float:
        return future_value_closed_form(capital, contribution, rate_percent / 100 / periods, n)

    low, high = MIN_RATE_PERCENT, MAX_RATE_PERCENT
    mid = (low + high) / 2
    converged = False
    iterations = 0
    while iterations < MAX_BISECTION_ITERATIONS:
        mid = (low + high) / 2
        # bracket already at float resolution
        if not low < mid < high:
            break
        iterations += 1
        fv = fv_at(mid)
        if abs(fv - target) < FV_TOLERANCE:
            converged = True
            break
        if fv < target:
            low = mid
        else:
            high = mid

    if not converged:
        mid = (low + high) / 2
        fv = fv_at(mid)
        if not math.isfinite(fv) or abs(fv - target) >= RELAXED_FV_TOLERANCE:
            raise NumericDivergence(
                f"interest rate search did not converge after {iterations} iterations",
                iterations,
            )

    logger.debug("rate search finished at %s%% after %d iterations", mid, iterations)
    return _checked_rate(Solution(mode=mode, value=mid, iterations=iterations))


def _solve_rate_continuous(
    capital: float,
    contribution: float,
    duration_years: float,
    target: float,
) -> Solution:
    mode = CalculationMode.INTEREST_RATE
    if capital <= 0 or duration_years <= 0 or target <= 0:
        raise DegenerateSolve("rate undefined: continuous growth needs positive capital, duration and target")
    warnings = _continuous_contribution_warnings(contribution)
    if target < capital - FV_TOLERANCE:
        message = "Target is below the initial investment; no non-negative rate reaches it. Rate set to 0."
        logger.warning("%s (target=%s, capital=%s)", message, target, capital)
        return Solution(mode=mode, value=0.0, warnings=warnings + [unreachable(message)])
    rate_percent = max(math.log(target / capital) / duration_years * 100, 0.0)
    return _checked_rate(Solution(mode=mode, value=rate_percent, warnings=warnings))


def _checked_rate(solution: Solution) -> Solution:
    rate = solution.value
    if rate is None or not math.isfinite(rate) or not MIN_RATE_PERCENT <= rate <= MAX_RATE_PERCENT:
        raise DegenerateSolve(f"resolved interest rate {rate} is outside [0, 500]%")
    return solution


def _continuous_contribution_warnings(contribution: float) -> List[CalculationWarning]:
    if contribution <= 0:
        return []
    message = "Continuous compounding does not model periodic contributions; they were ignored while solving."
    logger.warning("%s (contribution=%s)", message, contribution)
    return [CalculationWarning(code=WarningCode.CONTINUOUS_CONTRIBUTIONS_IGNORED, message=message)]


def round_solved(value: Optional[float]) -> Optional[float]:
    return None if value is None else round(value, 2)
