"""Calculation pipeline: solve the unknown, simulate, derive the chart."""

from __future__ import annotations

import logging
from typing import List

from neonvest.domain.chart import derive_chart_series
from neonvest.domain.errors import CalculationWarning
from neonvest.domain.simulation import simulate
from neonvest.domain.solver import round_solved, solve
from neonvest.models import (
    CalculationMode,
    CalculationRequest,
    InvestmentForm,
    to_calculation_request,
)
from neonvest.schemas.calculation import CalculationPayload, SolvedResult

logger = logging.getLogger(__name__)

_SOLVED_FIELD = {
    CalculationMode.CONTRIBUTION_AMOUNT: "contributionAmount",
    CalculationMode.INTEREST_RATE: "interestRate",
    CalculationMode.INVESTMENT_DURATION: "investmentDuration",
}

_CALCULATED_FIELD = {
    CalculationMode.CONTRIBUTION_AMOUNT: "calculatedContributionAmount",
    CalculationMode.INTEREST_RATE: "calculatedInterestRate",
    CalculationMode.INVESTMENT_DURATION: "calculatedInvestmentDuration",
}


def calculate(request: CalculationRequest) -> CalculationPayload:
    """Resolve the request's unknown and run the full projection with it."""
    mode = request.calculationMode
    solution = solve(request)

    inputs = request.model_dump(exclude={"calculationMode", "compoundingFrequency", "targetFutureValue"})
    solved_field = _SOLVED_FIELD.get(mode)
    if solved_field is not None:
        inputs[solved_field] = round_solved(solution.value)

    projection = simulate(
        capital=inputs["initialInvestment"],
        contribution=inputs["contributionAmount"],
        rate_percent=inputs["interestRate"],
        duration_years=inputs["investmentDuration"],
        frequency=request.compoundingFrequency,
    )

    extras = {}
    if solved_field is not None:
        extras[_CALCULATED_FIELD[mode]] = inputs[solved_field]
        extras["originalTargetFutureValue"] = request.targetFutureValue

    result = SolvedResult(
        calculationMode=mode,
        compoundingFrequency=request.compoundingFrequency,
        futureValue=projection.futureValue,
        totalInterest=projection.totalInterest,
        totalContributions=projection.totalContributions,
        **inputs,
        **extras,
    )
    logger.info(
        "calculated %s (%s): future value %.2f over %s years",
        mode.value,
        request.compoundingFrequency.value,
        result.futureValue,
        result.investmentDuration,
    )

    return CalculationPayload(
        result=result,
        yearly=projection.yearly,
        chart=derive_chart_series(result.initialInvestment, projection.yearly),
        warnings=_unique_codes(solution.warnings + projection.warnings),
    )


def calculate_form(form: InvestmentForm) -> CalculationPayload:
    return calculate(to_calculation_request(form))


def _unique_codes(warnings: List[CalculationWarning]) -> List[CalculationWarning]:
    seen = set()
    unique: List[CalculationWarning] = []
    for warning in warnings:
        if warning.code in seen:
            continue
        seen.add(warning.code)
        unique.append(warning)
    return unique
