"""Seam for the AI investment-tips collaborator.

The calculator only hands plain numbers across this boundary. A provider is
any callable that takes the rendered prompt and returns a sequence of tip
strings; how it reaches a model is its own business. Failures never propagate
to the caller: they come back as a user-facing ``error`` string.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from neonvest.schemas.calculation import SolvedResult

logger = logging.getLogger(__name__)

TipsProvider = Callable[[str], Sequence[str]]

NOT_CONFIGURED = "AI tips are not configured."
NO_TIPS = "The AI model did not provide any tips at this time."
OVERLOADED = "The AI model is currently overloaded. Please try again later."
BAD_API_KEY = "AI configuration error. Please check API key."
GENERIC_FAILURE = "Failed to generate tips."

PROMPT_TEMPLATE = """You are an expert financial advisor. Provide personalized investment tips based on the following investment calculation results. The response should be an array of tips.

Initial Investment: {initialInvestment}
Monthly Contribution: {monthlyContribution}
Interest Rate: {interestRate}%
Investment Duration: {investmentDuration} years
Future Value: {futureValue}
Total Interest Earned: {totalInterest}
Total Contributions: {totalContributions}

Consider common investment strategies and market conditions when generating the tips. Be specific and actionable.
"""


class TipsInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    initialInvestment: float = Field(..., description="The initial amount invested.")
    monthlyContribution: float = Field(..., description="The periodic contribution amount.")
    interestRate: float = Field(..., description="The annual interest rate (as a percentage).")
    investmentDuration: float = Field(..., description="The investment duration in years.")
    futureValue: float = Field(..., description="The calculated future value of the investment.")
    totalInterest: float = Field(..., description="The total interest earned over the duration.")
    totalContributions: float = Field(..., description="The total amount contributed over the duration.")


class TipsOutput(BaseModel):
    tips: List[str] = []
    error: Optional[str] = None


def tips_input_from_result(result: SolvedResult) -> TipsInput:
    return TipsInput(
        initialInvestment=result.initialInvestment,
        monthlyContribution=result.contributionAmount,
        interestRate=result.interestRate,
        investmentDuration=result.investmentDuration,
        futureValue=result.futureValue,
        totalInterest=result.totalInterest,
        totalContributions=result.totalContributions,
    )


def render_tips_prompt(tips_input: TipsInput) -> str:
    return PROMPT_TEMPLATE.format(**tips_input.model_dump())


def generate_tips(tips_input: TipsInput, provider: Optional[TipsProvider]) -> TipsOutput:
    if provider is None:
        return TipsOutput(error=NOT_CONFIGURED)

    try:
        tips = [tip for tip in provider(render_tips_prompt(tips_input)) if tip]
    except Exception as exc:  # provider failures are reported, not raised
        logger.error("tips provider failed: %s", exc)
        return TipsOutput(error=_describe_failure(exc))

    if not tips:
        logger.warning("tips provider returned no tips")
        return TipsOutput(error=NO_TIPS)
    return TipsOutput(tips=tips)


def _describe_failure(exc: Exception) -> str:
    message = str(exc).lower()
    if "503" in message or "service unavailable" in message or "model is overloaded" in message:
        return OVERLOADED
    if "api key not valid" in message:
        return BAD_API_KEY
    return GENERIC_FAILURE
