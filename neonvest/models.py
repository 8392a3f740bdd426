from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from neonvest.domain.errors import MissingInput
from neonvest.domain.periods import CompoundingFrequency

MAX_INITIAL_INVESTMENT = 1_000_000_000
MAX_CONTRIBUTION = 1_000_000
MAX_INTEREST_RATE = 100
MAX_DURATION_YEARS = 100
MAX_TARGET_FUTURE_VALUE = 100_000_000_000


class CalculationMode(str, Enum):
    FUTURE_VALUE = "futureValue"
    CONTRIBUTION_AMOUNT = "contributionAmount"
    INTEREST_RATE = "interestRate"
    INVESTMENT_DURATION = "investmentDuration"


class InvestmentForm(BaseModel):
    """Flat form payload as posted by the browser; any field may be blank."""

    model_config = ConfigDict(extra="forbid")

    initialInvestment: Optional[float] = Field(default=None, ge=0, le=MAX_INITIAL_INVESTMENT)
    contributionAmount: Optional[float] = Field(default=None, ge=0, le=MAX_CONTRIBUTION)
    interestRate: Optional[float] = Field(default=None, ge=0, le=MAX_INTEREST_RATE)
    investmentDuration: Optional[float] = Field(default=None, ge=0, le=MAX_DURATION_YEARS)
    targetFutureValue: Optional[float] = Field(default=None, ge=0, le=MAX_TARGET_FUTURE_VALUE)
    calculationMode: CalculationMode = CalculationMode.FUTURE_VALUE
    compoundingFrequency: CompoundingFrequency = CompoundingFrequency.MONTHLY


class _CalculationBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    initialInvestment: float = Field(ge=0)
    compoundingFrequency: CompoundingFrequency = CompoundingFrequency.MONTHLY


class FutureValueRequest(_CalculationBase):
    calculationMode: Literal[CalculationMode.FUTURE_VALUE] = CalculationMode.FUTURE_VALUE
    contributionAmount: float = Field(ge=0)
    interestRate: float = Field(ge=0)
    investmentDuration: float = Field(ge=0)


class ContributionAmountRequest(_CalculationBase):
    calculationMode: Literal[CalculationMode.CONTRIBUTION_AMOUNT] = CalculationMode.CONTRIBUTION_AMOUNT
    interestRate: float = Field(ge=0)
    investmentDuration: float = Field(ge=0)
    targetFutureValue: float = Field(ge=0)


class InterestRateRequest(_CalculationBase):
    calculationMode: Literal[CalculationMode.INTEREST_RATE] = CalculationMode.INTEREST_RATE
    contributionAmount: float = Field(ge=0)
    investmentDuration: float = Field(ge=0)
    targetFutureValue: float = Field(ge=0)


class InvestmentDurationRequest(_CalculationBase):
    calculationMode: Literal[CalculationMode.INVESTMENT_DURATION] = CalculationMode.INVESTMENT_DURATION
    contributionAmount: float = Field(ge=0)
    interestRate: float = Field(ge=0)
    targetFutureValue: float = Field(ge=0)


CalculationRequest = Annotated[
    Union[
        FutureValueRequest,
        ContributionAmountRequest,
        InterestRateRequest,
        InvestmentDurationRequest,
    ],
    Field(discriminator="calculationMode"),
]

calculation_request_adapter: TypeAdapter = TypeAdapter(CalculationRequest)

_REQUIRED_FIELDS: Dict[CalculationMode, Tuple[str, ...]] = {
    CalculationMode.FUTURE_VALUE: (
        "initialInvestment",
        "contributionAmount",
        "interestRate",
        "investmentDuration",
    ),
    CalculationMode.CONTRIBUTION_AMOUNT: (
        "initialInvestment",
        "interestRate",
        "investmentDuration",
        "targetFutureValue",
    ),
    CalculationMode.INTEREST_RATE: (
        "initialInvestment",
        "contributionAmount",
        "investmentDuration",
        "targetFutureValue",
    ),
    CalculationMode.INVESTMENT_DURATION: (
        "initialInvestment",
        "contributionAmount",
        "interestRate",
        "targetFutureValue",
    ),
}


def required_fields(mode: CalculationMode) -> Tuple[str, ...]:
    return _REQUIRED_FIELDS[CalculationMode(mode)]


def missing_fields(form: InvestmentForm) -> List[str]:
    return [name for name in required_fields(form.calculationMode) if getattr(form, name) is None]


def to_calculation_request(form: InvestmentForm) -> CalculationRequest:
    """Narrow the flat form into the request variant for its calculation mode."""
    missing = missing_fields(form)
    if missing:
        raise MissingInput(form.calculationMode.value, missing)

    payload = {
        name: getattr(form, name)
        for name in required_fields(form.calculationMode)
    }
    payload["calculationMode"] = form.calculationMode
    payload["compoundingFrequency"] = form.compoundingFrequency
    return calculation_request_adapter.validate_python(payload)
