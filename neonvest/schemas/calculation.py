"""Data contracts for the projection endpoint."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from neonvest.domain.chart import ChartPoint
from neonvest.domain.errors import CalculationWarning
from neonvest.domain.periods import CompoundingFrequency
from neonvest.domain.simulation import YearlyRecord
from neonvest.models import CalculationMode


class SolvedResult(BaseModel):
    """Aggregates of one projection plus whichever input was solved for."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    calculationMode: CalculationMode
    compoundingFrequency: CompoundingFrequency

    initialInvestment: float = Field(..., ge=0)
    contributionAmount: float = Field(..., ge=0)
    interestRate: float = Field(..., ge=0, description="Annual rate in percent.")
    investmentDuration: float = Field(..., ge=0, description="Duration in years.")

    futureValue: float
    totalInterest: float
    totalContributions: float = Field(..., description="Includes the initial investment.")

    calculatedContributionAmount: Optional[float] = None
    calculatedInterestRate: Optional[float] = None
    calculatedInvestmentDuration: Optional[float] = None
    originalTargetFutureValue: Optional[float] = None


class CalculationPayload(BaseModel):
    """Everything the calculator page renders for one submission."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    result: SolvedResult
    yearly: List[YearlyRecord]
    chart: List[ChartPoint]
    warnings: List[CalculationWarning] = []


class ErrorResponse(BaseModel):
    kind: str
    error: List[str]
