from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel, ConfigDict

from neonvest.domain.simulation import YearlyRecord


class ChartPoint(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    year: int
    totalValue: float
    amountInvested: float
    interestAccumulated: float


def derive_chart_series(initial_capital: float, yearly: Sequence[YearlyRecord]) -> List[ChartPoint]:
    """Cumulative invested vs. accumulated interest at the end of each year."""
    points: List[ChartPoint] = []
    invested = float(initial_capital)
    for record in yearly:
        invested += record.contributions
        points.append(
            ChartPoint(
                name=f"Year {record.year}",
                year=record.year,
                totalValue=record.endingBalance,
                amountInvested=invested,
                # floor absorbs float noise when nothing has accrued yet
                interestAccumulated=max(record.endingBalance - invested, 0.0),
            )
        )
    return points
