from __future__ import annotations

import pytest

from neonvest.domain.periods import (
    CONTINUOUS,
    CompoundingFrequency,
    discrete_periods,
    is_continuous,
    periods_per_year,
    total_periods,
)


@pytest.mark.parametrize(
    "frequency, expected",
    [
        ("annually", 1),
        ("semiannually", 2),
        ("quarterly", 4),
        ("monthly", 12),
        ("semimonthly", 24),
        ("biweekly", 26),
        ("weekly", 52),
        ("daily", 365),
    ],
)
def test_discrete_frequencies_map_to_period_counts(frequency, expected):
    assert periods_per_year(CompoundingFrequency(frequency)) == expected
    assert not is_continuous(CompoundingFrequency(frequency))


def test_continuous_uses_sentinel_not_an_integer():
    periods = periods_per_year(CompoundingFrequency.CONTINUOUSLY)

    assert periods is CONTINUOUS
    assert not isinstance(periods, int)
    assert is_continuous(CompoundingFrequency.CONTINUOUSLY)
    with pytest.raises(ValueError):
        discrete_periods(CompoundingFrequency.CONTINUOUSLY)


def test_every_frequency_has_a_mapping():
    for frequency in CompoundingFrequency:
        assert periods_per_year(frequency) is not None


def test_total_periods_rounds_fractional_years():
    assert total_periods(10, CompoundingFrequency.MONTHLY) == 120
    assert total_periods(2.5, CompoundingFrequency.QUARTERLY) == 10
    assert total_periods(0, CompoundingFrequency.DAILY) == 0
