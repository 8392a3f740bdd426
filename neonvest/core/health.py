"""Health-check payload for the API."""

from neonvest.domain.periods import CompoundingFrequency
from neonvest.models import CalculationMode


def get_health() -> dict:
    """Report the service as up, with the modes and frequencies it accepts."""
    return {
        "status": "ok",
        "service": "neonvest",
        "modes": [mode.value for mode in CalculationMode],
        "frequencies": [frequency.value for frequency in CompoundingFrequency],
    }
