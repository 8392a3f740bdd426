"""App-wide configuration, overridable from the environment."""

import os
from typing import List

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Config:
    CORS_ORIGINS = _split_origins(os.environ.get("NEONVEST_CORS_ORIGINS", DEFAULT_CORS_ORIGINS))
    LOG_LEVEL = os.environ.get("NEONVEST_LOG_LEVEL", "INFO").upper()
    # callable(prompt) -> list of tips; None disables the tips endpoint
    TIPS_PROVIDER = None
