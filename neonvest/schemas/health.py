"""Pydantic schema for the health-check endpoint."""

from typing import List

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    service: str
    modes: List[str]
    frequencies: List[str]
