"""Projection, tips and ping endpoints under /api."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from neonvest.core.calculator import calculate_form
from neonvest.core.health import get_health
from neonvest.core.tips import TipsInput, generate_tips
from neonvest.domain.errors import CalculationError, MissingInput
from neonvest.models import InvestmentForm
from neonvest.schemas.calculation import ErrorResponse
from neonvest.schemas.health import HealthResponse

api_bp = Blueprint("api", __name__)
logger = logging.getLogger(__name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Out-of-range or malformed form fields come back as 422 with pydantic's error list."""
    return jsonify({"detail": exc.errors()}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(CalculationError)
def _handle_calculation_error(exc: CalculationError):
    """Missing inputs are the caller's fault; the rest mean the target cannot be solved."""
    status = HTTPStatus.BAD_REQUEST if isinstance(exc, MissingInput) else HTTPStatus.UNPROCESSABLE_ENTITY
    logger.info("calculation rejected (%s): %s", exc.kind, exc)
    body = ErrorResponse(kind=exc.kind, error=exc.errors)
    return jsonify(body.model_dump()), status


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(**get_health())
    return jsonify(response.model_dump())


@api_bp.post("/calc/projection")
def projection() -> Any:
    """Solve the selected unknown and return the projection, schedule and chart."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    form = InvestmentForm.model_validate(raw_payload)
    payload = calculate_form(form)
    return jsonify(payload.model_dump(mode="json"))


@api_bp.post("/tips")
def tips() -> Any:
    """Ask the configured tips provider for advice on a finished projection."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    tips_input = TipsInput.model_validate(raw_payload)
    output = generate_tips(tips_input, current_app.config.get("TIPS_PROVIDER"))
    return jsonify(output.model_dump())
