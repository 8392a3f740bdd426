from __future__ import annotations

import pytest

from neonvest.app import create_app
from neonvest.core.calculator import calculate
from neonvest.core.tips import (
    BAD_API_KEY,
    GENERIC_FAILURE,
    NO_TIPS,
    NOT_CONFIGURED,
    OVERLOADED,
    TipsInput,
    generate_tips,
    render_tips_prompt,
    tips_input_from_result,
)
from neonvest.models import FutureValueRequest


def sample_input() -> TipsInput:
    payload = calculate(
        FutureValueRequest(
            initialInvestment=1000, contributionAmount=100, interestRate=0, investmentDuration=10
        )
    )
    return tips_input_from_result(payload.result)


def test_tips_input_carries_resolved_numbers():
    tips_input = sample_input()

    assert tips_input.initialInvestment == 1000
    assert tips_input.monthlyContribution == 100
    assert tips_input.futureValue == 13000
    assert tips_input.totalContributions == 13000
    assert tips_input.totalInterest == 0


def test_prompt_lists_every_figure():
    prompt = render_tips_prompt(sample_input())

    assert "Initial Investment: 1000" in prompt
    assert "Interest Rate: 0" in prompt
    assert "Investment Duration: 10" in prompt
    assert "Future Value: 13000" in prompt


def test_provider_tips_are_returned():
    prompts = []

    def provider(prompt):
        prompts.append(prompt)
        return ["Raise your contribution.", "", "Start earlier."]

    output = generate_tips(sample_input(), provider)

    assert output.tips == ["Raise your contribution.", "Start earlier."]
    assert output.error is None
    assert len(prompts) == 1


def test_missing_provider_reports_not_configured():
    output = generate_tips(sample_input(), None)

    assert output.tips == []
    assert output.error == NOT_CONFIGURED


def test_empty_answer_reports_no_tips():
    output = generate_tips(sample_input(), lambda prompt: [])

    assert output.error == NO_TIPS


@pytest.mark.parametrize(
    "message, expected",
    [
        ("503 Service Unavailable", OVERLOADED),
        ("The model is overloaded", OVERLOADED),
        ("API key not valid. Please pass a valid API key.", BAD_API_KEY),
        ("connection reset", GENERIC_FAILURE),
    ],
)
def test_provider_failures_become_error_strings(message, expected):
    def provider(prompt):
        raise RuntimeError(message)

    output = generate_tips(sample_input(), provider)

    assert output.tips == []
    assert output.error == expected


def test_tips_endpoint_uses_configured_provider():
    app = create_app({"TESTING": True, "TIPS_PROVIDER": lambda prompt: ["Diversify."]})

    with app.test_client() as client:
        resp = client.post("/api/tips", json=sample_input().model_dump())

    assert resp.status_code == 200
    assert resp.get_json() == {"tips": ["Diversify."], "error": None}


def test_tips_endpoint_without_provider(client):
    resp = client.post("/api/tips", json=sample_input().model_dump())

    assert resp.status_code == 200
    assert resp.get_json()["error"] == NOT_CONFIGURED
