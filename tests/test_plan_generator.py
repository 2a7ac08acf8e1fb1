"""Tests for AI training plan generation with a mocked OpenAI client."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from models import PlanRequest
from utils.pace_zones import compute_training_paces
from utils.plan_generator import (
    PlanGenerationError,
    build_plan_prompt,
    generate_training_plan,
)


@pytest.fixture
def plan_request() -> PlanRequest:
    return PlanRequest(race_type="Half marathon", goal_time="1:45:00", race_date="2026-04-25", runs_per_week=4)


def _client_returning(content: str | None) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )
    return client


def test_prompt_contains_goal_and_activities(plan_request: PlanRequest, sample_activities: list[dict]) -> None:
    prompt = build_plan_prompt(plan_request, sample_activities)

    assert "Race: Half marathon" in prompt
    assert "Goal time: 1:45:00" in prompt
    assert "Race date: 2026-04-25" in prompt
    assert "Runs per week: 4" in prompt
    assert "Tempo Tuesday" in prompt
    assert '"weeklyGoal": number' in prompt
    assert "pace zones" not in prompt


def test_prompt_includes_pace_zones(plan_request: PlanRequest) -> None:
    paces = compute_training_paces("10k", "40:00")
    prompt = build_plan_prompt(plan_request, [], paces)

    assert "Threshold pace: 4:00/km" in prompt
    assert "easy 4:36/km-5:12/km" in prompt


def test_generate_training_plan(plan_request: PlanRequest, sample_activities: list[dict]) -> None:
    reply = {"weeklyGoal": 35, "plan": "Week 1: three easy runs", "message": "You've got this"}
    client = _client_returning(json.dumps(reply))

    plan = generate_training_plan(plan_request, sample_activities, client=client, model="gpt-test")

    assert plan.weekly_goal == 35.0
    assert plan.plan == "Week 1: three easy runs"
    assert plan.message == "You've got this"

    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-test"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][-1]["role"] == "user"


def test_missing_fields_become_none(plan_request: PlanRequest) -> None:
    plan = generate_training_plan(plan_request, [], client=_client_returning('{"plan": "Run easy"}'))

    assert plan.plan == "Run easy"
    assert plan.weekly_goal is None
    assert plan.message is None


def test_empty_reply_is_empty_plan(plan_request: PlanRequest) -> None:
    plan = generate_training_plan(plan_request, [], client=_client_returning(None))
    assert plan.plan is None


def test_invalid_json_reply(plan_request: PlanRequest) -> None:
    with pytest.raises(PlanGenerationError):
        generate_training_plan(plan_request, [], client=_client_returning("Sure! Here is your plan"))


def test_non_object_reply(plan_request: PlanRequest) -> None:
    with pytest.raises(PlanGenerationError):
        generate_training_plan(plan_request, [], client=_client_returning("[1, 2]"))


def test_missing_api_key(plan_request: PlanRequest, monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(PlanGenerationError, match="OPENAI_API_KEY"):
        generate_training_plan(plan_request, [])
