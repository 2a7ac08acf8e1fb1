"""
AI training plan generation.
Builds a coaching prompt from the runner's data and asks an OpenAI chat model for a plan.
"""

import os
import json
from typing import Any, Dict, List, Optional
from loguru import logger
from openai import OpenAI
from models import PaceResult, PlanRequest, TrainingPlan
import config

SYSTEM_PROMPT = "You are a running coach. You reply with a single JSON object and nothing else."

# Fields kept from each Strava activity; the rest is noise for the model
ACTIVITY_FIELDS = ("name", "start_date", "distance", "moving_time", "average_speed", "average_heartrate", "total_elevation_gain")


class PlanGenerationError(RuntimeError):
    pass


def _summarize_activities(activities: List[Dict[str, Any]], limit: int = config.MAX_PROMPT_ACTIVITIES) -> List[Dict[str, Any]]:
    return [
        {k: a[k] for k in ACTIVITY_FIELDS if a.get(k) is not None}
        for a in activities[:limit]
    ]


def build_plan_prompt(request: PlanRequest, activities: List[Dict[str, Any]], paces: Optional[PaceResult] = None) -> str:
    """
    Compose the user prompt for plan generation.

    Args:
        request: Race goal and availability
        activities: Recent Strava activities (newest first)
        paces: Optional training zones to anchor workout paces

    Returns:
        Prompt text asking for {"weeklyGoal": number, "plan": string, "message": string}
    """
    lines = [
        "Based on the following athlete data and goals, generate a realistic weekly mileage goal and a brief training plan.",
        f"Athlete's recent activities: {json.dumps(_summarize_activities(activities))}",
        f"Race: {request.race_type}",
        f"Goal time: {request.goal_time}",
        f"Race date: {request.race_date}",
        f"Runs per week: {request.runs_per_week}",
    ]
    if paces is not None:
        zones = ", ".join(f"{z.name} {z.min}-{z.max}" for z in paces.zones)
        lines.append(f"Training pace zones (per km): {zones}")
        lines.append(f"Threshold pace: {paces.threshold.per_km}")
    if request.notes:
        lines.append(f"Notes from the athlete: {request.notes}")
    lines.append('Return a JSON object: { "weeklyGoal": number, "plan": string, "message": string }')
    return "\n".join(lines)


def _parse_plan(text: str) -> TrainingPlan:
    try:
        data = json.loads(text or "{}")
    except json.JSONDecodeError as e:
        raise PlanGenerationError(f"Model did not return valid JSON: {e}")
    if not isinstance(data, dict):
        raise PlanGenerationError("Model did not return a JSON object")

    weekly_goal = data.get("weeklyGoal")
    if weekly_goal is not None:
        try:
            weekly_goal = float(weekly_goal)
        except (TypeError, ValueError):
            weekly_goal = None
    return TrainingPlan(weekly_goal=weekly_goal, plan=data.get("plan"), message=data.get("message"), raw=data)


def generate_training_plan(
        request: PlanRequest,
        activities: List[Dict[str, Any]],
        paces: Optional[PaceResult] = None,
        client: Optional[OpenAI] = None,
        model: str = config.OPENAI_MODEL,
) -> TrainingPlan:
    """
    Ask the language model for a training plan.

    Args:
        request: Race goal and availability
        activities: Recent Strava activities
        paces: Optional pace zones included in the prompt
        client: OpenAI client (built from OPENAI_API_KEY when omitted)
        model: Chat model name

    Returns:
        TrainingPlan; fields missing from the reply are None

    Raises:
        PlanGenerationError: no API key, or the reply is not a JSON object
    """
    if client is None:
        api_key = os.getenv(config.OPENAI_API_KEY_ENV)
        if not api_key:
            raise PlanGenerationError(f"{config.OPENAI_API_KEY_ENV} is not set.")
        client = OpenAI(api_key=api_key)

    logger.info(f"[PLAN] Requesting plan model={model} race={request.race_type} activities={len(activities)}")
    resp = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_plan_prompt(request, activities, paces)},
        ],
        response_format={"type": "json_object"},
        temperature=config.OPENAI_TEMPERATURE,
    )

    plan = _parse_plan(resp.choices[0].message.content)
    logger.info(f"[PLAN] Received plan weekly_goal={plan.weekly_goal}")
    return plan
