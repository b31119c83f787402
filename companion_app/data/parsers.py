"""
Parsing and validation of generation service payloads.

The generation service returns free text that should contain JSON. This module
strips markdown code fences, decodes the JSON and validates it into Plan and
Pathway models. Every problem is raised as a MalformedDataError so the caller
can treat a bad payload like any other service failure.
"""

import json
import re
from typing import Any, Optional

from ..errors import DuplicateIdentifierError, MalformedDataError
from ..logging.config import get_logger
from .models import Day, Pathway, Plan, Step, StepType

logger = get_logger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
_STEP_TYPES = {step_type.value for step_type in StepType}


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model sometimes wraps JSON in."""
    return _CODE_FENCE.sub("", text).strip()


def decode_json_payload(text: Optional[str], expected_format: str) -> Any:
    """Decode a service text response into JSON data."""
    if not text or not text.strip():
        raise MalformedDataError(
            "Empty response from generation service",
            raw_data=text,
            expected_format=expected_format
        )

    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError) as e:
        raise MalformedDataError(
            f"Response is not valid JSON: {e}",
            raw_data=cleaned[:500],
            expected_format=expected_format
        ) from e


def parse_plan_payload(payload: Any) -> Plan:
    """
    Validate a decoded plan payload into a Plan.

    Missing day ids default to ``day-N`` and missing step ids to ``dN-sM``.
    Unknown step types and duplicate identifiers are rejected.

    Args:
        payload: Decoded JSON object with ``topic`` and ``days``

    Returns:
        Validated Plan
    """
    if not isinstance(payload, dict):
        raise MalformedDataError(
            f"Plan must be a JSON object, got {type(payload).__name__}",
            expected_format="plan"
        )

    topic = payload.get("topic")
    if not isinstance(topic, str) or not topic.strip():
        raise MalformedDataError("Plan is missing a topic", expected_format="plan")

    raw_days = payload.get("days")
    if not isinstance(raw_days, list) or not raw_days:
        raise MalformedDataError("Plan must contain a non-empty days list", expected_format="plan")

    days = []
    for day_index, raw_day in enumerate(raw_days, start=1):
        if not isinstance(raw_day, dict):
            raise MalformedDataError(f"days[{day_index - 1}] must be an object", expected_format="plan")
        days.append(_parse_day(raw_day, day_index))

    plan = Plan(topic=topic.strip(), days=tuple(days))
    validate_plan(plan)
    return plan


def _parse_day(raw_day: dict[str, Any], day_index: int) -> Day:
    raw_steps = raw_day.get("steps")
    if raw_steps is None:
        raw_steps = []
    if not isinstance(raw_steps, list):
        raise MalformedDataError(f"Day {day_index} steps must be a list", expected_format="plan")

    steps = []
    for step_index, raw_step in enumerate(raw_steps, start=1):
        if not isinstance(raw_step, dict):
            raise MalformedDataError(
                f"Day {day_index} step {step_index} must be an object",
                expected_format="plan"
            )
        steps.append(_parse_step(raw_step, day_index, step_index))

    return Day(
        id=str(raw_day.get("id") or f"day-{day_index}"),
        title=str(raw_day.get("title") or f"Day {day_index}"),
        steps=tuple(steps),
    )


def _parse_step(raw_step: dict[str, Any], day_index: int, step_index: int) -> Step:
    title = raw_step.get("title")
    if not isinstance(title, str) or not title.strip():
        raise MalformedDataError(
            f"Day {day_index} step {step_index} is missing a title",
            expected_format="plan"
        )

    step_type = str(raw_step.get("type") or "").strip().lower()
    if step_type not in _STEP_TYPES:
        raise MalformedDataError(
            f"Unknown step type {raw_step.get('type')!r}",
            raw_data=json.dumps(raw_step)[:500],
            expected_format="plan"
        )

    url = raw_step.get("url")
    objectives = raw_step.get("objectives")
    if isinstance(objectives, list):
        objectives = tuple(str(item) for item in objectives)

    return Step(
        id=str(raw_step.get("id") or f"d{day_index}-s{step_index}"),
        title=title.strip(),
        type=StepType(step_type),
        duration=str(raw_step.get("duration") or ""),
        url=url if isinstance(url, str) else None,
        completed=bool(raw_step.get("completed", False)),
        description=raw_step.get("description"),
        objectives=objectives,
        resources=raw_step.get("resources"),
        resource_title=raw_step.get("resourceTitle"),
    )


def validate_plan(plan: Plan) -> None:
    """Enforce day id uniqueness and plan-wide step id uniqueness."""
    day_ids: set[str] = set()
    step_ids: set[str] = set()

    for day in plan.days:
        if day.id in day_ids:
            raise DuplicateIdentifierError(
                f"Duplicate day id {day.id!r}",
                identifier=day.id,
                scope="plan",
                expected_format="plan"
            )
        day_ids.add(day.id)

        for step in day.steps:
            if step.id in step_ids:
                raise DuplicateIdentifierError(
                    f"Duplicate step id {step.id!r}",
                    identifier=step.id,
                    scope=day.id,
                    expected_format="plan"
                )
            step_ids.add(step.id)


def parse_plan_response(text: Optional[str]) -> Plan:
    """Decode and validate a plan from raw service text."""
    plan = parse_plan_payload(decode_json_payload(text, "plan"))
    logger.debug(
        "Parsed plan response",
        topic=plan.topic,
        days=len(plan.days),
        steps=sum(len(day.steps) for day in plan.days)
    )
    return plan


def parse_pathways_payload(payload: Any) -> list[Pathway]:
    """Validate a decoded pathways payload into Pathway models."""
    if not isinstance(payload, list) or not payload:
        raise MalformedDataError("Pathways must be a non-empty JSON array", expected_format="pathways")

    pathways = []
    seen: set[str] = set()
    for index, raw in enumerate(payload, start=1):
        if not isinstance(raw, dict):
            raise MalformedDataError(f"Pathway {index} must be an object", expected_format="pathways")

        title = raw.get("title")
        if not isinstance(title, str) or not title.strip():
            raise MalformedDataError(f"Pathway {index} is missing a title", expected_format="pathways")

        pathway_id = str(raw.get("id") or f"path-{index}")
        if pathway_id in seen:
            raise DuplicateIdentifierError(
                f"Duplicate pathway id {pathway_id!r}",
                identifier=pathway_id,
                scope="pathways",
                expected_format="pathways"
            )
        seen.add(pathway_id)

        pathways.append(Pathway(
            id=pathway_id,
            title=title.strip(),
            learning_goal=str(raw.get("learning_goal") or "").strip(),
        ))

    return pathways


def parse_pathways_response(text: Optional[str]) -> list[Pathway]:
    """Decode and validate pathways from raw service text."""
    return parse_pathways_payload(decode_json_payload(text, "pathways"))
