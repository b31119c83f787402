"""
Step completion tracking for learning plans.

Everything here is pure: toggling returns a new Plan and the progress figures
are recomputed on demand. Writing a toggled plan back to storage is the
caller's job.
"""

from dataclasses import dataclass, replace
from typing import Literal, Optional

from ..data.models import Day, Plan, PlanRecord, Step
from ..logging.config import get_logger
from ..utils.time import format_relative_time

logger = get_logger(__name__)


@dataclass(frozen=True)
class Progress:
    """Completed/total step counts."""
    completed: int
    total: int

    @property
    def ratio(self) -> float:
        return self.completed / self.total if self.total else 0.0

    @property
    def percent(self) -> float:
        return self.ratio * 100.0

    @property
    def percent_rounded(self) -> int:
        return round(self.percent)

    @property
    def is_complete(self) -> bool:
        return self.total > 0 and self.completed == self.total


@dataclass(frozen=True)
class FlatStep:
    """A step tagged with its parent day, for cross-day navigation."""
    day_id: str
    day_title: str
    step: Step


@dataclass(frozen=True)
class PlanSummary:
    """Figures shown on a plan card in the plan list."""
    id: str
    topic: str
    time_commitment: str
    level: str
    progress: Progress
    updated_at: int
    updated_label: str              # "5m ago", "Yesterday", ...


def toggle_step(plan: Plan, day_id: str, step_id: str) -> Plan:
    """
    Invert one step's completion flag.

    Unknown day or step ids return ``plan`` itself; a stale reference is not
    an error. Otherwise only the target Step and its Day are new objects,
    every other Day and Step is shared with the input.

    Args:
        plan: Plan to update
        day_id: Id of the day holding the step
        step_id: Id of the step to toggle

    Returns:
        The updated Plan, or the input plan when nothing matched
    """
    day_index = next((i for i, day in enumerate(plan.days) if day.id == day_id), None)
    if day_index is None:
        logger.debug("Toggle for unknown day ignored", day_id=day_id, step_id=step_id)
        return plan

    day = plan.days[day_index]
    step_index = next((i for i, step in enumerate(day.steps) if step.id == step_id), None)
    if step_index is None:
        logger.debug("Toggle for unknown step ignored", day_id=day_id, step_id=step_id)
        return plan

    step = day.steps[step_index]
    steps = day.steps[:step_index] + (step.with_completed(not step.completed),) + day.steps[step_index + 1:]
    days = plan.days[:day_index] + (replace(day, steps=steps),) + plan.days[day_index + 1:]
    return replace(plan, days=days)


def day_progress(day: Day) -> Progress:
    return Progress(
        completed=sum(1 for step in day.steps if step.completed),
        total=len(day.steps),
    )


def plan_progress(plan: Plan) -> Progress:
    completed = 0
    total = 0
    for day in plan.days:
        progress = day_progress(day)
        completed += progress.completed
        total += progress.total
    return Progress(completed=completed, total=total)


def flatten_steps(plan: Plan) -> list[FlatStep]:
    """All steps across all days, in plan order."""
    return [
        FlatStep(day_id=day.id, day_title=day.title, step=step)
        for day in plan.days
        for step in day.steps
    ]


def first_incomplete_step(plan: Plan) -> Optional[FlatStep]:
    """First incomplete step, the last step when all are done, or None for an empty plan."""
    flat = flatten_steps(plan)
    if not flat:
        return None
    for item in flat:
        if not item.step.completed:
            return item
    return flat[-1]


def adjacent_step(
    plan: Plan,
    step_id: str,
    direction: Literal["next", "prev"]
) -> Optional[FlatStep]:
    """Step before or after ``step_id`` across day boundaries, None at either end."""
    if direction not in ("next", "prev"):
        raise ValueError(f"direction must be 'next' or 'prev', got {direction!r}")

    flat = flatten_steps(plan)
    index = next((i for i, item in enumerate(flat) if item.step.id == step_id), None)
    if index is None:
        return None

    target = index + 1 if direction == "next" else index - 1
    if 0 <= target < len(flat):
        return flat[target]
    return None


def plan_summary(record: PlanRecord, now: Optional[int] = None) -> PlanSummary:
    return PlanSummary(
        id=record.id,
        topic=record.plan.topic or record.user_profile.topic,
        time_commitment=record.user_profile.time_commitment.value,
        level=record.user_profile.level.value,
        progress=plan_progress(record.plan),
        updated_at=record.updated_at,
        updated_label=format_relative_time(record.updated_at, now),
    )
