"""Offline plan generation service returning canned plans."""

from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..data.models import Day, Pathway, Plan, Step, StepType, UserProfile
from ..errors import GenerationError
from .base import ChatMessage, PlanGenerationService


class MockPlanService(PlanGenerationService):
    """
    Deterministic service for offline use and tests.

    Operations named in ``fail_on`` raise GenerationError, which lets callers
    exercise their failure paths without a network.
    """

    name = "mock"

    def __init__(self, fail_on: Optional[Iterable[str]] = None):
        self.fail_on = set(fail_on or ())
        self.calls: list[str] = []

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise GenerationError(f"Simulated failure in {operation}", service=self.name, operation=operation)

    def generate_pathways(self, profile: UserProfile) -> list[Pathway]:
        self._record("generate_pathways")
        return [
            Pathway(id="path-1", title=f"{profile.topic} Fundamentals",
                    learning_goal=f"Understand the core ideas of {profile.topic}."),
            Pathway(id="path-2", title=f"Practical {profile.topic}",
                    learning_goal=f"Build small projects with {profile.topic}."),
            Pathway(id="path-3", title=f"{profile.topic} in Depth",
                    learning_goal=f"Study advanced {profile.topic} topics."),
        ]

    def generate_plan(self, profile: UserProfile, pathway_titles: Sequence[str]) -> Plan:
        self._record("generate_plan")
        return Plan(
            topic=profile.topic,
            days=(
                Day(id="day-1", title="Day 1: Foundations", steps=(
                    Step(id="d1-s1", title="Introduction Video", type=StepType.VIDEO, duration="15m", url="#"),
                    Step(id="d1-s2", title="Core Concepts Article", type=StepType.ARTICLE, duration="10m", url="#"),
                    Step(id="d1-s3", title="Quick Quiz", type=StepType.QUIZ, duration="5m"),
                )),
                Day(id="day-2", title="Day 2: Deep Dive", steps=(
                    Step(id="d2-s1", title="Advanced Tutorial", type=StepType.VIDEO, duration="20m", url="#"),
                    Step(id="d2-s2", title="Practice Exercise", type=StepType.EXERCISE, duration="30m"),
                )),
                Day(id="day-3", title="Day 3: Application", steps=(
                    Step(id="d3-s1", title="Build a mini-project", type=StepType.PROJECT, duration="1h"),
                )),
            ),
        )

    def revise_plan(self, plan: Plan, profile: UserProfile, feedback: str) -> Plan:
        self._record("revise_plan")
        # Append one extra step to the last day so revisions are observable
        if not plan.days:
            return plan
        last = plan.days[-1]
        extra = Step(
            id=f"{last.id}-rev{len(last.steps) + 1}",
            title=f"Revision: {feedback}"[:80],
            type=StepType.ARTICLE,
            duration="10m",
        )
        return replace(plan, days=plan.days[:-1] + (replace(last, steps=last.steps + (extra,)),))

    def chat(
        self,
        history: Sequence[ChatMessage],
        message: str,
        plan_context: Optional[Plan] = None
    ) -> str:
        self._record("chat")
        if plan_context is not None:
            return f"Let's look at that in the context of your {plan_context.topic} plan: {message}"
        return f"You asked: {message}"
