"""
Canonical data models for plans, profiles and notes.

This module defines immutable data structures for the learning plan hierarchy
(Plan -> Day -> Step), the profile a plan was generated from, and the durable
records kept by the persistence store. Each entity converts to and from the
persisted camelCase dict layout.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional, Union


class TimeCommitment(str, Enum):
    """Daily time the learner can spend."""
    MIN_15 = "15min"
    MIN_30 = "30min"
    HOUR_1 = "1hr"
    HOUR_2_PLUS = "2hr+"


class Level(str, Enum):
    """Self-reported learner level."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class StepType(str, Enum):
    """Kind of learning activity."""
    VIDEO = "video"
    ARTICLE = "article"
    QUIZ = "quiz"
    EXERCISE = "exercise"
    PROJECT = "project"


@dataclass(frozen=True)
class UserProfile:
    """Onboarding answers a plan is generated from."""
    topic: str
    time_commitment: TimeCommitment = TimeCommitment.MIN_30
    level: Level = Level.BEGINNER
    motivation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "topic": self.topic,
            "timeCommitment": self.time_commitment.value,
            "level": self.level.value,
            "motivation": self.motivation,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        return cls(
            topic=data["topic"],
            time_commitment=TimeCommitment(data.get("timeCommitment") or TimeCommitment.MIN_30.value),
            level=Level(str(data.get("level") or Level.BEGINNER.value).lower()),
            motivation=data.get("motivation") or "",
        )


@dataclass(frozen=True)
class Pathway:
    """Candidate focus area offered before plan generation. Never persisted."""
    id: str
    title: str
    learning_goal: str


@dataclass(frozen=True)
class Step:
    """Atomic learning activity. Only `completed` changes after creation."""
    id: str
    title: str
    type: StepType
    duration: str
    url: Optional[str] = None
    completed: bool = False
    description: Optional[str] = None
    objectives: Optional[Union[str, tuple[str, ...]]] = None
    resources: Optional[str] = None
    resource_title: Optional[str] = None

    def with_completed(self, completed: bool) -> "Step":
        """Copy of this step with the completion flag set."""
        return replace(self, completed=completed)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "type": self.type.value,
            "duration": self.duration,
            "completed": self.completed,
        }
        if self.url is not None:
            data["url"] = self.url
        if self.description is not None:
            data["description"] = self.description
        if self.objectives is not None:
            data["objectives"] = (
                list(self.objectives) if isinstance(self.objectives, tuple) else self.objectives
            )
        if self.resources is not None:
            data["resources"] = self.resources
        if self.resource_title is not None:
            data["resourceTitle"] = self.resource_title
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Step":
        objectives = data.get("objectives")
        if isinstance(objectives, list):
            objectives = tuple(str(item) for item in objectives)
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            type=StepType(str(data["type"]).lower()),
            duration=str(data.get("duration") or ""),
            url=data.get("url"),
            completed=bool(data.get("completed", False)),
            description=data.get("description"),
            objectives=objectives,
            resources=data.get("resources"),
            resource_title=data.get("resourceTitle"),
        )


@dataclass(frozen=True)
class Day:
    """One day of a plan. Step order is display and completion order."""
    id: str
    title: str
    steps: tuple[Step, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "steps": [step.to_dict() for step in self.steps],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Day":
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            steps=tuple(Step.from_dict(step) for step in data.get("steps", [])),
        )


@dataclass(frozen=True)
class Plan:
    """Multi-day curriculum generated wholesale by the generation service."""
    topic: str
    days: tuple[Day, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "topic": self.topic,
            "days": [day.to_dict() for day in self.days],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Plan":
        return cls(
            topic=str(data["topic"]),
            days=tuple(Day.from_dict(day) for day in data.get("days", [])),
        )


@dataclass(frozen=True)
class PlanRecord:
    """Durable wrapper around a plan, its originating profile and timestamps."""
    id: str
    created_at: int                 # epoch ms
    updated_at: int                 # epoch ms
    user_profile: UserProfile
    plan: Plan

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "userProfile": self.user_profile.to_dict(),
            "plan": self.plan.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlanRecord":
        return cls(
            id=str(data["id"]),
            created_at=int(data["createdAt"]),
            updated_at=int(data["updatedAt"]),
            user_profile=UserProfile.from_dict(data["userProfile"]),
            plan=Plan.from_dict(data["plan"]),
        )


@dataclass(frozen=True)
class LogEntry:
    """Freeform note."""
    id: str
    title: str
    body: str
    created_at: int                 # epoch ms
    updated_at: int                 # epoch ms

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEntry":
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            body=str(data.get("body") or ""),
            created_at=int(data["createdAt"]),
            updated_at=int(data["updatedAt"]),
        )


@dataclass
class StoreBlob:
    """The entire persisted unit, rewritten as a whole on every mutation."""
    version: int
    plans: dict[str, PlanRecord] = field(default_factory=dict)
    active_plan_id: Optional[str] = None
    log_entries: dict[str, LogEntry] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "plans": {plan_id: record.to_dict() for plan_id, record in self.plans.items()},
            "activePlanId": self.active_plan_id,
            "logEntries": {entry_id: entry.to_dict() for entry_id, entry in self.log_entries.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoreBlob":
        return cls(
            version=int(data["version"]),
            plans={
                plan_id: PlanRecord.from_dict(record)
                for plan_id, record in (data.get("plans") or {}).items()
            },
            active_plan_id=data.get("activePlanId"),
            log_entries={
                entry_id: LogEntry.from_dict(entry)
                for entry_id, entry in (data.get("logEntries") or {}).items()
            },
        )
