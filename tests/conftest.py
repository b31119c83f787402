"""Pytest configuration and shared fixtures."""

import random

import pytest

from companion_app.data.models import (
    Day,
    Level,
    Plan,
    Step,
    StepType,
    TimeCommitment,
    UserProfile,
)
from companion_app.persistence.backends import MemoryKeyValueBackend
from companion_app.persistence.plan_store import PlanStore
from companion_app.services.mock import MockPlanService
from companion_app.state.controller import PlanLifecycleController
from companion_app.utils.time import ManualClock


@pytest.fixture
def sample_profile() -> UserProfile:
    """Profile from the onboarding scenario."""
    return UserProfile(
        topic="Go",
        time_commitment=TimeCommitment.MIN_30,
        level=Level.BEGINNER,
        motivation="",
    )


@pytest.fixture
def sample_plan() -> Plan:
    """Two-day plan with three steps."""
    return Plan(
        topic="Go",
        days=(
            Day(id="day-1", title="Day 1: Basics", steps=(
                Step(id="d1-s1", title="Tour of Go", type=StepType.ARTICLE, duration="15m",
                     url="https://go.dev/tour"),
                Step(id="d1-s2", title="Syntax video", type=StepType.VIDEO, duration="10m"),
            )),
            Day(id="day-2", title="Day 2: Concurrency", steps=(
                Step(id="d2-s1", title="Goroutines exercise", type=StepType.EXERCISE, duration="30m",
                     description="Write a worker pool", objectives=("channels", "sync.WaitGroup")),
            )),
        ),
    )


@pytest.fixture
def sample_plan_payload() -> dict:
    """Raw plan payload as the generation service returns it."""
    return {
        "topic": "Go",
        "days": [
            {
                "id": "day-1",
                "title": "Day 1: Basics",
                "steps": [
                    {"id": "d1-s1", "title": "Tour of Go", "type": "article", "duration": "15m",
                     "url": "https://go.dev/tour", "completed": False},
                    {"id": "d1-s2", "title": "Syntax video", "type": "video", "duration": "10m",
                     "url": "", "completed": False},
                ],
            },
            {
                "id": "day-2",
                "title": "Day 2: Concurrency",
                "steps": [
                    {"id": "d2-s1", "title": "Goroutines exercise", "type": "exercise",
                     "duration": "30m", "completed": False},
                ],
            },
        ],
    }


@pytest.fixture
def clock() -> ManualClock:
    """Clock that advances one second per reading."""
    return ManualClock(start_ms=1_700_000_000_000, step_ms=1000)


@pytest.fixture
def backend() -> MemoryKeyValueBackend:
    return MemoryKeyValueBackend()


@pytest.fixture
def store(backend, clock) -> PlanStore:
    return PlanStore(backend, clock=clock, rng=random.Random(42))


@pytest.fixture
def mock_service() -> MockPlanService:
    return MockPlanService()


@pytest.fixture
def controller(store, mock_service) -> PlanLifecycleController:
    return PlanLifecycleController(store, mock_service)
