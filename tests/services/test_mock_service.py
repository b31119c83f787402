"""Tests for the offline plan generation service."""

import pytest

from companion_app.data.parsers import validate_plan
from companion_app.errors import GenerationError
from companion_app.services.base import ChatMessage
from companion_app.services.mock import MockPlanService


class TestMockPlanService:
    """Test MockPlanService class."""

    def test_pathways(self, sample_profile):
        pathways = MockPlanService().generate_pathways(sample_profile)

        assert len(pathways) == 3
        assert pathways[0].title == "Go Fundamentals"

    def test_plan_is_valid(self, sample_profile):
        plan = MockPlanService().generate_plan(sample_profile, ["Go Fundamentals"])

        validate_plan(plan)
        assert plan.topic == "Go"
        assert [len(day.steps) for day in plan.days] == [3, 2, 1]

    def test_revise_appends_step(self, sample_profile):
        service = MockPlanService()
        plan = service.generate_plan(sample_profile, [])

        revised = service.revise_plan(plan, sample_profile, "add a project")

        validate_plan(revised)
        assert revised.days[-1].steps[-1].id == "day-3-rev2"
        assert revised.days[:-1] == plan.days[:-1]

    def test_chat(self, sample_profile):
        service = MockPlanService()
        plan = service.generate_plan(sample_profile, [])
        history = [ChatMessage(role="assistant", content="Hi")]

        assert service.chat(history, "help") == "You asked: help"
        assert "Go plan" in service.chat(history, "help", plan)

    def test_fail_on(self, sample_profile):
        service = MockPlanService(fail_on={"generate_plan"})

        service.generate_pathways(sample_profile)
        with pytest.raises(GenerationError) as exc_info:
            service.generate_plan(sample_profile, [])

        assert exc_info.value.operation == "generate_plan"
        assert service.calls == ["generate_pathways", "generate_plan"]
