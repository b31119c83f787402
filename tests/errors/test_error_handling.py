"""
Error handling tests for the learning companion.

Covers the error hierarchy and the recovery paths taken by the lifecycle
controller and persistence store.
"""

from unittest.mock import Mock

import pytest

from companion_app.errors import (
    ConfigurationError,
    DataQualityError,
    DuplicateIdentifierError,
    GenerationError,
    MalformedDataError,
    MissingDataError,
    PersistenceError,
    SearchError,
    ServiceError,
    SystemFailureError,
)
from companion_app.services.mock import MockPlanService
from companion_app.state.controller import PATHWAYS_FAILED, PlanLifecycleController
from companion_app.state.models import View


class TestErrorClassification:
    """Test error classification system."""

    def test_data_quality_error_hierarchy(self):
        base_error = DataQualityError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        missing = MissingDataError("no topic", field="topic")
        assert isinstance(missing, DataQualityError)
        assert missing.field == "topic"

        duplicate = DuplicateIdentifierError("dup", identifier="d1-s1", scope="day-1", expected_format="plan")
        assert isinstance(duplicate, MalformedDataError)
        assert duplicate.identifier == "d1-s1"
        assert duplicate.expected_format == "plan"

    def test_system_failure_hierarchy(self):
        base_error = SystemFailureError("boom", context={"a": 1})
        assert base_error.recoverable is False
        assert base_error.context == {"a": 1}

        for error in (ConfigurationError("x"), GenerationError("x"), SearchError("x")):
            assert isinstance(error, ServiceError)
            assert isinstance(error, SystemFailureError)

        assert SearchError("x", query="q", status_code=500).service == "search"
        assert isinstance(PersistenceError("x"), SystemFailureError)
        assert not isinstance(PersistenceError("x"), ServiceError)

    def test_malformed_payload_is_recoverable(self):
        """Test malformed payloads are data quality errors, not system failures."""
        assert issubclass(MalformedDataError, DataQualityError)
        assert not issubclass(MalformedDataError, SystemFailureError)


class TestRecovery:
    """Test recovery paths keep user input."""

    @pytest.mark.parametrize("operation,expected_view", [
        ("generate_pathways", View.ONBOARDING),
        ("generate_plan", View.PATHWAYS),
        ("revise_plan", View.REVISING),
    ])
    def test_failure_returns_to_decision_point(self, store, sample_profile, operation, expected_view):
        controller = PlanLifecycleController(store, MockPlanService(fail_on={operation}))
        controller.start()

        if controller.submit_profile(sample_profile) and controller.confirm_pathways(["path-1"]):
            controller.request_revision()
            controller.submit_feedback("shorter days")

        assert controller.view == expected_view
        assert controller.notice.kind == "error"
        assert controller.state.profile == sample_profile
        assert not controller.state.is_loading

    def test_retry_after_failure(self, store, sample_profile):
        service = MockPlanService(fail_on={"generate_pathways"})
        controller = PlanLifecycleController(store, service)
        controller.start()
        controller.submit_profile(sample_profile)

        service.fail_on.clear()

        assert controller.submit_profile(sample_profile) is True
        assert controller.notice is None
        assert controller.view == View.PATHWAYS

    def test_unexpected_exception_falls_back(self, store, sample_profile):
        """Test an exception outside the error hierarchy still returns to onboarding."""
        service = Mock()
        service.generate_pathways.side_effect = RuntimeError("boom")
        controller = PlanLifecycleController(store, service)
        controller.start()

        assert controller.submit_profile(sample_profile) is False
        assert controller.view == View.ONBOARDING
        assert controller.notice.message == PATHWAYS_FAILED
        assert controller.state.profile == sample_profile
