"""
Plan lifecycle controller.

This module orchestrates the view flow from onboarding to the dashboard,
calls the plan generation service, persists plans at the confirm points and
writes progress back to the store.
"""

from typing import Callable, Iterable, Optional

from ..data.models import Plan, PlanRecord, UserProfile
from ..data.parsers import validate_plan
from ..errors import MalformedDataError, MissingDataError, StateTransitionError
from ..logging.config import get_state_logger, log_service_failure, log_view_transition
from ..persistence.plan_store import PlanStore
from ..progress.tracker import PlanSummary, plan_summary, toggle_step
from ..services.base import PlanGenerationService
from .models import ControllerState, Notice, View
from .transitions import assert_transition, require_view

Listener = Callable[[ControllerState, ControllerState], None]

PATHWAYS_FAILED = "Something went wrong generating learning pathways. Please check your API key."
PLAN_FAILED = "Something went wrong generating the plan. Please check your API key."
REVISION_FAILED = "Something went wrong revising the plan. Please try again."
PLAN_NOT_FOUND = "That plan could not be found."
NOT_DURABLE = "Your changes could not be saved to local storage and may be lost when the app closes."


class PlanLifecycleController:
    """
    Finite state machine over the application's views.

    The controller owns the working copy of the plan during a session. Plans
    are persisted exactly when a reviewed plan is confirmed, on every step
    toggle, and when leaving the dashboard. A failing service call never
    escapes, whatever it raises: it sets an error notice and returns the
    controller to the view the call was started from, with all user input
    kept.
    """

    def __init__(self, store: PlanStore, service: PlanGenerationService):
        self.store = store
        self.service = service
        self.state = ControllerState()
        self.logger = get_state_logger(__name__)
        self._listeners: list[Listener] = []

    # Observation

    @property
    def view(self) -> View:
        return self.state.view

    @property
    def plan(self) -> Optional[Plan]:
        return self.state.plan

    @property
    def notice(self) -> Optional[Notice]:
        return self.state.notice

    @property
    def is_loading(self) -> bool:
        """True while a service call is in flight."""
        return self.state.is_loading

    @property
    def can_revise(self) -> bool:
        """Revision is offered once per review cycle."""
        return self.state.view == View.REVIEW and not self.state.has_revised

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener(old_state, new_state)``; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, new_state: ControllerState) -> None:
        old_state = self.state
        self.state = new_state
        for listener in list(self._listeners):
            listener(old_state, new_state)

    def _transition(self, new_state: ControllerState, trigger: str, context: Optional[dict] = None) -> None:
        """Validate and apply a view change."""
        from_view = self.state.view
        assert_transition(from_view, new_state.view)
        log_view_transition(self.logger, from_view.value, new_state.view.value, trigger, context)
        self._set_state(new_state)

    def _fall_back(self, operation: str, error: Exception, view: View, message: str) -> None:
        log_service_failure(self.logger, operation, error, view.value)
        self._transition(
            self.state.with_view(view, notice=Notice(kind="error", message=message)),
            trigger=f"{operation}_failed",
            context={"error": str(error)}
        )

    def _durability_notice(self) -> Optional[Notice]:
        notice = self.state.notice
        if self.store.last_write_ok:
            # A successful write clears an earlier durability warning
            if notice is not None and notice.message == NOT_DURABLE:
                return None
            return notice
        return Notice(kind="warning", message=NOT_DURABLE)

    def dismiss_notice(self) -> None:
        if self.state.notice is not None:
            self._set_state(self.state.with_notice(None))

    # Hub

    def start(self) -> View:
        """Enter home when any plan exists, onboarding otherwise."""
        require_view(self.state.view, View.UNINITIALIZED, "start")
        target = View.HOME if self.store.has_plans() else View.ONBOARDING
        self._transition(self.state.with_view(target), trigger="controller_start")
        return target

    def list_plans(self) -> list[PlanRecord]:
        return self.store.get_all_plans()

    def plan_summaries(self) -> list[PlanSummary]:
        now = self.store.clock()
        return [plan_summary(record, now) for record in self.store.get_all_plans()]

    def create_new_plan(self) -> None:
        require_view(self.state.view, View.HOME, "create_new_plan")
        self._transition(
            self.state.with_view(
                View.ONBOARDING,
                profile=None,
                pathways=(),
                selected_pathway_titles=(),
                plan=None,
                has_revised=False,
                active_plan_id=None,
                notice=None,
            ),
            trigger="create_new_plan"
        )

    def open_plan(self, plan_id: str) -> bool:
        """Load a stored plan into the dashboard. Returns False if it does not exist."""
        require_view(self.state.view, View.HOME, "open_plan")
        record = self.store.get_plan(plan_id)
        if record is None:
            self.logger.warning("Requested plan not found", plan_id=plan_id)
            self._set_state(self.state.with_notice(Notice(kind="error", message=PLAN_NOT_FOUND)))
            return False

        self.store.set_active_plan(plan_id)
        self._transition(
            self.state.with_view(
                View.DASHBOARD,
                profile=record.user_profile,
                plan=record.plan,
                active_plan_id=plan_id,
                notice=self._durability_notice(),
            ),
            trigger="open_plan",
            context={"plan_id": plan_id}
        )
        return True

    # Plan construction

    def submit_profile(self, profile: UserProfile) -> bool:
        """
        Generate pathways for a completed onboarding profile.

        Args:
            profile: Onboarding answers; the topic is required

        Returns:
            True on success (pathways view), False after falling back to onboarding
        """
        require_view(self.state.view, View.ONBOARDING, "submit_profile")
        if not profile.topic or not profile.topic.strip():
            raise MissingDataError("A topic is required to build a plan", field="topic")

        self._transition(
            self.state.with_view(View.GENERATING_PATHWAYS, profile=profile, notice=None),
            trigger="profile_submitted",
            context={"topic": profile.topic}
        )

        try:
            pathways = self.service.generate_pathways(profile)
            if not pathways:
                raise MalformedDataError("No pathways returned", expected_format="pathways")
        except Exception as e:
            self._fall_back("generate_pathways", e, View.ONBOARDING, PATHWAYS_FAILED)
            return False

        self._transition(
            self.state.with_view(View.PATHWAYS, pathways=tuple(pathways), selected_pathway_titles=()),
            trigger="pathways_generated",
            context={"count": len(pathways)}
        )
        return True

    def confirm_pathways(self, pathway_ids: Iterable[str]) -> bool:
        """
        Generate a plan focused on the selected pathways.

        Args:
            pathway_ids: Ids of the chosen pathways, at least one

        Returns:
            True on success (review view), False after falling back to pathways
        """
        require_view(self.state.view, View.PATHWAYS, "confirm_pathways")
        chosen = set(pathway_ids)
        known = {pathway.id for pathway in self.state.pathways}
        unknown = chosen - known
        if unknown:
            raise MissingDataError(f"Unknown pathway ids: {sorted(unknown)}", field="pathway_ids")
        if not chosen:
            raise MissingDataError("Select at least one pathway", field="pathway_ids")

        titles = tuple(pathway.title for pathway in self.state.pathways if pathway.id in chosen)
        self._transition(
            self.state.with_view(View.GENERATING_PLAN, selected_pathway_titles=titles, notice=None),
            trigger="pathways_confirmed",
            context={"pathways": list(titles)}
        )

        try:
            plan = self.service.generate_plan(self.state.profile, list(titles))
            validate_plan(plan)
        except Exception as e:
            self._fall_back("generate_plan", e, View.PATHWAYS, PLAN_FAILED)
            return False

        self._transition(
            self.state.with_view(View.REVIEW, plan=plan),
            trigger="plan_generated",
            context={"topic": plan.topic, "days": len(plan.days)}
        )
        return True

    # Review and revision

    def request_revision(self) -> None:
        require_view(self.state.view, View.REVIEW, "request_revision")
        if self.state.has_revised:
            raise StateTransitionError(
                "The plan has already been revised in this review cycle",
                current_state=self.state.view.value,
                attempted_transition=View.REVISING.value
            )
        self._transition(self.state.with_view(View.REVISING, notice=None), trigger="revision_requested")

    def submit_feedback(self, feedback: str) -> bool:
        """
        Revise the reviewed plan with free-text feedback.

        Returns:
            True on success (back in review, revised), False after falling back to revising
        """
        require_view(self.state.view, View.REVISING, "submit_feedback")
        if not feedback or not feedback.strip():
            raise MissingDataError("Feedback is required to revise the plan", field="feedback")

        self._transition(
            self.state.with_view(View.REVISING_LOADING, notice=None),
            trigger="feedback_submitted",
            context={"feedback_length": len(feedback)}
        )

        try:
            revised = self.service.revise_plan(self.state.plan, self.state.profile, feedback.strip())
            validate_plan(revised)
        except Exception as e:
            self._fall_back("revise_plan", e, View.REVISING, REVISION_FAILED)
            return False

        self._transition(
            self.state.with_view(View.REVIEW, plan=revised, has_revised=True),
            trigger="plan_revised",
            context={"days": len(revised.days)}
        )
        return True

    def confirm_plan(self) -> str:
        """Persist the reviewed plan and open it on the dashboard. Returns the new plan id."""
        require_view(self.state.view, View.REVIEW, "confirm_plan")
        profile = self.state.profile
        plan = self.state.plan

        plan_id = self.store.save_plan(profile, plan)
        record = self.store.get_plan(plan_id)

        self._transition(
            self.state.with_view(
                View.DASHBOARD,
                # The dashboard works on the stored record; fall back to memory if the write was lost
                profile=record.user_profile if record else profile,
                plan=record.plan if record else plan,
                pathways=(),
                selected_pathway_titles=(),
                has_revised=False,
                active_plan_id=plan_id,
                notice=self._durability_notice(),
            ),
            trigger="plan_confirmed",
            context={"plan_id": plan_id}
        )
        return plan_id

    # Dashboard

    def toggle_step(self, day_id: str, step_id: str) -> Plan:
        """Toggle a step on the working plan and write it through to the store."""
        require_view(self.state.view, View.DASHBOARD, "toggle_step")
        current = self.state.plan
        updated = toggle_step(current, day_id, step_id)
        if updated is current:
            return current

        if self.state.active_plan_id:
            self.store.update_plan(self.state.active_plan_id, updated)

        self._set_state(self.state.with_plan(updated).with_notice(self._durability_notice()))
        return updated

    def back_to_home(self) -> None:
        """Write back the working plan and return to the plan list."""
        require_view(self.state.view, View.DASHBOARD, "back_to_home")
        if self.state.active_plan_id and self.state.plan is not None:
            self.store.update_plan(self.state.active_plan_id, self.state.plan)

        self._transition(
            self.state.with_view(
                View.HOME,
                profile=None,
                plan=None,
                active_plan_id=None,
                notice=self._durability_notice(),
            ),
            trigger="back_to_home"
        )
