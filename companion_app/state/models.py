"""
State machine data models for the plan lifecycle.

This module defines the views the controller moves between and the immutable
snapshot of everything the controller holds while a plan is being built or
studied.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal, Optional

from ..data.models import Pathway, Plan, UserProfile


class View(str, Enum):
    """Controller views. Exactly one is active at a time."""
    UNINITIALIZED = "uninitialized"
    HOME = "home"
    ONBOARDING = "onboarding"
    GENERATING_PATHWAYS = "generating-pathways"
    PATHWAYS = "pathways"
    GENERATING_PLAN = "generating-plan"
    REVIEW = "review"
    REVISING = "revising"
    REVISING_LOADING = "revising-loading"
    DASHBOARD = "dashboard"


LOADING_VIEWS = frozenset({View.GENERATING_PATHWAYS, View.GENERATING_PLAN, View.REVISING_LOADING})


@dataclass(frozen=True)
class Notice:
    """Blocking message for the user."""
    kind: Literal["error", "warning"]
    message: str


@dataclass(frozen=True)
class ControllerState:
    """Snapshot of the lifecycle controller."""

    view: View = View.UNINITIALIZED

    # Plan under construction
    profile: Optional[UserProfile] = None
    pathways: tuple[Pathway, ...] = ()
    selected_pathway_titles: tuple[str, ...] = ()

    # Working copy: the plan under review, or the plan open on the dashboard
    plan: Optional[Plan] = None
    has_revised: bool = False
    active_plan_id: Optional[str] = None

    notice: Optional[Notice] = None

    @property
    def is_loading(self) -> bool:
        return self.view in LOADING_VIEWS

    def with_view(self, view: View, **changes) -> "ControllerState":
        """Create new state in ``view`` with the given fields changed."""
        return replace(self, view=view, **changes)

    def with_notice(self, notice: Optional[Notice]) -> "ControllerState":
        return replace(self, notice=notice)

    def with_plan(self, plan: Optional[Plan]) -> "ControllerState":
        return replace(self, plan=plan)
