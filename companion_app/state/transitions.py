"""
Allowed view transitions for the plan lifecycle.

Every edge of the lifecycle is listed here; the controller validates each
move against this table before applying it.
"""

from ..errors import StateTransitionError
from .models import View

ALLOWED_TRANSITIONS: dict[View, frozenset[View]] = {
    View.UNINITIALIZED: frozenset({View.HOME, View.ONBOARDING}),
    View.HOME: frozenset({View.ONBOARDING, View.DASHBOARD}),
    View.ONBOARDING: frozenset({View.GENERATING_PATHWAYS}),
    # Generation failures fall back to the decision point that started them
    View.GENERATING_PATHWAYS: frozenset({View.PATHWAYS, View.ONBOARDING}),
    View.PATHWAYS: frozenset({View.GENERATING_PLAN}),
    View.GENERATING_PLAN: frozenset({View.REVIEW, View.PATHWAYS}),
    View.REVIEW: frozenset({View.DASHBOARD, View.REVISING}),
    View.REVISING: frozenset({View.REVISING_LOADING}),
    View.REVISING_LOADING: frozenset({View.REVIEW, View.REVISING}),
    View.DASHBOARD: frozenset({View.HOME}),
}


def is_allowed(from_view: View, to_view: View) -> bool:
    return to_view in ALLOWED_TRANSITIONS.get(from_view, frozenset())


def assert_transition(from_view: View, to_view: View) -> None:
    """Raise StateTransitionError unless ``from_view -> to_view`` is a lifecycle edge."""
    if not is_allowed(from_view, to_view):
        raise StateTransitionError(
            f"Invalid view transition from {from_view.value} to {to_view.value}",
            current_state=from_view.value,
            attempted_transition=to_view.value
        )


def require_view(current: View, expected: View, action: str) -> None:
    """Raise StateTransitionError when ``action`` is invoked outside ``expected``."""
    if current != expected:
        raise StateTransitionError(
            f"{action} is only available in the {expected.value} view (current: {current.value})",
            current_state=current.value,
            attempted_transition=action
        )
