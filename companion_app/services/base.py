"""Base classes for plan generation services."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal, Optional, Sequence

from ..data.models import Pathway, Plan, UserProfile


@dataclass(frozen=True)
class ChatMessage:
    """One turn of the companion chat."""
    role: Literal["user", "assistant"]
    content: str


class PlanGenerationService(ABC):
    """
    Opaque plan generation service.

    Implementations raise ServiceError (or MalformedDataError for payloads
    that cannot be parsed) on any failure. Callers do not distinguish
    between subtypes.
    """

    name = "generation"

    @abstractmethod
    def generate_pathways(self, profile: UserProfile) -> list[Pathway]:
        """Propose focus areas within the profile's topic."""

    @abstractmethod
    def generate_plan(self, profile: UserProfile, pathway_titles: Sequence[str]) -> Plan:
        """Generate a full plan emphasising the selected pathways."""

    @abstractmethod
    def revise_plan(self, plan: Plan, profile: UserProfile, feedback: str) -> Plan:
        """Revise an existing plan according to free-text feedback."""

    @abstractmethod
    def chat(
        self,
        history: Sequence[ChatMessage],
        message: str,
        plan_context: Optional[Plan] = None
    ) -> str:
        """Answer a chat message, optionally grounded in the learner's plan."""
