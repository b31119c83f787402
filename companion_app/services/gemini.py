"""Gemini-backed plan generation service (google-genai SDK)."""

from typing import Any, Optional, Sequence

from google import genai
from google.genai import types

from ..config.defaults import GenerationParams
from ..data.models import Pathway, Plan, UserProfile
from ..data.parsers import parse_pathways_response, parse_plan_response
from ..errors import ConfigurationError, GenerationError
from ..logging.config import get_logger
from .base import ChatMessage, PlanGenerationService
from .enrichment import enrich_plan
from .prompts import (
    build_chat_context,
    build_pathways_prompt,
    build_plan_prompt,
    build_revision_prompt,
)
from .search import ResourceSearchService


class GeminiPlanService(PlanGenerationService):
    """
    Plan generation on top of the Gemini API.

    When a resource search service is configured, the model leaves URLs empty
    and generated plans are enriched from search results afterwards. Without
    one, the Google Search grounding tool is attached so the model can find
    URLs itself.
    """

    name = "gemini"

    def __init__(
        self,
        client: Optional[Any],
        config: GenerationParams,
        search: Optional[ResourceSearchService] = None
    ):
        self.client = client
        self.config = config
        self.search = search
        self.logger = get_logger("services.gemini")

    @classmethod
    def from_config(
        cls,
        config: GenerationParams,
        search: Optional[ResourceSearchService] = None
    ) -> "GeminiPlanService":
        """
        Create a service with a real client.

        Without an API key the service is still created, but every call raises
        ConfigurationError so the lifecycle can fall back and tell the user.
        """
        client = genai.Client(api_key=config.api_key) if config.api_key else None
        return cls(client, config, search)

    @property
    def _search_populates_urls(self) -> bool:
        return self.search is not None and self.search.is_configured

    def _generate(self, operation: str, contents: Any, grounded: bool = False) -> str:
        """Call the model and return its text, wrapping any client failure."""
        if self.client is None:
            raise ConfigurationError(
                "Gemini API key is missing. Set GEMINI_API_KEY in the environment.",
                setting="generation.api_key",
                service=self.name,
                operation=operation
            )

        tools = [types.Tool(google_search=types.GoogleSearch())] if grounded else None
        generation_config = types.GenerateContentConfig(
            temperature=self.config.temperature,
            tools=tools,
        )

        try:
            response = self.client.models.generate_content(
                model=self.config.model,
                contents=contents,
                config=generation_config,
            )
        except Exception as e:
            self.logger.error("Gemini request failed", operation=operation, error=str(e))
            raise GenerationError(
                f"Gemini request failed: {e}",
                service=self.name,
                operation=operation
            ) from e

        text = response.text
        if not text:
            raise GenerationError("Gemini returned an empty response", service=self.name, operation=operation)
        return text

    def generate_pathways(self, profile: UserProfile) -> list[Pathway]:
        prompt = build_pathways_prompt(profile, self.config.min_pathways, self.config.max_pathways)
        pathways = parse_pathways_response(self._generate("generate_pathways", prompt))
        self.logger.info("Generated pathways", topic=profile.topic, count=len(pathways))
        return pathways

    def generate_plan(self, profile: UserProfile, pathway_titles: Sequence[str]) -> Plan:
        prompt = build_plan_prompt(profile, pathway_titles, self.config.plan_days, self._search_populates_urls)
        plan = parse_plan_response(
            self._generate("generate_plan", prompt, grounded=not self._search_populates_urls)
        )
        if self._search_populates_urls:
            plan = enrich_plan(plan, profile.topic, self.search)
        self.logger.info("Generated plan", topic=plan.topic, days=len(plan.days))
        return plan

    def revise_plan(self, plan: Plan, profile: UserProfile, feedback: str) -> Plan:
        prompt = build_revision_prompt(
            plan, profile, feedback, self.config.plan_days, self._search_populates_urls
        )
        revised = parse_plan_response(
            self._generate("revise_plan", prompt, grounded=not self._search_populates_urls)
        )
        if self._search_populates_urls:
            revised = enrich_plan(revised, profile.topic, self.search)
        self.logger.info("Revised plan", topic=revised.topic, days=len(revised.days))
        return revised

    def chat(
        self,
        history: Sequence[ChatMessage],
        message: str,
        plan_context: Optional[Plan] = None
    ) -> str:
        return self._generate("chat", build_chat_contents(history, message, plan_context))


def build_chat_contents(
    history: Sequence[ChatMessage],
    message: str,
    plan_context: Optional[Plan] = None
) -> list[types.Content]:
    """
    Convert chat history into Gemini contents.

    Turns before the first user message (the assistant greeting) are dropped
    since the conversation must open with a user turn. The plan context is
    prefixed to that first user turn.
    """
    first_user = next((i for i, msg in enumerate(history) if msg.role == "user"), None)
    turns = list(history[first_user:]) if first_user is not None else []

    texts = [(("user" if msg.role == "user" else "model"), msg.content) for msg in turns]
    texts.append(("user", message))

    context = build_chat_context(plan_context)
    if context:
        role, text = texts[0]
        texts[0] = (role, context + text)

    return [types.Content(role=role, parts=[types.Part(text=text)]) for role, text in texts]
