"""Tests for the Gemini plan generation service."""

import json
from unittest.mock import Mock, patch

import pytest
from google.genai import types

from companion_app.config.defaults import GenerationParams, SearchParams
from companion_app.errors import ConfigurationError, GenerationError, MalformedDataError
from companion_app.services.base import ChatMessage
from companion_app.services.gemini import GeminiPlanService, build_chat_contents
from companion_app.services.prompts import CHAT_CONTEXT_PREFIX
from companion_app.services.search import ResourceSearchService, SearchResult


def make_client(text):
    client = Mock()
    client.models.generate_content.return_value = Mock(text=text)
    return client


class TestFromConfig:
    """Test service construction."""

    def test_without_api_key_fails_on_call(self, sample_profile):
        """Test a missing key surfaces as ConfigurationError at call time."""
        service = GeminiPlanService.from_config(GenerationParams(api_key=None))

        assert service.client is None
        with pytest.raises(ConfigurationError) as exc_info:
            service.generate_pathways(sample_profile)

        assert exc_info.value.setting == "generation.api_key"
        assert exc_info.value.operation == "generate_pathways"

    def test_with_api_key_builds_client(self):
        with patch("companion_app.services.gemini.genai.Client") as client_cls:
            service = GeminiPlanService.from_config(GenerationParams(api_key="secret"))

        client_cls.assert_called_once_with(api_key="secret")
        assert service.client is client_cls.return_value


class TestGeneration:
    """Test generate and revise calls."""

    def test_generate_pathways(self, sample_profile):
        client = make_client(json.dumps([
            {"id": "path-1", "title": "Web", "learning_goal": "Servers"},
            {"id": "path-2", "title": "CLI", "learning_goal": "Tools"},
            {"id": "path-3", "title": "Cloud", "learning_goal": "Deploy"},
        ]))
        service = GeminiPlanService(client, GenerationParams(model="test-model"))

        pathways = service.generate_pathways(sample_profile)

        assert [pathway.title for pathway in pathways] == ["Web", "CLI", "Cloud"]
        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert '"Go"' in kwargs["contents"]
        assert kwargs["config"].tools is None

    def test_generate_plan_grounded_without_search(self, sample_profile, sample_plan_payload):
        """Test the search grounding tool is attached when no search service is configured."""
        client = make_client("```json\n" + json.dumps(sample_plan_payload) + "\n```")
        service = GeminiPlanService(client, GenerationParams(plan_days=5))

        plan = service.generate_plan(sample_profile, ["Concurrency"])

        assert plan.topic == "Go"
        kwargs = client.models.generate_content.call_args.kwargs
        assert "5-day learning plan" in kwargs["contents"]
        assert "Concurrency" in kwargs["contents"]
        assert kwargs["config"].tools is not None
        assert kwargs["config"].temperature == 0.7

    def test_generate_plan_enriched_with_search(self, sample_profile, sample_plan_payload):
        """Test URLs are filled from search when it is configured."""
        client = make_client(json.dumps(sample_plan_payload))
        search = ResourceSearchService(SearchParams(api_key="k", engine_id="cx"))
        search.search = Mock(return_value=[SearchResult(title="Syntax in 10 min", url="https://v.example")])
        service = GeminiPlanService(client, GenerationParams(), search=search)

        plan = service.generate_plan(sample_profile, [])

        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["config"].tools is None
        assert plan.days[0].steps[0].url == "https://go.dev/tour"
        assert plan.days[0].steps[1].url == "https://v.example"
        assert plan.days[0].steps[1].resource_title == "Syntax in 10 min"

    def test_revise_plan(self, sample_profile, sample_plan, sample_plan_payload):
        client = make_client(json.dumps(sample_plan_payload))
        service = GeminiPlanService(client, GenerationParams())

        revised = service.revise_plan(sample_plan, sample_profile, "more exercises")

        contents = client.models.generate_content.call_args.kwargs["contents"]
        assert "User feedback: more exercises" in contents
        assert '"d2-s1"' in contents
        assert revised.topic == "Go"

    def test_client_failure_wrapped(self, sample_profile):
        client = Mock()
        client.models.generate_content.side_effect = RuntimeError("403 API key not valid")
        service = GeminiPlanService(client, GenerationParams())

        with pytest.raises(GenerationError) as exc_info:
            service.generate_pathways(sample_profile)

        assert exc_info.value.service == "gemini"
        assert exc_info.value.operation == "generate_pathways"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_empty_response(self, sample_profile):
        service = GeminiPlanService(make_client(None), GenerationParams())

        with pytest.raises(GenerationError):
            service.generate_plan(sample_profile, [])

    def test_unparsable_response(self, sample_profile):
        service = GeminiPlanService(make_client("I cannot help with that."), GenerationParams())

        with pytest.raises(MalformedDataError):
            service.generate_plan(sample_profile, [])


class TestChat:
    """Test chat requests."""

    def test_chat_returns_text(self, sample_plan):
        client = make_client("Goroutines are lightweight threads.")
        service = GeminiPlanService(client, GenerationParams())

        reply = service.chat([ChatMessage(role="assistant", content="Hi!")], "What is a goroutine?", sample_plan)

        assert reply == "Goroutines are lightweight threads."
        contents = client.models.generate_content.call_args.kwargs["contents"]
        assert len(contents) == 1
        assert contents[0].role == "user"

    def test_build_chat_contents_drops_greeting(self):
        history = [
            ChatMessage(role="assistant", content="Hi!"),
            ChatMessage(role="user", content="First question"),
            ChatMessage(role="assistant", content="First answer"),
        ]

        contents = build_chat_contents(history, "Second question")

        assert [content.role for content in contents] == ["user", "model", "user"]
        assert [content.parts[0].text for content in contents] == [
            "First question",
            "First answer",
            "Second question",
        ]
        assert all(isinstance(content, types.Content) for content in contents)

    def test_build_chat_contents_prefixes_plan_context(self, sample_plan):
        history = [ChatMessage(role="user", content="Hello"), ChatMessage(role="assistant", content="Hey")]

        contents = build_chat_contents(history, "Explain day 2", sample_plan)

        first = contents[0].parts[0].text
        assert first.startswith(CHAT_CONTEXT_PREFIX)
        assert first.endswith("Hello")
        assert "Goroutines exercise" in first
        assert contents[-1].parts[0].text == "Explain day 2"

    def test_build_chat_contents_first_message_carries_plan_context(self, sample_plan):
        history = [ChatMessage(role="assistant", content="Hi!")]

        contents = build_chat_contents(history, "First question", sample_plan)

        assert len(contents) == 1
        assert contents[0].role == "user"
        text = contents[0].parts[0].text
        assert text.startswith(CHAT_CONTEXT_PREFIX)
        assert text.endswith("First question")
        assert "Tour of Go" in text
