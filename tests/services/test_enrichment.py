"""Tests for search-based plan enrichment."""

from unittest.mock import Mock

from companion_app.config.defaults import SearchParams
from companion_app.data.models import Day, Plan, Step, StepType
from companion_app.errors import SearchError
from companion_app.services.enrichment import enrich_plan
from companion_app.services.search import ResourceSearchService, SearchResult


def configured_search(side_effect=None, return_value=None):
    search = ResourceSearchService(SearchParams(api_key="k", engine_id="cx"))
    search.search = Mock(side_effect=side_effect, return_value=return_value)
    return search


def repeated_step_plan():
    return Plan(topic="Go", days=(
        Day(id="day-1", title="One", steps=(
            Step(id="d1-s1", title="Practice", type=StepType.EXERCISE, duration="10m", url=""),
            Step(id="d1-s2", title="Docs", type=StepType.ARTICLE, duration="10m", url="https://go.dev/doc"),
        )),
        Day(id="day-2", title="Two", steps=(
            Step(id="d2-s1", title="Practice", type=StepType.EXERCISE, duration="10m"),
        )),
    ))


class TestEnrichPlan:
    """Test enrich_plan function."""

    def test_unconfigured_search_returns_plan(self, sample_plan):
        search = ResourceSearchService(SearchParams())

        assert enrich_plan(sample_plan, "Go", search) is sample_plan

    def test_existing_urls_kept(self):
        search = configured_search(return_value=[SearchResult(title="x", url="https://x")])

        plan = enrich_plan(repeated_step_plan(), "Go", search)

        assert plan.days[0].steps[1].url == "https://go.dev/doc"
        assert plan.days[0].steps[1].resource_title is None

    def test_repeated_steps_get_distinct_results(self):
        """Test one search per (type, title) with results handed out in order."""
        search = configured_search(return_value=[
            SearchResult(title="First", url="https://one"),
            SearchResult(title="Second", url="https://two"),
        ])

        plan = enrich_plan(repeated_step_plan(), "Go", search)

        assert search.search.call_count == 1
        assert search.search.call_args.args[0] == "Go Practice practice exercises"
        assert plan.days[0].steps[0].url == "https://one"
        assert plan.days[1].steps[0].url == "https://two"
        assert plan.days[1].steps[0].resource_title == "Second"

    def test_exhausted_results_leave_step(self):
        search = configured_search(return_value=[SearchResult(title="Only", url="https://only")])

        plan = enrich_plan(repeated_step_plan(), "Go", search)

        assert plan.days[0].steps[0].url == "https://only"
        assert plan.days[1].steps[0].url is None

    def test_search_failure_degrades(self):
        search = configured_search(side_effect=SearchError("quota", query="q"))
        original = repeated_step_plan()

        plan = enrich_plan(original, "Go", search)

        assert plan == original
