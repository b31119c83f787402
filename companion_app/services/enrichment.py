"""Fill plan step URLs with real resources from the search service."""

from dataclasses import replace

from ..data.models import Plan, Step
from ..errors import SearchError
from ..logging.config import get_logger
from .search import ResourceSearchService, SearchResult, resource_query

logger = get_logger(__name__)


def enrich_plan(plan: Plan, topic: str, search: ResourceSearchService) -> Plan:
    """
    Assign a search result URL to every step that lacks one.

    Results are searched once per (type, title) pair and handed out in order,
    so repeated steps get different resources. A failed search leaves the
    affected steps unchanged.

    Args:
        plan: Plan with empty or placeholder URLs
        topic: Main learning topic, prefixed to each step title
        search: Configured search service

    Returns:
        A new Plan with URLs populated where results were found
    """
    if not search.is_configured:
        return plan

    cache: dict[tuple[str, str], list[SearchResult]] = {}
    enriched_days = []
    assigned = 0

    for day in plan.days:
        steps = []
        for step in day.steps:
            if step.url:
                steps.append(step)
                continue

            key = (step.type.value, step.title)
            if key not in cache:
                cache[key] = _find_resources(search, f"{topic} {step.title}", step.type.value)

            results = cache[key]
            if results:
                steps.append(_with_resource(step, results.pop(0)))
                assigned += 1
            else:
                steps.append(step)
        enriched_days.append(replace(day, steps=tuple(steps)))

    logger.info("Enriched plan with search resources", topic=topic, assigned=assigned, searches=len(cache))
    return replace(plan, days=tuple(enriched_days))


def _find_resources(search: ResourceSearchService, topic: str, step_type: str) -> list[SearchResult]:
    query = resource_query(topic, step_type)
    try:
        return list(search.search(query))
    except SearchError as e:
        logger.warning("Resource search failed", query=query, error=str(e))
        return []


def _with_resource(step: Step, result: SearchResult) -> Step:
    return replace(step, url=result.url, resource_title=result.title)
