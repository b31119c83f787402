"""
External service boundary.

Plan generation (Gemini or offline mock), resource search and plan
enrichment. Every failure surfaces as a ServiceError or MalformedDataError.
"""
from .base import ChatMessage, PlanGenerationService
from .search import ResourceSearchService, SearchResult

__all__ = [
    "ChatMessage",
    "PlanGenerationService",
    "ResourceSearchService",
    "SearchResult",
]
