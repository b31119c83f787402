"""Google Custom Search client for learning resources."""

import http.client
import json
from dataclasses import dataclass
from typing import Any, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from ..config.defaults import SearchParams
from ..errors import SearchError
from ..logging.config import get_logger

MAX_RESULTS_PER_REQUEST = 10

# Query templates per step type; "{topic}" is replaced with the search topic
RESOURCE_QUERIES = {
    "video": "{topic} tutorial site:youtube.com",
    "article": "{topic} tutorial guide beginner",
    "project": "{topic} project tutorial hands-on",
    "exercise": "{topic} practice exercises",
    "quiz": "{topic} quiz questions practice",
}


@dataclass(frozen=True)
class SearchResult:
    """A single search hit."""
    title: str
    url: str
    description: str = ""


def resource_query(topic: str, step_type: str) -> str:
    """Search query for a learning resource of the given step type."""
    template = RESOURCE_QUERIES.get(step_type, "{topic} learn " + step_type)
    return template.format(topic=topic)


class ResourceSearchService:
    """
    Google Custom Search JSON API client.

    Missing credentials are a valid configuration: ``is_configured`` is False
    and ``search`` returns no results rather than failing.
    """

    def __init__(self, config: SearchParams):
        self.config = config
        self.logger = get_logger("services.search")

    @property
    def is_configured(self) -> bool:
        return bool(self.config.api_key and self.config.engine_id)

    def search(self, query: str, num: Optional[int] = None) -> list[SearchResult]:
        """
        Run a web search.

        Args:
            query: Search query
            num: Number of results (capped at 10), defaults to config

        Returns:
            Search results, empty when search is not configured
        """
        if not self.is_configured:
            self.logger.debug("Search not configured, returning no results", query=query)
            return []

        count = min(num or self.config.results_per_query, MAX_RESULTS_PER_REQUEST)
        params = urlencode({
            "key": self.config.api_key,
            "cx": self.config.engine_id,
            "q": query,
            "num": count,
        })
        request = Request(f"{self.config.endpoint}?{params}", method="GET")

        try:
            with urlopen(request, timeout=self.config.timeout_seconds) as response:
                payload = json.loads(response.read().decode("utf-8"))

        except HTTPError as e:
            message = self._error_message(e)
            self.logger.warning("Search request rejected", query=query, status_code=e.code, error=message)
            raise SearchError(message, query=query, status_code=e.code, operation="search") from e

        except (URLError, http.client.HTTPException, OSError) as e:
            self.logger.warning("Search request failed", query=query, error=str(e))
            raise SearchError(f"Search failed: {e}", query=query, operation="search") from e

        except (ValueError, RecursionError) as e:
            # Undecodable bytes or invalid JSON
            raise SearchError(f"Invalid search response: {e}", query=query, operation="search") from e

        if not isinstance(payload, dict):
            raise SearchError(
                f"Invalid search response: expected an object, got {type(payload).__name__}",
                query=query,
                operation="search"
            )

        items = payload.get("items")
        if not isinstance(items, list):
            return []
        return [self._to_result(item) for item in items if isinstance(item, dict)]

    def _to_result(self, item: dict[str, Any]) -> SearchResult:
        return SearchResult(
            title=item.get("title", ""),
            url=item.get("link", ""),
            description=item.get("snippet", ""),
        )

    def _error_message(self, error: HTTPError) -> str:
        try:
            body = json.loads(error.read().decode("utf-8"))
            return body.get("error", {}).get("message") or f"Search failed: {error.reason}"
        except (ValueError, AttributeError, OSError):
            return f"Search failed: {error.reason}"
