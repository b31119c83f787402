"""
Application coordinator.

Wires configuration, logging, storage, services and the lifecycle controller
together, and hands out note and chat sessions bound to the same store and
service.
"""

from pathlib import Path
from typing import Any, Optional

import structlog

from .chat.session import ChatSession
from .config.defaults import CompanionConfig
from .config.loader import load_config
from .logging.config import configure_logging
from .notes.session import NoteSession
from .persistence.backends import KeyValueBackend, SqliteKeyValueBackend
from .persistence.plan_store import PlanStore
from .services.base import PlanGenerationService
from .services.gemini import GeminiPlanService
from .services.search import ResourceSearchService
from .state.controller import PlanLifecycleController
from .state.models import View

logger = structlog.get_logger(__name__)


class CompanionEngine:
    """
    Main coordinator for the learning companion.

    Services are passed in explicitly; nothing is created at import time.
    Lifecycle: construct (configure credentials) → start → use. No teardown
    is needed.
    """

    def __init__(
        self,
        config: CompanionConfig,
        backend: Optional[KeyValueBackend] = None,
        service: Optional[PlanGenerationService] = None,
        search: Optional[ResourceSearchService] = None
    ) -> None:
        self.config = config
        self.logger = logger

        self.backend = backend or SqliteKeyValueBackend(config.storage.db_path)
        self.store = PlanStore(self.backend, storage_key=config.storage.storage_key)
        self.search = search or ResourceSearchService(config.search)
        self.service = service or GeminiPlanService.from_config(config.generation, self.search)
        self.controller = PlanLifecycleController(self.store, self.service)

        self.logger.info(
            "Learning companion initialized",
            service=getattr(self.service, "name", type(self.service).__name__),
            search_configured=self.search.is_configured,
            storage_key=config.storage.storage_key
        )

    @classmethod
    def create(
        cls,
        config_dir: Optional[Path] = None,
        overrides: Optional[dict[str, Any]] = None,
        **kwargs
    ) -> "CompanionEngine":
        """Load configuration, configure logging and build an engine."""
        config = load_config(config_dir, overrides)
        configure_logging(level=config.logging.level, format_json=config.logging.format_json)
        return cls(config, **kwargs)

    def start(self) -> View:
        return self.controller.start()

    def note_session(self) -> NoteSession:
        return NoteSession(self.store, self.config.notes)

    def chat_session(self) -> ChatSession:
        """Chat grounded in whatever plan is open on the dashboard."""
        return ChatSession(self.service, plan=self.controller.plan)
