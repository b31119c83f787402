"""Unit tests for the application coordinator."""

from dataclasses import replace
from unittest.mock import patch

from companion_app.chat.session import ChatSession
from companion_app.config.defaults import get_default_config
from companion_app.engine import CompanionEngine
from companion_app.notes.session import NoteSession
from companion_app.persistence.backends import MemoryKeyValueBackend, SqliteKeyValueBackend
from companion_app.services.gemini import GeminiPlanService
from companion_app.services.mock import MockPlanService
from companion_app.state.models import View


class TestCompanionEngine:
    """Test CompanionEngine class."""

    def test_wires_components(self):
        backend = MemoryKeyValueBackend()
        service = MockPlanService()

        engine = CompanionEngine(get_default_config(), backend=backend, service=service)

        assert engine.store.backend is backend
        assert engine.controller.store is engine.store
        assert engine.controller.service is service
        assert engine.search.is_configured is False

    def test_default_service_is_gemini(self):
        engine = CompanionEngine(get_default_config(), backend=MemoryKeyValueBackend())

        assert isinstance(engine.service, GeminiPlanService)
        assert engine.service.client is None
        assert engine.service.search is engine.search

    def test_default_backend_is_sqlite(self, tmp_path):
        defaults = get_default_config()
        config = replace(defaults, storage=replace(defaults.storage, db_path=str(tmp_path / "c.db")))

        engine = CompanionEngine(config, service=MockPlanService())

        assert isinstance(engine.backend, SqliteKeyValueBackend)
        assert (tmp_path / "c.db").exists()

    def test_start_and_sessions(self, sample_profile):
        engine = CompanionEngine(
            get_default_config(), backend=MemoryKeyValueBackend(), service=MockPlanService()
        )

        assert engine.start() == View.ONBOARDING
        assert isinstance(engine.note_session(), NoteSession)

        engine.controller.submit_profile(sample_profile)
        engine.controller.confirm_pathways(["path-1"])
        engine.controller.confirm_plan()
        chat = engine.chat_session()

        assert isinstance(chat, ChatSession)
        assert chat.plan is engine.controller.plan

    def test_create_loads_config_and_logging(self, tmp_path):
        with patch("companion_app.engine.configure_logging") as mock_configure:
            engine = CompanionEngine.create(
                config_dir=tmp_path,
                overrides={"logging": {"level": "DEBUG"}, "storage": {"storage_key": "k"}},
                backend=MemoryKeyValueBackend(),
                service=MockPlanService(),
            )

        mock_configure.assert_called_once_with(level="DEBUG", format_json=False)
        assert engine.store.storage_key == "k"
