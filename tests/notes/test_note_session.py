"""Tests for the note editor session."""

from companion_app.config.defaults import NotesParams
from companion_app.notes.session import NoteSession


class TestNoteSession:
    """Test NoteSession class."""

    def test_blank_session_does_not_create(self, store):
        """Test autosave with nothing typed creates no entry."""
        session = NoteSession(store)
        session.edit(title="   ", body="")

        assert session.autosave() is None
        assert store.get_all_log_entries() == []
        assert session.dirty is False

    def test_first_autosave_creates_entry(self, store):
        session = NoteSession(store)
        session.edit(body="Slices share backing arrays")

        entry_id = session.autosave()

        assert entry_id is not None
        assert session.selected_id == entry_id
        entry = store.get_log_entry(entry_id)
        assert entry.title == "Untitled"
        assert entry.body == "Slices share backing arrays"

    def test_later_autosaves_update(self, store):
        session = NoteSession(store)
        session.edit(title="Day 1")
        entry_id = session.autosave()

        session.edit(body="More text")
        assert session.autosave() == entry_id

        assert len(store.get_all_log_entries()) == 1
        assert store.get_log_entry(entry_id).body == "More text"

    def test_clean_session_does_not_write(self, store, backend):
        session = NoteSession(store)
        session.edit(title="x")
        session.autosave()
        writes = backend.write_count

        assert session.autosave() is None
        assert backend.write_count == writes

    def test_select_saves_pending_edits(self, store):
        """Test switching notes flushes the editor first."""
        other = store.save_log_entry(title="Other", body="other body")
        session = NoteSession(store)
        session.edit(title="Draft", body="draft body")

        entry = session.select(other)

        assert entry.title == "Other"
        assert session.title == "Other"
        assert session.body == "other body"
        titles = {entry.title for entry in store.get_all_log_entries()}
        assert titles == {"Other", "Draft"}

    def test_select_unknown_clears_editor(self, store):
        session = NoteSession(store)

        assert session.select("log_missing") is None
        assert session.selected_id is None
        assert session.title == ""

    def test_new_entry(self, store):
        existing = store.save_log_entry(title="Existing")
        session = NoteSession(store)
        session.select(existing)

        session.new_entry()

        assert session.selected_id is None
        assert session.title == ""
        assert session.body == ""

    def test_tick_honours_interval(self, store):
        session = NoteSession(store, NotesParams(autosave_interval_seconds=2.0))
        session.edit(title="First")
        entry_id = session.tick(0.0)
        assert entry_id is not None

        session.edit(body="typed quickly")
        assert session.tick(1.0) is None
        assert session.dirty is True

        assert session.tick(2.5) == entry_id
        assert store.get_log_entry(entry_id).body == "typed quickly"

    def test_delete(self, store):
        session = NoteSession(store)
        session.edit(title="Temporary")
        entry_id = session.autosave()

        session.delete()

        assert store.get_log_entry(entry_id) is None
        assert session.selected_id is None
        assert session.dirty is False

    def test_autosave_interval_default(self, store):
        assert NoteSession(store).autosave_interval == 2.0
