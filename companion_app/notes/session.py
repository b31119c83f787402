"""Note editor session with periodic autosave."""

from typing import Optional

from ..config.defaults import NotesParams
from ..data.models import LogEntry
from ..logging.config import get_logger
from ..persistence.plan_store import PlanStore

logger = get_logger(__name__)


class NoteSession:
    """
    Editing state for the notes view.

    Edits only mark the session dirty; ``autosave`` (called on a timer, every
    ``autosave_interval`` seconds) writes them. A new note is created on the
    first autosave that has a non-blank title or body, and every later tick
    while dirty updates it.
    """

    def __init__(self, store: PlanStore, config: Optional[NotesParams] = None):
        self.store = store
        self.config = config or NotesParams()
        self.selected_id: Optional[str] = None
        self.title = ""
        self.body = ""
        self.dirty = False
        self._last_autosave: Optional[float] = None

    @property
    def autosave_interval(self) -> float:
        return self.config.autosave_interval_seconds

    def entries(self) -> list[LogEntry]:
        return self.store.get_all_log_entries()

    def select(self, entry_id: Optional[str]) -> Optional[LogEntry]:
        """Save pending edits, then load ``entry_id`` into the editor."""
        self.autosave()
        entry = self.store.get_log_entry(entry_id) if entry_id else None
        self.selected_id = entry.id if entry else None
        self.title = entry.title if entry else ""
        self.body = entry.body if entry else ""
        self.dirty = False
        return entry

    def new_entry(self) -> None:
        """Save pending edits and start a blank note."""
        self.select(None)

    def edit(self, title: Optional[str] = None, body: Optional[str] = None) -> None:
        if title is not None:
            self.title = title
        if body is not None:
            self.body = body
        self.dirty = True

    def autosave(self) -> Optional[str]:
        """
        Write pending edits.

        Returns:
            Id of the saved entry, or None when nothing was written
        """
        if not self.dirty:
            return None

        title = self.title.strip() or self.config.untitled_title
        saved_id = None
        if self.selected_id:
            self.store.update_log_entry(self.selected_id, title=title, body=self.body)
            saved_id = self.selected_id
        elif self.title.strip() or self.body.strip():
            saved_id = self.store.save_log_entry(title=title, body=self.body)
            self.selected_id = saved_id
            logger.info("Created note", entry_id=saved_id)

        self.dirty = False
        return saved_id

    def tick(self, now: float) -> Optional[str]:
        """Autosave if at least ``autosave_interval`` seconds passed since the last tick that saved."""
        if self._last_autosave is not None and now - self._last_autosave < self.autosave_interval:
            return None
        self._last_autosave = now
        return self.autosave()

    def delete(self) -> None:
        """Delete the selected note and clear the editor."""
        if self.selected_id:
            self.store.delete_log_entry(self.selected_id)
            logger.info("Deleted note", entry_id=self.selected_id)
        self.selected_id = None
        self.title = ""
        self.body = ""
        self.dirty = False
