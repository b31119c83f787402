"""Plan and note persistence over a single serialized blob."""

import json
import random
import string
from dataclasses import replace
from typing import Any, Optional

from ..data.models import LogEntry, Plan, PlanRecord, StoreBlob, UserProfile
from ..logging.config import get_storage_logger
from ..utils.time import Clock, now_ms
from .backends import KeyValueBackend

CURRENT_VERSION = 1
DEFAULT_STORAGE_KEY = "learning-companion-data"
UNTITLED = "Untitled"

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9


def default_blob() -> StoreBlob:
    """Empty store contents at the current schema version."""
    return StoreBlob(version=CURRENT_VERSION, plans={}, active_plan_id=None, log_entries={})


class PlanStore:
    """
    Durable CRUD over plans and log entries.

    The whole state is one JSON blob stored under a single key. Every mutating
    operation loads the blob, changes it in memory and writes it back in full,
    so a single writer is assumed. Reads never raise: an absent or corrupt
    blob yields the empty default. Writes never raise either: a failed write
    is logged and reported through ``last_write_ok``.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None
    ):
        self.backend = backend
        self.storage_key = storage_key
        self.clock = clock or now_ms
        self.rng = rng or random.Random()
        self.logger = get_storage_logger("storage.plans").bind(storage_key=storage_key)
        self.last_write_ok = True

    # Blob I/O

    def load(self) -> StoreBlob:
        """Deserialize the stored blob, falling back to the default on any problem."""
        try:
            raw = self.backend.get(self.storage_key)
        except Exception as e:
            self.logger.error("Failed to read store blob", error=str(e))
            return default_blob()

        if not raw:
            return default_blob()

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError(f"store blob must be an object, got {type(data).__name__}")
            return StoreBlob.from_dict(self._migrate(data))
        except (ValueError, TypeError, KeyError, AttributeError, RecursionError) as e:
            self.logger.error(
                "Store blob is corrupt, substituting empty store",
                error=str(e),
                raw_length=len(raw)
            )
            return default_blob()

    def _migrate(self, data: dict[str, Any]) -> dict[str, Any]:
        """Bring an older blob up to the current version."""
        version = data.get("version")
        if not isinstance(version, int) or version < CURRENT_VERSION:
            self.logger.info("Migrating store blob", from_version=version, to_version=CURRENT_VERSION)
            data["version"] = CURRENT_VERSION
        if not data.get("logEntries"):
            data["logEntries"] = {}
        if not data.get("plans"):
            data["plans"] = {}
        return data

    def save(self, blob: StoreBlob) -> bool:
        """
        Serialize and write the full blob.

        Returns:
            True if the write reached the backend, False if it failed
        """
        try:
            self.backend.set(self.storage_key, json.dumps(blob.to_dict()))
        except Exception as e:
            self.last_write_ok = False
            self.logger.error("Failed to write store blob", error=str(e))
            return False

        self.last_write_ok = True
        return True

    def generate_id(self, prefix: str) -> str:
        """Return ``{prefix}_{epoch_ms}_{random base36 suffix}``."""
        suffix = "".join(self.rng.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
        return f"{prefix}_{self.clock()}_{suffix}"

    def _touch(self, previous: int) -> int:
        # updated_at must not go backwards even if the wall clock does
        return max(self.clock(), previous)

    # Plans

    def save_plan(self, profile: UserProfile, plan: Plan) -> str:
        """Persist a newly confirmed plan and make it the active plan."""
        blob = self.load()
        plan_id = self.generate_id("plan")
        now = self.clock()

        blob.plans[plan_id] = PlanRecord(
            id=plan_id,
            created_at=now,
            updated_at=now,
            user_profile=profile,
            plan=plan,
        )
        blob.active_plan_id = plan_id

        self.save(blob)
        self.logger.info("Plan saved", plan_id=plan_id, topic=plan.topic, days=len(plan.days))
        return plan_id

    def update_plan(self, plan_id: str, plan: Plan) -> None:
        """Replace a stored plan. Unknown ids are ignored."""
        blob = self.load()
        record = blob.plans.get(plan_id)
        if record is None:
            self.logger.debug("Ignoring update for unknown plan", plan_id=plan_id)
            return

        blob.plans[plan_id] = replace(record, plan=plan, updated_at=self._touch(record.updated_at))
        self.save(blob)

    def get_plan(self, plan_id: str) -> Optional[PlanRecord]:
        return self.load().plans.get(plan_id)

    def get_all_plans(self) -> list[PlanRecord]:
        """All plans, most recently updated first."""
        return sorted(self.load().plans.values(), key=lambda record: record.updated_at, reverse=True)

    def has_plans(self) -> bool:
        return bool(self.load().plans)

    def set_active_plan(self, plan_id: Optional[str]) -> None:
        blob = self.load()
        blob.active_plan_id = plan_id
        self.save(blob)

    def get_active_plan_id(self) -> Optional[str]:
        return self.load().active_plan_id

    # Log entries

    def save_log_entry(
        self,
        title: str = "",
        body: str = "",
        entry_id: Optional[str] = None,
        created_at: Optional[int] = None
    ) -> str:
        """Create (or overwrite) a log entry and return its id."""
        blob = self.load()
        entry_id = entry_id or self.generate_id("log")
        now = self.clock()

        blob.log_entries[entry_id] = LogEntry(
            id=entry_id,
            title=title or UNTITLED,
            body=body or "",
            created_at=created_at if created_at is not None else now,
            updated_at=now,
        )

        self.save(blob)
        self.logger.debug("Log entry saved", entry_id=entry_id)
        return entry_id

    def update_log_entry(
        self,
        entry_id: str,
        title: Optional[str] = None,
        body: Optional[str] = None
    ) -> None:
        """Merge updates into a log entry. Unknown ids are ignored."""
        blob = self.load()
        entry = blob.log_entries.get(entry_id)
        if entry is None:
            self.logger.debug("Ignoring update for unknown log entry", entry_id=entry_id)
            return

        blob.log_entries[entry_id] = replace(
            entry,
            title=entry.title if title is None else title,
            body=entry.body if body is None else body,
            updated_at=self._touch(entry.updated_at),
        )
        self.save(blob)

    def delete_log_entry(self, entry_id: str) -> None:
        blob = self.load()
        if blob.log_entries.pop(entry_id, None) is not None:
            self.save(blob)
            self.logger.debug("Log entry deleted", entry_id=entry_id)

    def get_log_entry(self, entry_id: str) -> Optional[LogEntry]:
        return self.load().log_entries.get(entry_id)

    def get_all_log_entries(self) -> list[LogEntry]:
        """All log entries, most recently updated first."""
        return sorted(self.load().log_entries.values(), key=lambda entry: entry.updated_at, reverse=True)
