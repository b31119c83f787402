"""Default configuration parameters for the learning companion."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StorageParams:
    """Local key-value storage parameters."""
    db_path: str = "companion.db"                     # SQLite file backing the store
    storage_key: str = "learning-companion-data"      # Key holding the whole blob


@dataclass(frozen=True)
class GenerationParams:
    """Plan generation service parameters."""
    model: str = "gemini-2.5-flash"
    temperature: float = 0.7
    plan_days: int = 7                                # Days requested per plan
    min_pathways: int = 3
    max_pathways: int = 4
    api_key: Optional[str] = None                     # From GEMINI_API_KEY / GOOGLE_API_KEY


@dataclass(frozen=True)
class SearchParams:
    """Resource search (Google Custom Search) parameters."""
    endpoint: str = "https://www.googleapis.com/customsearch/v1"
    results_per_query: int = 5
    timeout_seconds: int = 10
    api_key: Optional[str] = None                     # From GOOGLE_SEARCH_API_KEY
    engine_id: Optional[str] = None                   # From GOOGLE_SEARCH_ENGINE_ID


@dataclass(frozen=True)
class NotesParams:
    """Note editor parameters."""
    autosave_interval_seconds: float = 2.0
    untitled_title: str = "Untitled"


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class CompanionConfig:
    """Complete configuration."""
    storage: StorageParams
    generation: GenerationParams
    search: SearchParams
    notes: NotesParams
    logging: LoggingParams


def get_default_config() -> CompanionConfig:
    """Get the default configuration instance."""
    return CompanionConfig(
        storage=StorageParams(),
        generation=GenerationParams(),
        search=SearchParams(),
        notes=NotesParams(),
        logging=LoggingParams(),
    )
