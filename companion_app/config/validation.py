"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_storage_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate storage parameters."""
        errors = []

        if "storage_key" in params:
            value = params["storage_key"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="storage.storage_key",
                    message="Must be a non-empty string",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_generation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate generation parameters."""
        errors = []

        if "plan_days" in params:
            value = params["plan_days"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="generation.plan_days",
                    message="Must be a positive integer",
                    value=value
                ))

        if "temperature" in params:
            value = params["temperature"]
            if not isinstance(value, (int, float)) or value < 0 or value > 2:
                errors.append(ValidationError(
                    field="generation.temperature",
                    message="Must be a number between 0 and 2",
                    value=value
                ))

        min_pathways = params.get("min_pathways", 1)
        max_pathways = params.get("max_pathways", min_pathways)
        if not isinstance(min_pathways, int) or min_pathways < 1:
            errors.append(ValidationError(
                field="generation.min_pathways",
                message="Must be a positive integer",
                value=min_pathways
            ))
        elif not isinstance(max_pathways, int) or max_pathways < min_pathways:
            errors.append(ValidationError(
                field="generation.max_pathways",
                message="Must be an integer no smaller than min_pathways",
                value=max_pathways
            ))

        return errors

    @staticmethod
    def validate_search_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate search parameters."""
        errors = []

        if "results_per_query" in params:
            value = params["results_per_query"]
            if not isinstance(value, int) or value < 1 or value > 10:
                errors.append(ValidationError(
                    field="search.results_per_query",
                    message="Must be an integer between 1 and 10",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="search.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_notes_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate notes parameters."""
        errors = []

        if "autosave_interval_seconds" in params:
            value = params["autosave_interval_seconds"]
            if not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="notes.autosave_interval_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        return errors

    @classmethod
    def validate(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate every section of a merged configuration dict."""
        errors = []
        errors.extend(cls.validate_storage_params(config.get("storage", {})))
        errors.extend(cls.validate_generation_params(config.get("generation", {})))
        errors.extend(cls.validate_search_params(config.get("search", {})))
        errors.extend(cls.validate_notes_params(config.get("notes", {})))
        errors.extend(cls.validate_logging_params(config.get("logging", {})))
        return errors
