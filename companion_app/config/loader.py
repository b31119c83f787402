"""Configuration loader with 3-tier parameter precedence."""

import os
from dataclasses import dataclass, fields, is_dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import CompanionConfig, get_default_config
from .validation import ConfigValidator

# Environment variable -> (section, field)
ENV_CREDENTIALS = {
    "GEMINI_API_KEY": ("generation", "api_key"),
    "GOOGLE_API_KEY": ("generation", "api_key"),
    "GOOGLE_SEARCH_API_KEY": ("search", "api_key"),
    "GOOGLE_SEARCH_ENGINE_ID": ("search", "engine_id"),
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: CompanionConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from companion.yaml, if present."""
        config_file = self.config_dir / "companion.yaml"

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        return file_config or {}

    def load_env_config(self, environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
        """Collect credentials from the environment."""
        environ = os.environ if environ is None else environ
        config: dict[str, Any] = {}

        for var, (section, field_name) in ENV_CREDENTIALS.items():
            value = environ.get(var)
            # GEMINI_API_KEY wins over GOOGLE_API_KEY
            if value and field_name not in config.get(section, {}):
                config.setdefault(section, {})[field_name] = value

        return config

    def merge_config(
        self,
        overrides: Optional[dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. companion.yaml, then credentials from the environment
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_file_config())
        config = self._deep_merge(config, self.load_env_config(environ))

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(
        self,
        overrides: Optional[dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None
    ) -> CompanionConfig:
        """Build a validated CompanionConfig from all tiers."""
        merged = self.merge_config(overrides, environ)

        errors = ConfigValidator.validate(merged)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value!r})" for err in errors]
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(error_msgs),
                setting=errors[0].field,
                context={"errors": error_msgs}
            )

        return self._dict_to_dataclass(self.defaults, merged)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if is_dataclass(obj):
            result = {}
            for field in fields(obj):
                value = getattr(obj, field.name)
                if is_dataclass(value):
                    result[field.name] = self._dataclass_to_dict(value)
                else:
                    result[field.name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _dict_to_dataclass(self, template: Any, values: dict[str, Any]) -> Any:
        """Rebuild a frozen dataclass tree from merged values, ignoring unknown keys."""
        changes = {}
        for field in fields(template):
            if field.name not in values:
                continue
            current = getattr(template, field.name)
            value = values[field.name]
            if is_dataclass(current) and isinstance(value, dict):
                changes[field.name] = self._dict_to_dataclass(current, value)
            else:
                changes[field.name] = value
        return replace(template, **changes)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(
    config_dir: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None
) -> CompanionConfig:
    """Load configuration from the default locations."""
    return ConfigLoader.create(config_dir).load(overrides)
