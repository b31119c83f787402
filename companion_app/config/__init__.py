"""
Configuration module.

Frozen dataclass defaults, YAML overrides and environment credentials for
storage, generation, search, notes and logging.
"""
