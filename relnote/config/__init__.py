"""Configuration module."""

from .release import (
    CommitCategoryConfig,
    CommitMatcherConfig,
    ConfigError,
    ReleaseConfig,
    ReleaseNoteGeneratorConfig,
    load_release_config,
    parse_release_config,
)
from .settings import (
    Settings,
    get_settings,
    find_config_file,
    create_sample_config,
)

__all__ = [
    "CommitCategoryConfig",
    "CommitMatcherConfig",
    "ConfigError",
    "ReleaseConfig",
    "ReleaseNoteGeneratorConfig",
    "load_release_config",
    "parse_release_config",
    "Settings",
    "get_settings",
    "find_config_file",
    "create_sample_config",
]
