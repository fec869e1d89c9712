"""Settings management for Relnote."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Release config locations, relative to the working directory
CONFIG_SEARCH_PATHS = [
    "release.yaml",
    ".release.yaml",
    "release.yml",
    ".github/release.yaml",
    ".github/release.yml",
]

SAMPLE_CONFIG = {
    "tag": "v0.1.0",
    "name": "v0.1.0",
    "commit-exclude": {
        "prefixes": ["Merge pull request #"],
    },
    "commit-categories": [
        {
            "id": "breaking-change",
            "title": "Breaking Changes",
            "contains": ["change-category/breaking-change"],
        },
        {
            "id": "new-feature",
            "title": "New Features",
            "contains": ["change-category/new-feature"],
        },
        {
            "id": "notable-change",
            "title": "Notable Changes",
            "contains": ["change-category/notable-change"],
        },
        {
            "id": "internal-change",
            "title": "Internal Changes",
        },
    ],
    "release-note-generator": {
        "show-committer": False,
        "use-release-note-block": True,
    },
}


class Settings(BaseSettings):
    """Settings for the Relnote command line."""

    config_file: Optional[str] = None
    commits_file: Optional[str] = None
    output: Optional[str] = None

    model_config = SettingsConfigDict(env_prefix="RELNOTE_", case_sensitive=False)

    @field_validator('config_file', 'commits_file', 'output')
    @classmethod
    def expand_user(cls, v):
        """Expand ``~`` in configured paths."""
        if v:
            return os.path.expanduser(v)
        return v


def find_config_file(root: Optional[str] = None) -> Optional[str]:
    """Find a release config file in common locations.

    Args:
        root: Directory to search from, defaults to the working directory

    Returns:
        Path to config file or None if not found
    """
    base = Path(root) if root else Path.cwd()

    for path_str in CONFIG_SEARCH_PATHS:
        path = base / path_str
        if path.exists() and path.is_file():
            return str(path)

    return None


def get_settings(config_file: Optional[str] = None, **overrides) -> Settings:
    """Load settings from environment variables and explicit arguments.

    Explicit arguments take precedence over ``RELNOTE_*`` variables. When no
    config file is given either way, common locations are searched.

    Args:
        config_file: Optional path to the release config file
        **overrides: Other settings given on the command line

    Returns:
        Settings object
    """
    explicit = {k: v for k, v in overrides.items() if v is not None}
    if config_file:
        explicit['config_file'] = config_file

    settings = Settings(**explicit)

    if not settings.config_file:
        found = find_config_file()
        if found:
            settings = settings.model_copy(update={'config_file': found})

    return settings


def create_sample_config(path: str = "release.yaml") -> None:
    """Create a sample release config file.

    Args:
        path: Path where to create the sample config file
    """
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(SAMPLE_CONFIG, f, sort_keys=False)
