"""Release configuration model.

A release configuration is a YAML document (JSON is accepted too) shaped
like::

    tag: v1.1.0
    name: hello
    commit-include:
      contains:
        - app/hello
    commit-exclude:
      prefixes:
        - "Merge pull request #"
    commit-categories:
      - title: Breaking Changes
        contains:
          - change-category/breaking-change
      - title: Internal Changes
    release-note-generator:
      show-committer: true
      use-release-note-block: true

Every matcher defaults to an empty rule. A category with an empty rule is
the catch-all bucket.
"""

import logging
from pathlib import Path
from typing import Any, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator


logger = logging.getLogger(__name__)

TAG_REQUIRED = "tag must be specified"
CATEGORY_ID_PREFIX = "_category_"

# Sections that fall back to their defaults when given with no value
SECTION_KEYS = frozenset({
    "commit-include", "commit_include",
    "commit-exclude", "commit_exclude",
    "commit-categories", "commit_categories",
    "release-note-generator", "release_note_generator",
})


class ConfigError(Exception):
    """Raised when a release configuration is malformed or invalid."""

    pass


class CommitMatcherConfig(BaseModel):
    """Substring rules matched against a commit's text.

    A rule matches when the text contains any of ``contains``, starts with
    any of ``prefixes`` or ends with any of ``suffixes``.
    """

    model_config = ConfigDict(frozen=True)

    contains: Tuple[str, ...] = ()
    prefixes: Tuple[str, ...] = ()
    suffixes: Tuple[str, ...] = ()

    @field_validator('contains', 'prefixes', 'suffixes', mode='before')
    @classmethod
    def coerce_to_tuple(cls, v):
        """Accept a missing value or a single string in place of a list."""
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return v

    def is_empty(self) -> bool:
        return not (self.contains or self.prefixes or self.suffixes)


class CommitCategoryConfig(CommitMatcherConfig):
    """A release-note section and the rule that selects its commits."""

    id: str = ""
    title: str = ""

    @property
    def display_title(self) -> str:
        return self.title or self.id


class ReleaseNoteGeneratorConfig(BaseModel):
    """Options controlling how release notes are produced."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    show_committer: bool = Field(default=False, alias='show-committer')
    use_release_note_block: bool = Field(default=False, alias='use-release-note-block')


class ReleaseConfig(BaseModel):
    """Parsed and validated release configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tag: str = Field(default="", validate_default=True)
    name: str = ""
    commit_include: CommitMatcherConfig = Field(
        default_factory=CommitMatcherConfig, alias='commit-include'
    )
    commit_exclude: CommitMatcherConfig = Field(
        default_factory=CommitMatcherConfig, alias='commit-exclude'
    )
    commit_categories: Tuple[CommitCategoryConfig, ...] = Field(
        default=(), alias='commit-categories'
    )
    release_note_generator: ReleaseNoteGeneratorConfig = Field(
        default_factory=ReleaseNoteGeneratorConfig, alias='release-note-generator'
    )

    @model_validator(mode='before')
    @classmethod
    def fill_defaults(cls, data: Any) -> Any:
        """Default empty sections and name categories that have no id.

        A section given with no value (``commit-include:``) is the same as
        an absent one. Every category without an id gets ``_category_<index>``.
        """
        if not isinstance(data, dict):
            return data

        data = {k: v for k, v in data.items() if v is not None or k not in SECTION_KEYS}

        key = 'commit-categories' if 'commit-categories' in data else 'commit_categories'
        categories = data.get(key)
        if not categories:
            return data

        assigned = []
        for i, category in enumerate(categories):
            if isinstance(category, dict) and not category.get('id'):
                category = {**category, 'id': f"{CATEGORY_ID_PREFIX}{i}"}
            elif isinstance(category, CommitCategoryConfig) and not category.id:
                category = category.model_copy(update={'id': f"{CATEGORY_ID_PREFIX}{i}"})
            assigned.append(category)

        return {**data, key: assigned}

    @field_validator('tag')
    @classmethod
    def tag_must_be_set(cls, v):
        if not v:
            raise ValueError(TAG_REQUIRED)
        return v

    @model_validator(mode='after')
    def check_category_ids(self) -> 'ReleaseConfig':
        seen = set()
        for category in self.commit_categories:
            if category.id in seen:
                raise ValueError(f"duplicate category id: {category.id}")
            seen.add(category.id)
        return self

    def category(self, category_id: str):
        """Return the category with the given id, or None."""
        for category in self.commit_categories:
            if category.id == category_id:
                return category
        return None


def parse_release_config(data: Union[bytes, str]) -> ReleaseConfig:
    """Parse a release configuration document.

    Args:
        data: Raw YAML or JSON document

    Returns:
        Validated release configuration

    Raises:
        ConfigError: If the document is malformed, has no tag, or fails validation
    """
    if isinstance(data, bytes):
        try:
            data = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ConfigError(f"Release config is not valid UTF-8: {e}") from e

    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed release config: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Malformed release config: expected a mapping, got {type(raw).__name__}"
        )

    # The tag is checked ahead of everything else so that a missing tag is
    # always reported as such.
    tag = raw.get('tag')
    if tag is None or tag == "":
        raise ConfigError(TAG_REQUIRED)
    if isinstance(tag, (int, float)) and not isinstance(tag, bool):
        raw = {**raw, 'tag': str(tag)}
    elif not isinstance(tag, str):
        raise ConfigError(f"tag must be a string, got {type(tag).__name__}")

    try:
        config = ReleaseConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid release config: {e}") from e

    logger.debug(
        "Parsed release config for tag %s with %d categories",
        config.tag, len(config.commit_categories)
    )
    return config


def load_release_config(path: Union[str, Path]) -> ReleaseConfig:
    """Load and parse a release configuration file.

    Args:
        path: Path to the configuration file

    Returns:
        Validated release configuration
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ConfigError(f"Error loading release config {path}: {e}") from e

    return parse_release_config(data)
