"""Commit records consumed and produced by the release note generator."""

import json
from typing import IO, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class Commit(BaseModel):
    """One version-control commit as supplied by the commit feed."""

    model_config = ConfigDict(frozen=True)

    subject: str = ""
    body: str = ""
    hash: str = ""
    abbreviated_hash: str = ""
    author: str = ""
    committer: str = ""
    parent_hashes: Tuple[str, ...] = ()

    @property
    def text(self) -> str:
        """Subject and body joined by a newline."""
        return f"{self.subject}\n{self.body}"

    @property
    def is_merge(self) -> bool:
        return len(self.parent_hashes) > 1


class ReleaseCommit(BaseModel):
    """A commit selected for the release note, with its category and note."""

    model_config = ConfigDict(frozen=True)

    commit: Commit
    category_id: str = ""
    release_note: str = Field(min_length=1)
    pull_request_number: int = 0


class ReleaseProposal(BaseModel):
    """Everything the renderer needs for one release."""

    model_config = ConfigDict(frozen=True)

    tag: str
    pre_tag: str = ""
    commits: Tuple[ReleaseCommit, ...] = ()
    prerelease: bool = False


def load_commits(stream: IO[str]) -> List[Commit]:
    """Read commits from a JSON array of commit objects.

    Args:
        stream: Text stream holding the JSON document

    Returns:
        Commits in feed order

    Raises:
        ValueError: If the document is not a JSON array of commit objects
    """
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed commit feed: {e}") from e

    if not isinstance(data, list):
        raise ValueError("Malformed commit feed: expected a JSON array")

    commits = []
    for i, item in enumerate(data):
        try:
            commits.append(Commit.model_validate(item))
        except ValidationError as e:
            raise ValueError(f"Malformed commit at index {i}: {e}") from e

    return commits
