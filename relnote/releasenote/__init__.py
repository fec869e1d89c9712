"""Release note generation module."""

from .commit import (
    Commit,
    ReleaseCommit,
    ReleaseProposal,
    load_commits,
)
from .generator import (
    matches,
    category_for,
    extract_release_note,
    pull_request_number,
    build_release_commits,
    render_release_note,
)

__all__ = [
    "Commit",
    "ReleaseCommit",
    "ReleaseProposal",
    "load_commits",
    "matches",
    "category_for",
    "extract_release_note",
    "pull_request_number",
    "build_release_commits",
    "render_release_note",
]
