"""Release note generation logic."""

import re
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import CommitCategoryConfig, CommitMatcherConfig, ReleaseConfig
from .commit import Commit, ReleaseCommit, ReleaseProposal


logger = logging.getLogger(__name__)

TITLE_UNCATEGORIZED = "Uncategorized"

# ```release-note ... ``` fenced block, but not ```release-notes
RELEASE_NOTE_BLOCK_RE = re.compile(r"```release-note(?![\w-])(.*?)```", re.DOTALL)

# "Fix the thing (#123)" as produced by squash merges
SQUASH_PR_RE = re.compile(r"\(#(\d+)\)\s*$")
# "Merge pull request #123 from owner/branch"
MERGE_PR_RE = re.compile(r"^Merge pull request #(\d+)")
# GitLab adds "See merge request group/project!123" to merge commits
MERGE_REQUEST_RE = re.compile(r"(?:^|\n)See merge request \S+!(\d+)\s*$")


def matches(text: str, rule: CommitMatcherConfig) -> bool:
    """Check whether text satisfies a matcher rule.

    Args:
        text: Text to check, usually the subject and body of a commit
        rule: Matcher rule

    Returns:
        True if text contains any of ``rule.contains``, starts with any of
        ``rule.prefixes`` or ends with any of ``rule.suffixes``. An empty
        rule matches nothing.
    """
    for s in rule.contains:
        if s in text:
            return True
    for s in rule.prefixes:
        if text.startswith(s):
            return True
    for s in rule.suffixes:
        if text.endswith(s):
            return True
    return False


def category_for(text: str, categories: Sequence[CommitCategoryConfig]) -> str:
    """Return the id of the first category matching text.

    A category with an empty rule is a catch-all and matches any text that
    reaches it. Returns an empty string when nothing matches.
    """
    for category in categories:
        if category.is_empty() or matches(text, category):
            return category.id
    return ""


def extract_release_note(commit: Commit, use_release_note_block: bool = True) -> str:
    """Extract the release note text of a commit.

    The interior of a ```release-note block in the body wins when enabled
    and not blank; otherwise the subject is used.
    """
    if use_release_note_block:
        match = RELEASE_NOTE_BLOCK_RE.search(commit.body)
        if match:
            note = match.group(1).strip()
            if note:
                return note

    for fallback in (commit.subject, commit.abbreviated_hash, commit.hash):
        note = fallback.strip()
        if note:
            return note
    return "(no subject)"


def pull_request_number(commit: Commit) -> int:
    """Extract the pull/merge request number of a commit, or 0."""
    subject = commit.subject.strip()
    for pattern in (MERGE_PR_RE, SQUASH_PR_RE):
        match = pattern.search(subject)
        if match:
            return int(match.group(1))

    match = MERGE_REQUEST_RE.search(commit.body)
    if match:
        return int(match.group(1))
    return 0


def build_release_commits(commits: Optional[Iterable[Commit]], config: ReleaseConfig) -> List[ReleaseCommit]:
    """Filter and categorize commits for a release note.

    Args:
        commits: Commits in history order
        config: Release configuration

    Returns:
        Release commits in input order, without excluded commits and, when
        an include rule is configured, without commits it does not match
    """
    release_commits: List[ReleaseCommit] = []
    if not commits:
        return release_commits

    include_all = config.commit_include.is_empty()
    use_block = config.release_note_generator.use_release_note_block

    for commit in commits:
        text = commit.text

        if matches(text, config.commit_exclude):
            logger.debug(f"Excluding commit {commit.hash or commit.subject!r}")
            continue

        if not include_all and not matches(text, config.commit_include):
            logger.debug(f"Commit {commit.hash or commit.subject!r} does not match include rule")
            continue

        category_id = category_for(text, config.commit_categories)
        release_commits.append(ReleaseCommit(
            commit=commit,
            category_id=category_id,
            release_note=extract_release_note(commit, use_block),
            pull_request_number=pull_request_number(commit),
        ))

    logger.debug(f"Selected {len(release_commits)} commits for tag {config.tag}")
    return release_commits


def _render_commit(commit: ReleaseCommit, show_committer: bool) -> str:
    # Continuation lines stay inside the list item
    line = "* " + commit.release_note.replace("\n", "\n  ")
    pr_ref = f"(#{commit.pull_request_number})"
    if commit.pull_request_number and pr_ref not in commit.release_note:
        line += f" {pr_ref}"
    if show_committer:
        committer = commit.commit.committer or commit.commit.author
        if committer:
            line += f" - by @{committer}"
    return line


def render_release_note(proposal: ReleaseProposal, config: Optional[ReleaseConfig] = None) -> str:
    """Render a release note in Markdown.

    Args:
        proposal: Tags and classified commits of the release
        config: Release configuration; categories give the section order

    Returns:
        Markdown document
    """
    categories = config.commit_categories if config else ()
    show_committer = config.release_note_generator.show_committer if config else False

    grouped: Dict[str, List[ReleaseCommit]] = {}
    uncategorized: List[ReleaseCommit] = []
    for commit in proposal.commits:
        if config and commit.category_id and config.category(commit.category_id) is not None:
            grouped.setdefault(commit.category_id, []).append(commit)
        else:
            uncategorized.append(commit)

    sections = [(category.display_title, grouped.get(category.id, [])) for category in categories]
    sections.append((TITLE_UNCATEGORIZED, uncategorized))

    kind = "Pre-release" if proposal.prerelease else "Release"
    header = f"## {kind} {proposal.tag}"
    if proposal.pre_tag:
        header += f" with changes since {proposal.pre_tag}"

    lines = [header, ""]
    for title, commits in sections:
        if not commits:
            continue
        lines.append(f"### {title}")
        lines.append("")
        lines.extend(_render_commit(c, show_committer) for c in commits)
        lines.append("")

    return '\n'.join(lines)
