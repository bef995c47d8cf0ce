"""Pure post-filters for changed-file lists and commit logs."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from .models import ChangedFile, CommitInfo, DiffFilters


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Simple glob: ``*`` is any sequence, ``?`` any single character.

    The result is searched, not anchored, so ``test`` excludes any path
    containing "test".
    """
    escaped = re.escape(pattern)
    return re.compile(escaped.replace(r"\*", ".*").replace(r"\?", "."))


def is_excluded(path: str, patterns: Iterable[str]) -> bool:
    return any(glob_to_regex(p).search(path) for p in patterns)


def exclude_files(files: Sequence[ChangedFile], patterns: Sequence[str]) -> list[ChangedFile]:
    if not patterns:
        return list(files)
    return [f for f in files if not is_excluded(f.path, patterns)]


def filter_by_author(commits: Sequence[CommitInfo], author: Optional[str]) -> list[CommitInfo]:
    if not author:
        return list(commits)
    needle = author.lower()
    return [c for c in commits if needle in c.author.lower()]


def _index_of(commits: Sequence[CommitInfo], prefix: str) -> int:
    for index, commit in enumerate(commits):
        if commit.matches_prefix(prefix):
            return index
    return -1


def filter_commit_range(
    commits: Sequence[CommitInfo],
    from_commit: Optional[str] = None,
    to_commit: Optional[str] = None,
) -> list[CommitInfo]:
    """Slice the log between two hash prefixes, both inclusive.

    The log is newest-first, so ``from_commit`` is expected to appear before
    ``to_commit``. An unknown prefix leaves that end of the slice open.
    """
    start = 0
    end = len(commits)

    if from_commit:
        found = _index_of(commits, from_commit)
        if found != -1:
            start = found

    if to_commit:
        found = _index_of(commits, to_commit)
        if found != -1:
            end = found + 1

    return list(commits[start:end])


def filter_specific_commit(
    commits: Sequence[CommitInfo], commit: Optional[str]
) -> list[CommitInfo]:
    if not commit:
        return list(commits)
    return [c for c in commits if c.matches_prefix(commit)]


def apply_commit_filters(
    commits: Sequence[CommitInfo], filters: Optional[DiffFilters]
) -> list[CommitInfo]:
    """Author, then commit range, then specific commit."""
    if filters is None:
        return list(commits)
    result = filter_by_author(commits, filters.author)
    if filters.from_commit or filters.to_commit:
        result = filter_commit_range(result, filters.from_commit, filters.to_commit)
    return filter_specific_commit(result, filters.commit)
