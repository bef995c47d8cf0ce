"""Values exchanged with a revision source."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional


def split_patterns(value: Optional[str]) -> list[str]:
    """Split a comma-separated pattern list, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass(frozen=True)
class DiffFilters:
    """Optional narrowing applied to the diff and the commit log.

    Attributes:
        commit: Keep only the commit whose hash starts with this prefix
        from_commit: First commit (hash prefix) of a log slice
        to_commit: Last commit (hash prefix) of a log slice
        since: Lower date bound, passed through to ``git log --since``
        until: Upper date bound, passed through to ``git log --until``
        author: Case-insensitive author-name substring
        file: Single path or pathspec
        files: Comma-separated include pathspecs (wins over ``file``)
        exclude: Comma-separated globs; ``*`` is any sequence, ``?`` any char
    """

    commit: Optional[str] = None
    from_commit: Optional[str] = None
    to_commit: Optional[str] = None
    since: Optional[str] = None
    until: Optional[str] = None
    author: Optional[str] = None
    file: Optional[str] = None
    files: Optional[str] = None
    exclude: Optional[str] = None

    def as_dict(self) -> dict[str, Any]:
        """Only the filters that are set."""
        return {key: value for key, value in asdict(self).items() if value is not None}

    @property
    def is_empty(self) -> bool:
        return not self.as_dict()

    @property
    def include_patterns(self) -> list[str]:
        if self.files:
            return split_patterns(self.files)
        if self.file:
            return [self.file]
        return []

    @property
    def exclude_patterns(self) -> list[str]:
        return split_patterns(self.exclude)


@dataclass(frozen=True)
class DiffSummary:
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class ChangedFile:
    """One entry of the changed-file list.

    ``status`` is one of added, modified, deleted, renamed. ``old_path`` is
    only set for renames.
    """

    path: str
    status: str
    old_path: Optional[str] = None


@dataclass(frozen=True)
class FileDiff:
    text: str = ""
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class CommitInfo:
    hash: str
    abbrev_hash: str
    author: str
    date: str
    message: str
    author_email: str = ""

    def matches_prefix(self, prefix: str) -> bool:
        return self.hash.startswith(prefix) or self.abbrev_hash.startswith(prefix)
