"""Revision collaborator: the seam between the engine and version control."""

from .filters import apply_commit_filters, glob_to_regex, is_excluded
from .git_source import GitRevisionSource
from .interfaces import RevisionSource
from .models import ChangedFile, CommitInfo, DiffFilters, DiffSummary, FileDiff

__all__ = [
    "RevisionSource",
    "GitRevisionSource",
    "DiffFilters",
    "DiffSummary",
    "ChangedFile",
    "FileDiff",
    "CommitInfo",
    "apply_commit_filters",
    "glob_to_regex",
    "is_excluded",
]
