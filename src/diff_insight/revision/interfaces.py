"""Abstract revision source consumed by the change analyzer."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import ChangedFile, CommitInfo, DiffFilters, DiffSummary, FileDiff


class RevisionSource(ABC):
    """Read-only access to refs, diffs, file contents and commit logs.

    Diffs are always taken over the three-dot range ``target...source``:
    what the source ref has that the target ref lacks.

    Failure contract:
        RepositoryAccessError for unresolvable refs and failures to enumerate
        diffs or commit logs; ContentUnavailableError for a failed per-file
        fetch. ``file_content_at`` returns None when the path does not exist
        at that ref.
    """

    @abstractmethod
    def resolve_ref(self, ref: str) -> str:
        """Return the commit id a ref points at."""

    @abstractmethod
    def list_branches(self) -> list[str]:
        """Local and remote branch names, in the order the backend lists them."""

    @abstractmethod
    def diff_summary(
        self, target_ref: str, source_ref: str, filters: Optional[DiffFilters] = None
    ) -> DiffSummary:
        pass

    @abstractmethod
    def diff_files(
        self, target_ref: str, source_ref: str, filters: Optional[DiffFilters] = None
    ) -> list[ChangedFile]:
        pass

    @abstractmethod
    def file_diff(self, target_ref: str, source_ref: str, path: str) -> FileDiff:
        pass

    @abstractmethod
    def file_content_at(self, ref: str, path: str) -> Optional[str]:
        pass

    @abstractmethod
    def commit_log(
        self, ref: str, filters: Optional[DiffFilters] = None, limit: int = 500
    ) -> list[CommitInfo]:
        """Newest-first commits reachable from ``ref``, narrowed by filters."""
