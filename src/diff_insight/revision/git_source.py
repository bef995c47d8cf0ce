"""RevisionSource backed by the git command line.

Every operation is a read-only git subcommand run via subprocess with a
timeout. Nothing here writes to the repository, fetches, or checks out.
"""

import re
import subprocess
from pathlib import Path
from typing import Optional

from ..exceptions import ContentUnavailableError, RepositoryAccessError
from ..logging_config import get_logger
from .filters import apply_commit_filters, exclude_files
from .interfaces import RevisionSource
from .models import ChangedFile, CommitInfo, DiffFilters, DiffSummary, FileDiff

logger = get_logger(__name__)

# "3 files changed, 10 insertions(+), 2 deletions(-)"; either count may be absent
_SHORTSTAT_RE = re.compile(
    r"(\d+) files? changed(?:, (\d+) insertions?\(\+\))?(?:, (\d+) deletions?\(-\))?"
)

# git show reports a missing path with one of these
_MISSING_PATH_RE = re.compile(r"does not exist in|exists on disk, but not in")

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = _FIELD_SEP.join(["%H", "%h", "%an", "%ae", "%aI", "%s"]) + _RECORD_SEP

_STATUS_MAP = {
    "A": "added",
    "C": "added",
    "M": "modified",
    "T": "modified",
    "D": "deleted",
    "R": "renamed",
}


def parse_shortstat(raw: str) -> DiffSummary:
    match = _SHORTSTAT_RE.search(raw)
    if not match:
        return DiffSummary()
    files, insertions, deletions = match.groups()
    return DiffSummary(
        files_changed=int(files),
        insertions=int(insertions or 0),
        deletions=int(deletions or 0),
    )


def parse_name_status(raw: str) -> list[ChangedFile]:
    """Parse ``git diff --name-status -z`` output.

    Fields are NUL-terminated and paths come through verbatim, without the
    quoting and octal escapes git applies to non-ASCII names otherwise.
    Rename and copy entries carry a similarity score and two paths::

        R087<NUL>old/path.js<NUL>new/path.js<NUL>
    """
    files: list[ChangedFile] = []
    fields = iter(raw.split("\0"))
    for code in fields:
        if not code:
            continue
        letter = code[:1]
        paths = [next(fields, "") for _ in range(2 if letter in ("R", "C") else 1)]
        status = _STATUS_MAP.get(letter)
        if status is None or not all(paths):
            logger.debug("Skipping name-status entry: %r %r", code, paths)
            continue

        if len(paths) == 2:
            old_path, new_path = paths
            files.append(
                ChangedFile(
                    path=new_path,
                    status=status,
                    old_path=old_path if status == "renamed" else None,
                )
            )
        else:
            files.append(ChangedFile(path=paths[0], status=status))
    return files


def parse_numstat(raw: str) -> tuple[int, int]:
    """Sum added/removed counts; binary files report ``-`` and count as 0."""
    additions = deletions = 0
    for line in raw.splitlines():
        parts = line.split("\t")
        if len(parts) < 3:
            continue
        additions += int(parts[0]) if parts[0].isdigit() else 0
        deletions += int(parts[1]) if parts[1].isdigit() else 0
    return additions, deletions


def parse_log(raw: str) -> list[CommitInfo]:
    commits: list[CommitInfo] = []
    for record in raw.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        fields = record.split(_FIELD_SEP, 5)
        if len(fields) < 6:
            logger.debug("Skipping malformed log record: %r", record)
            continue
        full_hash, abbrev, author, email, date, subject = fields
        commits.append(
            CommitInfo(
                hash=full_hash,
                abbrev_hash=abbrev,
                author=author,
                author_email=email,
                date=date,
                message=subject,
            )
        )
    return commits


class GitRevisionSource(RevisionSource):
    """Read refs, diffs and logs from a local git repository.

    Args:
        repo_path: Path inside the repository
        timeout: Seconds allowed for each git invocation
    """

    def __init__(self, repo_path: str = ".", timeout: int = 30):
        self.repo_path = str(Path(repo_path).resolve())
        self.timeout = timeout

    # ── Plumbing ─────────────────────────────────────────────────

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        command = ["git", "-C", self.repo_path, *args]
        try:
            return subprocess.run(command, capture_output=True, timeout=self.timeout)
        except FileNotFoundError as e:
            raise RepositoryAccessError("git executable not found") from e
        except subprocess.TimeoutExpired as e:
            raise RepositoryAccessError(
                f"git timed out after {self.timeout}s", command=" ".join(args)
            ) from e

    def _git(self, args: list[str], ref: Optional[str] = None) -> str:
        result = self._run(args)
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise RepositoryAccessError(
                stderr or f"git exited with {result.returncode}",
                ref=ref,
                command=" ".join(args),
            )
        return result.stdout.decode("utf-8", errors="replace")

    @staticmethod
    def _check_ref(ref: str) -> None:
        if not ref or ref.startswith("-"):
            raise RepositoryAccessError(f"invalid ref {ref!r}", ref=ref)

    @staticmethod
    def _range(target_ref: str, source_ref: str) -> str:
        return f"{target_ref}...{source_ref}"

    # ── RevisionSource ───────────────────────────────────────────

    def resolve_ref(self, ref: str) -> str:
        self._check_ref(ref)
        return self._git(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], ref=ref).strip()

    def list_branches(self) -> list[str]:
        raw = self._git(["branch", "-a", "--format=%(refname)"])
        branches: list[str] = []
        for line in raw.splitlines():
            name = line.strip()
            if not name or name.endswith("/HEAD"):
                continue
            for prefix in ("refs/heads/", "refs/remotes/"):
                if name.startswith(prefix):
                    name = name[len(prefix):]
                    break
            branches.append(name)
        return list(dict.fromkeys(branches))

    def diff_summary(
        self, target_ref: str, source_ref: str, filters: Optional[DiffFilters] = None
    ) -> DiffSummary:
        args = ["diff", "--shortstat", self._range(target_ref, source_ref)]
        args += self._pathspec(filters)
        return parse_shortstat(self._git(args))

    def diff_files(
        self, target_ref: str, source_ref: str, filters: Optional[DiffFilters] = None
    ) -> list[ChangedFile]:
        args = ["diff", "--name-status", "-z", "-M", self._range(target_ref, source_ref)]
        args += self._pathspec(filters)
        files = parse_name_status(self._git(args))
        if filters is not None and filters.exclude_patterns:
            kept = exclude_files(files, filters.exclude_patterns)
            logger.debug("Exclude patterns dropped %d file(s)", len(files) - len(kept))
            files = kept
        return files

    def file_diff(self, target_ref: str, source_ref: str, path: str) -> FileDiff:
        revision_range = self._range(target_ref, source_ref)
        try:
            text = self._git(["diff", revision_range, "--", path])
            numstat = self._git(["diff", "--numstat", revision_range, "--", path])
        except RepositoryAccessError as e:
            raise ContentUnavailableError(revision_range, path, e.reason) from e
        additions, deletions = parse_numstat(numstat)
        return FileDiff(text=text, additions=additions, deletions=deletions)

    def file_content_at(self, ref: str, path: str) -> Optional[str]:
        try:
            result = self._run(["show", f"{ref}:{path}"])
        except RepositoryAccessError as e:
            raise ContentUnavailableError(ref, path, e.reason) from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            if _MISSING_PATH_RE.search(stderr):
                return None
            raise ContentUnavailableError(ref, path, stderr or f"git exited with {result.returncode}")
        return result.stdout.decode("utf-8", errors="replace")

    def commit_log(
        self, ref: str, filters: Optional[DiffFilters] = None, limit: int = 500
    ) -> list[CommitInfo]:
        self._check_ref(ref)
        args = ["log", f"--max-count={limit}", f"--format={_LOG_FORMAT}"]
        if filters is not None:
            if filters.since:
                args.append(f"--since={filters.since}")
            if filters.until:
                args.append(f"--until={filters.until}")
        args.append(ref)
        if filters is not None and filters.file:
            args += ["--", filters.file]

        commits = parse_log(self._git(args, ref=ref))
        return apply_commit_filters(commits, filters)

    @staticmethod
    def _pathspec(filters: Optional[DiffFilters]) -> list[str]:
        if filters is None or not filters.include_patterns:
            return []
        return ["--", *filters.include_patterns]
