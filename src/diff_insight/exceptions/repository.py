"""Repository access exceptions: unresolvable refs, failing git commands."""

from typing import Optional

from .base import DiffInsightError


class RepositoryAccessError(DiffInsightError):
    """Raised when a ref, path or listing cannot be obtained from the repository.

    Fatal for ``analyze_branch_diff``: the whole call aborts.
    """

    def __init__(self, reason: str, ref: Optional[str] = None, command: Optional[str] = None):
        details = {"reason": reason}
        if ref:
            details["ref"] = ref
        if command:
            details["command"] = command

        super().__init__(f"Repository access failed: {reason}", details=details)
        self.reason = reason
        self.ref = ref
        self.command = command
