"""Base exception for diff-insight."""

from typing import Any, Dict, Optional


class DiffInsightError(Exception):
    """Base exception for all diff-insight errors.

    ``details`` carries the ref, path or command involved so that both the
    terminal and the ``--json`` output can say what failed without parsing
    the message.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
