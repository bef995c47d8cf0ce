"""Analysis-related exceptions: snapshot availability, language support."""

from typing import List

from .base import DiffInsightError


class AnalysisError(DiffInsightError):
    """Base class for analysis-related errors."""
    pass


class ContentUnavailableError(AnalysisError):
    """Raised when one snapshot (file content or per-file diff) cannot be fetched.

    Non-fatal: the change analyzer degrades the affected file record and
    carries on with the rest of the diff.
    """

    def __init__(self, ref: str, path: str, reason: str):
        super().__init__(
            f"Content unavailable: {ref}:{path}",
            details={"ref": ref, "path": path, "reason": reason},
        )
        self.ref = ref
        self.path = path
        self.reason = reason


class UnrecognizedLanguageError(AnalysisError):
    """Raised on a strict lookup of a language with no pattern table."""

    def __init__(self, language: str, supported_languages: List[str]):
        super().__init__(
            f"Unrecognized language: {language}",
            details={"language": language, "supported": ", ".join(supported_languages)},
        )
        self.language = language
        self.supported_languages = supported_languages
