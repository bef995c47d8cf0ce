"""Tests for the diff-insight exception hierarchy."""

import pytest

from diff_insight.exceptions import (
    AnalysisError,
    ConfigFileError,
    ConfigurationError,
    ContentUnavailableError,
    DiffInsightError,
    InvalidConfigError,
    RepositoryAccessError,
    UnrecognizedLanguageError,
)


class TestHierarchy:
    """Every error is catchable as DiffInsightError."""

    @pytest.mark.parametrize(
        "error",
        [
            ContentUnavailableError("main", "a.js", "timeout"),
            UnrecognizedLanguageError("cobol", ["go", "python"]),
            RepositoryAccessError("unknown revision", ref="nope"),
            InvalidConfigError("max_workers", "many", "not an int"),
        ],
    )
    def test_base_class(self, error):
        assert isinstance(error, DiffInsightError)

    def test_categories(self):
        assert issubclass(ContentUnavailableError, AnalysisError)
        assert issubclass(UnrecognizedLanguageError, AnalysisError)
        assert issubclass(InvalidConfigError, ConfigurationError)
        assert issubclass(ConfigFileError, ConfigurationError)
        assert not issubclass(RepositoryAccessError, AnalysisError)


class TestMessages:
    def test_details_in_str(self):
        error = ContentUnavailableError("main", "a.js", "timeout")
        assert str(error) == "Content unavailable: main:a.js (ref=main, path=a.js, reason=timeout)"
        assert error.path == "a.js"

    def test_optional_details_omitted(self):
        error = RepositoryAccessError("git executable not found")
        assert error.details == {"reason": "git executable not found"}
        assert error.ref is None

    def test_repository_details(self):
        error = RepositoryAccessError("bad", ref="nope", command="rev-parse")
        assert error.details == {"reason": "bad", "ref": "nope", "command": "rev-parse"}

    def test_plain_message(self):
        assert str(DiffInsightError("boom")) == "boom"

    def test_to_dict(self):
        error = RepositoryAccessError("unknown revision", ref="nope")
        assert error.to_dict() == {
            "type": "RepositoryAccessError",
            "message": "Repository access failed: unknown revision",
            "details": {"reason": "unknown revision", "ref": "nope"},
        }
