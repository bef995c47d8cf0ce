"""Tests for configuration loading and validation."""

import os

import pytest

from diff_insight.config import AnalysisConfig, ThresholdConfig, load_config
from diff_insight.exceptions import ConfigFileError, ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """No global or project config files, no DIFF_INSIGHT_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("DIFF_INSIGHT_"):
            monkeypatch.delenv(key)
    return tmp_path


class TestDefaults:
    def test_defaults(self):
        config = load_config()
        assert config == AnalysisConfig()
        assert config.max_workers == 4
        assert config.thresholds.size_warning_files == 100
        assert "if" in config.method_exclude_keywords

    def test_validation(self):
        with pytest.raises(ValueError):
            AnalysisConfig(max_workers=0)
        with pytest.raises(ValueError):
            ThresholdConfig(conventional_commit_ratio=1.5)
        with pytest.raises(ValueError):
            AnalysisConfig(verbosity="loud")


class TestSources:
    def test_project_file(self, isolated):
        (isolated / "diff-insight.toml").write_text(
            'max_workers = 2\nmethod_exclude_keywords = ["if", "render"]\n\n'
            "[thresholds]\nsize_warning_files = 50\nhigh_complexity = 15\n"
        )
        config = load_config()
        assert config.max_workers == 2
        assert config.method_exclude_keywords == ("if", "render")
        assert config.thresholds.size_warning_files == 50
        assert config.thresholds.high_complexity == 15
        assert config.thresholds.refactor_deletion_ratio == 2.0

    def test_explicit_file_overrides_project_file(self, isolated):
        (isolated / "diff-insight.toml").write_text("max_workers = 2\n")
        explicit = isolated / "custom.toml"
        explicit.write_text("max_workers = 6\n")
        assert load_config(explicit).max_workers == 6

    def test_env_overrides_files(self, isolated, monkeypatch):
        (isolated / "diff-insight.toml").write_text("max_workers = 2\n")
        monkeypatch.setenv("DIFF_INSIGHT_MAX_WORKERS", "8")
        monkeypatch.setenv("DIFF_INSIGHT_METHOD_EXCLUDE_KEYWORDS", "if, for")
        config = load_config()
        assert config.max_workers == 8
        assert config.method_exclude_keywords == ("if", "for")

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("DIFF_INSIGHT_MAX_WORKERS", "8")
        config = load_config(max_workers=3, verbose=True)
        assert config.max_workers == 3
        assert config.verbosity == "verbose"

    def test_none_overrides_ignored(self):
        assert load_config(max_workers=None).max_workers == 4


class TestErrors:
    def test_missing_explicit_file(self, isolated):
        with pytest.raises(ConfigFileError) as exc_info:
            load_config(isolated / "missing.toml")
        assert exc_info.value.details["reason"] == "not found"

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("DIFF_INSIGHT_MAX_WORKERS", "many")
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config()
        assert exc_info.value.key == "DIFF_INSIGHT_MAX_WORKERS"

    def test_malformed_toml(self, isolated):
        bad = isolated / "bad.toml"
        bad.write_text("max_workers = = 2\n")
        with pytest.raises(ConfigFileError):
            load_config(bad)

    def test_invalid_threshold(self, isolated):
        bad = isolated / "bad.toml"
        bad.write_text("[thresholds]\nhigh_complexity = 0\n")
        with pytest.raises(ConfigurationError):
            load_config(bad)

    def test_unknown_key(self, isolated):
        bad = isolated / "bad.toml"
        bad.write_text("colour = 'blue'\n")
        with pytest.raises(ConfigurationError):
            load_config(bad)
