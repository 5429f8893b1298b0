"""
Tests for EditorSettings.
"""

import pytest

from comparse.config import EditorSettings


class TestEditorSettings:
    """Tests for loading editor settings."""

    def test_defaults(self):
        settings = EditorSettings()
        assert settings.defaults_cache_timeout_seconds == 300
        assert settings.filter_space_completions is True
        assert settings.check_invariants is False
        assert settings.completion_limit == 100

    def test_from_dict_ignores_unknown_keys(self):
        settings = EditorSettings.from_dict({"completion_limit": 5, "theme": "dark"})
        assert settings.completion_limit == 5
        assert settings.filter_space_completions is True

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("defaults_cache_timeout_seconds: 60\nfilter_space_completions: false\n")
        settings = EditorSettings.from_yaml(path)
        assert settings.defaults_cache_timeout_seconds == 60
        assert settings.filter_space_completions is False

    def test_from_empty_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert EditorSettings.from_yaml(path) == EditorSettings()

    @pytest.mark.parametrize("value,expected", [("1", True), ("true", True), (" Yes ", True), ("0", False), ("", False)])
    def test_from_env(self, value, expected):
        settings = EditorSettings.from_env({"COMPARSE_CHECK_INVARIANTS": value})
        assert settings.check_invariants is expected

    def test_from_env_unset(self, monkeypatch):
        monkeypatch.delenv("COMPARSE_CHECK_INVARIANTS", raising=False)
        assert EditorSettings.from_env().check_invariants is False
