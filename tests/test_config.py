"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from gitpolicy.config.defaults import DEFAULT_TOML
from gitpolicy.config.loader import ConfigError, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("GITPOLICY_DEFAULT_BRANCH", "GITPOLICY_FORMAT",
                "GITPOLICY_GIT_TIMEOUT", "GITPOLICY_IGNORE_AUTHORS"):
        monkeypatch.delenv(var, raising=False)


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.policy.default_branch == ""
        assert cfg.policy.remote == "origin"
        assert cfg.git.timeout == 10
        assert cfg.output.format is None
        assert cfg.contributors.ignore == []

    def test_starter_template_parses(self, tmp_path: Path):
        (tmp_path / ".gitpolicy.toml").write_text(DEFAULT_TOML)
        cfg = load_config(tmp_path)
        assert cfg.output.format is None
        assert cfg.git.timeout == 10

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".gitpolicy.toml").write_text(
            'version = "1.0"\n'
            '[policy]\n'
            'default_branch = "trunk"\n'
            '[contributors]\n'
            'ignore = ["*[bot]*"]\n'
            '[git]\n'
            'timeout = 3\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.policy.default_branch == "trunk"
        assert cfg.contributors.ignore == ["*[bot]*"]
        assert cfg.git.timeout == 3

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".gitpolicy.toml").write_text('[output]\nformat = "json"\ncolour = "loud"\n')
        cfg = load_config(tmp_path)
        assert cfg.output.format == "json"

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[policy]\ndefault_branch = "develop"\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.policy.default_branch == "develop"

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".gitpolicy.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_format_raises(self, tmp_path: Path):
        (tmp_path / ".gitpolicy.toml").write_text('[output]\nformat = "sarif"\n')
        with pytest.raises(ConfigError, match="output.format"):
            load_config(tmp_path)

    def test_non_positive_timeout_raises(self, tmp_path: Path):
        (tmp_path / ".gitpolicy.toml").write_text("[git]\ntimeout = 0\n")
        with pytest.raises(ConfigError, match="timeout"):
            load_config(tmp_path)

    def test_section_must_be_table(self, tmp_path: Path):
        (tmp_path / ".gitpolicy.toml").write_text('policy = "main"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_default_branch_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITPOLICY_DEFAULT_BRANCH", "trunk")
        cfg = load_config(tmp_path)
        assert cfg.policy.default_branch == "trunk"

    def test_env_beats_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".gitpolicy.toml").write_text('[policy]\ndefault_branch = "develop"\n')
        monkeypatch.setenv("GITPOLICY_DEFAULT_BRANCH", "release")
        assert load_config(tmp_path).policy.default_branch == "release"

    def test_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITPOLICY_FORMAT", "json")
        assert load_config(tmp_path).output.format == "json"

    def test_timeout_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITPOLICY_GIT_TIMEOUT", "42")
        assert load_config(tmp_path).git.timeout == 42

    def test_ignore_authors_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITPOLICY_IGNORE_AUTHORS", "*[bot]*, ci@example.com")
        cfg = load_config(tmp_path)
        assert cfg.contributors.ignore == ["*[bot]*", "ci@example.com"]

    @pytest.mark.parametrize("var,value", [
        ("GITPOLICY_FORMAT", "xml"),
        ("GITPOLICY_GIT_TIMEOUT", "soon"),
        ("GITPOLICY_GIT_TIMEOUT", "-5"),
    ])
    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch, var, value):
        monkeypatch.setenv(var, value)
        cfg = load_config(tmp_path)
        assert cfg.output.format is None
        assert cfg.git.timeout == 10
