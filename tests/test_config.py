"""Tests for multibump.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from multibump.config import ConfigError, config_path, load_settings


class TestLoadSettings:
    def test_reads_all_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "multibump.toml"
        path.write_text(
            'projects = ["/src/site", "/src/docs"]\n'
            'base-branch = "main"\n'
            'remote = "upstream"\n'
        )

        settings = load_settings(path)

        assert settings.projects == [Path("/src/site"), Path("/src/docs")]
        assert settings.base_branch == "main"
        assert settings.remote == "upstream"

    def test_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "multibump.toml"
        path.write_text('projects = ["/src/site"]\n')

        settings = load_settings(path)

        assert settings.base_branch == "master"
        assert settings.remote == "origin"

    def test_expands_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        path = tmp_path / "multibump.toml"
        path.write_text('projects = ["~/site"]\n')

        settings = load_settings(path)

        assert settings.projects == [tmp_path / "site"]

    def test_relative_projects_resolve_against_config_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_dir = tmp_path / "conf"
        config_dir.mkdir()
        path = config_dir / "multibump.toml"
        path.write_text('projects = ["../site", "/src/docs"]\n')
        monkeypatch.chdir(tmp_path)

        settings = load_settings(path)

        assert settings.projects == [config_dir / ".." / "site", Path("/src/docs")]

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "multibump.toml"
        path.write_text('projects = ["/src/site"]\nbase_branch_name = "main"\n')

        with pytest.raises(ConfigError, match="base_branch_name"):
            load_settings(path)

    def test_missing_required_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.toml")

    def test_missing_optional_file(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "nope.toml", required=False)
        assert settings.projects == []

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "multibump.toml"
        path.write_text("projects = [\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_settings(path)

    def test_wrong_type(self, tmp_path: Path) -> None:
        path = tmp_path / "multibump.toml"
        path.write_text('projects = "/src/site"\n')

        with pytest.raises(ConfigError, match="Invalid config"):
            load_settings(path)


class TestConfigPath:
    def test_explicit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MULTIBUMP_CONFIG", "/env/config.toml")
        assert config_path("/cli/config.toml") == (Path("/cli/config.toml"), True)

    def test_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MULTIBUMP_CONFIG", "/env/config.toml")
        assert config_path(None) == (Path("/env/config.toml"), True)

    def test_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MULTIBUMP_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)
        assert config_path(None) == (Path.cwd() / "multibump.toml", False)
