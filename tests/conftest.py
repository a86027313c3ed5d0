"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from multibump.config import Settings
from multibump.tools import GitRepo, Installer, PullRequests

PR_URL = "https://github.com/acme/site/pull/7"


def _write_package_json(project: Path, data: dict) -> Path:
    path = project / "package.json"
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


@pytest.fixture
def npm_project(tmp_path: Path) -> Path:
    """A repository using npm with left-pad as a runtime dependency."""
    project = tmp_path / "site"
    project.mkdir()
    _write_package_json(
        project,
        {
            "name": "site",
            "version": "1.0.0",
            "dependencies": {"left-pad": "^1.0.0", "react": "^18.2.0"},
            "devDependencies": {"jest": "~29.0.0"},
        },
    )
    (project / "package-lock.json").write_text("{}\n")
    return project


@pytest.fixture
def settings() -> Settings:
    return Settings(base_branch="master", remote="origin")


@pytest.fixture
def repo() -> MagicMock:
    """Git repo on a clean master branch."""
    mock = MagicMock(spec=GitRepo)
    mock.current_branch.return_value = "master"
    mock.is_dirty.return_value = False
    return mock


@pytest.fixture
def installer() -> MagicMock:
    return MagicMock(spec=Installer)


@pytest.fixture
def pull_requests() -> MagicMock:
    mock = MagicMock(spec=PullRequests)
    mock.create.return_value = PR_URL
    return mock
