"""Configuration loading.

The list of repositories and the branch/remote defaults live in a TOML
file, read with tomlkit:

    projects = ["~/src/site", "~/src/docs"]
    base-branch = "master"
    remote = "origin"

Unknown keys are rejected. Relative project paths resolve against the
directory holding the config file.
"""

from __future__ import annotations

import os
from pathlib import Path

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from tomlkit.exceptions import TOMLKitError

DEFAULT_CONFIG_FILE = "multibump.toml"
CONFIG_ENV_VAR = "MULTIBUMP_CONFIG"


class ConfigError(Exception):
    """Raised when the configuration file is missing or malformed."""


class Settings(BaseModel):
    """Resolved settings for one multibump run.

    Attributes:
        projects: Repository working trees, processed in this order.
        base_branch: Primary branch that bump branches start from and PRs target.
        remote: Remote the bump branch is pushed to.
    """

    projects: list[Path] = Field(default_factory=list)
    base_branch: str = Field(default="master", alias="base-branch")
    remote: str = "origin"

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("projects")
    @classmethod
    def _expand_user(cls, value: list[Path]) -> list[Path]:
        return [p.expanduser() for p in value]


def config_path(explicit: str | None) -> tuple[Path, bool]:
    """Resolve which config file to read.

    Returns:
        Tuple of (path, required). A file named on the command line or in
        MULTIBUMP_CONFIG must exist; the default one is optional.
    """
    if explicit:
        return Path(explicit), True
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env), True
    return Path.cwd() / DEFAULT_CONFIG_FILE, False


def load_settings(path: Path, *, required: bool = True) -> Settings:
    """Load settings from a TOML file.

    Raises:
        ConfigError: If a required file is missing, or the file is not valid
            TOML, has unknown keys, or has values of the wrong type.
    """
    if not path.exists():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        return Settings()

    try:
        doc = tomlkit.parse(path.read_text())
    except TOMLKitError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    try:
        settings = Settings.model_validate(doc.unwrap())
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {path}:\n{exc}") from exc

    # Relative project paths are relative to the config file, not the cwd
    base = path.parent
    settings.projects = [p if p.is_absolute() else base / p for p in settings.projects]
    return settings
