"""Data models for multibump.

These Pydantic models represent the values that flow through a bump run.
All of them live for a single invocation; nothing is persisted.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class UpgradeRequest(BaseModel):
    """The package to bump and the version to bump it to.

    Attributes:
        package: npm package name as it appears in package.json.
        version: Target semantic version (no qualifier).
    """

    model_config = ConfigDict(frozen=True)

    package: str
    version: str


class VersionConstraint(BaseModel):
    """A package.json constraint split into qualifier and bare version.

    ``^1.2.3`` becomes ``qualifier="^", version="1.2.3"``; ``1.2.3`` has an
    empty qualifier.
    """

    model_config = ConfigDict(frozen=True)

    qualifier: str = ""
    version: str

    def __str__(self) -> str:
        return f"{self.qualifier}{self.version}"


class PackageManager(BaseModel):
    """A package manager identified by the lockfile it maintains.

    Attributes:
        name: Executable name (e.g., "npm").
        lockfile: Lockfile marker at the repository root.
        install_args: Command that regenerates the lockfile.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    lockfile: str
    install_args: tuple[str, ...]


NPM = PackageManager(
    name="npm", lockfile="package-lock.json", install_args=("npm", "install")
)
YARN = PackageManager(
    name="yarn", lockfile="yarn.lock", install_args=("yarn", "install")
)


class UpdateStatus(str, Enum):
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


class UpdateResult(BaseModel):
    """Outcome of running the bump workflow on one repository.

    Attributes:
        project: Repository working tree.
        status: Whether a PR was opened, the repo was skipped, or it failed.
        reason: Human-readable skip or failure reason.
        branch: Bump branch that was pushed, when one was.
        pr_url: URL printed by ``gh pr create``.
    """

    project: Path
    status: UpdateStatus
    reason: str | None = None
    branch: str | None = None
    pr_url: str | None = None
