"""External tools used by the updater, bound to one repository.

Each class wraps one command-line collaborator (git, the package manager,
gh) so the updater can be driven by fakes in tests. Commands raise
subprocess.CalledProcessError when they fail.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from .models import PackageManager
from .shell import gh, git, run


class GitRepo:
    """Git operations on a single working tree."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def current_branch(self) -> str:
        return git(
            "rev-parse", "--symbolic-full-name", "--abbrev-ref", "HEAD", cwd=self.path
        )

    def head_commit(self) -> str:
        """Return the full SHA of HEAD, for restoring a detached checkout."""
        return git("rev-parse", "HEAD", cwd=self.path)

    def is_dirty(self) -> bool:
        """Return True if tracked files have staged or unstaged changes."""
        return self._differs("diff", "--quiet") or self._differs(
            "diff", "--cached", "--quiet"
        )

    def _differs(self, *args: str) -> bool:
        result = subprocess.run(["git", *args], cwd=self.path, capture_output=True)
        # 1 means "differences found"; anything else is a real git error
        if result.returncode not in (0, 1):
            raise subprocess.CalledProcessError(
                result.returncode,
                result.args,
                output=result.stdout,
                stderr=result.stderr.decode(errors="replace"),
            )
        return result.returncode == 1

    def checkout(self, branch: str) -> None:
        git("checkout", branch, cwd=self.path)

    def pull(self) -> None:
        git("pull", cwd=self.path)

    def create_branch(self, branch: str) -> None:
        git("checkout", "-b", branch, cwd=self.path)

    def delete_branch(self, branch: str) -> None:
        git("branch", "-D", branch, cwd=self.path)

    def add(self, *files: str) -> None:
        """Stage updates to already-tracked files only."""
        git("add", "-u", "--", *files, cwd=self.path)

    def commit(self, message: str, *files: str) -> None:
        """Commit ``files`` only; anything else already staged stays out."""
        git("commit", "-m", message, "--", *files, cwd=self.path)

    def push(self, remote: str, branch: str) -> None:
        git("push", "-u", remote, branch, cwd=self.path)


class Installer:
    """Runs a package manager's install command to regenerate its lockfile."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def install(self, manager: PackageManager) -> None:
        run(*manager.install_args, cwd=self.path)


class PullRequests:
    """Pull request creation through the GitHub CLI."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def create(self, base: str, title: str, body: str) -> str:
        """Open a PR for the current branch and return its URL."""
        return gh("pr", "create", "-B", base, "-t", title, "-b", body, cwd=self.path)
