"""Shell, git and gh utilities.

Thin wrappers around subprocess calls. Every command runs inside the
repository being updated (``cwd``) and raises CalledProcessError on a
non-zero exit unless ``check=False``.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path


def git(*args: str, cwd: Path, check: bool = True) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "status", "--short").
        cwd: Repository working tree to run in.
        check: If True (default), raise on non-zero exit.

    Returns:
        Stripped stdout from the git command.
    """
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=check
    )
    return result.stdout.strip()


def gh(*args: str, cwd: Path, check: bool = True) -> str:
    """Run a GitHub CLI command and return stdout."""
    result = subprocess.run(
        ["gh", *args], cwd=cwd, capture_output=True, text=True, check=check
    )
    return result.stdout.strip()


def run(
    *args: str, cwd: Path, check: bool = True
) -> subprocess.CompletedProcess[bytes]:
    """Run an arbitrary command.

    Unlike git(), this doesn't capture output - it streams directly to
    the terminal so users can see install progress.
    """
    return subprocess.run(args, cwd=cwd, check=check)


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate repositories in the batch output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def warn(msg: str) -> None:
    """Print a skip reason or error line to stderr."""
    print(f" > {msg}", file=sys.stderr)


def describe_error(exc: BaseException) -> str:
    """Render an exception for the batch log, including command stderr."""
    if isinstance(exc, subprocess.CalledProcessError):
        cmd = exc.cmd if isinstance(exc.cmd, str) else " ".join(map(str, exc.cmd))
        detail = exc.stderr.strip() if isinstance(exc.stderr, str) else ""
        msg = f"`{cmd}` exited with status {exc.returncode}"
        return f"{msg}: {detail}" if detail else msg
    return f"{type(exc).__name__}: {exc}"
