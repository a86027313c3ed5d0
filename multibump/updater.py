"""Bump workflow: sync → branch → patch → install → commit → push → PR.

This module runs the multibump process for each configured repository:
1. Leave the current branch (only if the work tree is clean) for the
   primary branch and pull
2. Create a fresh bump branch
3. Find the package in package.json and check the target is newer
4. Rewrite the constraint, keeping its qualifier (^, ~, ...)
5. Regenerate the lockfile with npm or yarn
6. Commit, push, and open a pull request against the primary branch
7. Return to the branch the user started on

Repositories are independent: a failure in one is reported and the batch
moves on. Nothing is rolled back after a failure.
"""

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import Settings
from .manifest import (
    MANIFEST_FILE,
    detect_package_manager,
    find_dependency,
    load_manifest,
    save_manifest,
    set_dependency,
)
from .models import UpdateResult, UpdateStatus, UpgradeRequest
from .shell import describe_error, step, warn
from .tools import GitRepo, Installer, PullRequests
from .versions import format_constraint, is_upgrade, parse_constraint


def bump_branch_name(package: str, version: str, timestamp_ms: int) -> str:
    """Build the name of a disposable bump branch.

    Example: ``multibump/left-pad-1.2.0-1700000000000``.
    """
    return f"multibump/{package}-{version}-{timestamp_ms}"


def commit_message(request: UpgradeRequest) -> str:
    return f"Upgrading {request.package} to {request.version}"


def pr_title(request: UpgradeRequest) -> str:
    return f"Auto-bump: {request.package}@{request.version}"


def pr_body(request: UpgradeRequest) -> str:
    return f"Auto-upgrade of `{request.package}` to `{request.version}` via multibump."


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def update_project(
    project: Path,
    request: UpgradeRequest,
    settings: Settings,
    *,
    repo: GitRepo | None = None,
    installer: Installer | None = None,
    pull_requests: PullRequests | None = None,
    clock: Callable[[], int] = _now_ms,
) -> UpdateResult:
    """Bump one dependency in one repository and open a pull request.

    Precondition failures (dirty tree, no package.json, unknown package
    manager, package not listed, target not newer) return a skipped result.
    Once the bump branch exists, a skip switches back to the original
    branch (or commit, if HEAD was detached) and deletes the empty bump
    branch.

    Args:
        project: Repository working tree.
        request: Package and target version.
        settings: Primary branch and remote names.
        repo: Git operations; defaults to a GitRepo on ``project``.
        installer: Package manager runner; defaults to an Installer.
        pull_requests: PR creator; defaults to the gh-backed PullRequests.
        clock: Returns the current time in milliseconds, for the branch name.

    Returns:
        UpdateResult with status UPDATED or SKIPPED.

    Raises:
        subprocess.CalledProcessError: If any external command fails. The
            work tree is left as it is.
    """
    if repo is None:
        repo = GitRepo(project)
    if installer is None:
        installer = Installer(project)
    if pull_requests is None:
        pull_requests = PullRequests(project)

    def skip(reason: str, branch: str | None = None) -> UpdateResult:
        warn(f"{reason} Skipping.")
        if branch is not None:
            repo.checkout(original)
            repo.delete_branch(branch)
        return UpdateResult(
            project=project, status=UpdateStatus.SKIPPED, reason=reason
        )

    print(" > Pulling changes...")
    original = repo.current_branch()
    if original == "HEAD":
        # Detached; come back to the same commit rather than a branch
        original = repo.head_commit()
    if original != settings.base_branch:
        if repo.is_dirty():
            return skip(
                f"Current branch is not {settings.base_branch} ({original}) "
                "and work tree is dirty."
            )
        repo.checkout(settings.base_branch)

    branch = bump_branch_name(request.package, request.version, clock())
    repo.pull()
    repo.create_branch(branch)

    print(f" > Updating {MANIFEST_FILE}...")
    manifest_path = project / MANIFEST_FILE
    if not manifest_path.exists():
        return skip(f"No {MANIFEST_FILE} found.", branch)

    manager = detect_package_manager(project)
    if manager is None:
        return skip("Could not determine whether project uses npm or yarn.", branch)

    data = load_manifest(manifest_path)
    section = find_dependency(data, request.package)
    if section is None:
        return skip(f"Could not find {request.package} in {manifest_path}.", branch)

    constraint = parse_constraint(data[section][request.package])
    if not is_upgrade(constraint.version, request.version):
        return skip(
            f"Current version {constraint.version} already >= {request.version}.",
            branch,
        )

    set_dependency(
        data, section, request.package, format_constraint(constraint, request.version)
    )
    save_manifest(manifest_path, data)
    print(f"  {request.package}: {constraint} → {data[section][request.package]}")

    print(f" > Running {manager.name} to regenerate {manager.lockfile}...")
    installer.install(manager)

    print(" > Pushing to GitHub...")
    repo.add(MANIFEST_FILE, manager.lockfile)
    repo.commit(commit_message(request), MANIFEST_FILE, manager.lockfile)
    repo.push(settings.remote, branch)

    print(" > Creating pull request...")
    url = pull_requests.create(
        settings.base_branch, pr_title(request), pr_body(request)
    )
    print(f" > PR URL: {url}")

    print(f" > Upgrade complete. Returning to branch {original}.")
    repo.checkout(original)
    return UpdateResult(
        project=project, status=UpdateStatus.UPDATED, branch=branch, pr_url=url
    )


def run_batch(
    request: UpgradeRequest,
    settings: Settings,
    projects: Sequence[Path] | None = None,
) -> list[UpdateResult]:
    """Run update_project over every configured repository, in order.

    Any exception raised for one repository is reported with the repository
    named and recorded as FAILED; the remaining repositories still run.
    """
    results: list[UpdateResult] = []
    for project in settings.projects if projects is None else projects:
        step(f"Starting upgrade in {project}...")
        try:
            result = update_project(project, request, settings)
        except Exception as exc:
            reason = describe_error(exc)
            warn(
                f"FATAL error while updating project {project}. "
                "Work tree may be in a dirty state."
            )
            print(f"   {reason}", file=sys.stderr)
            result = UpdateResult(
                project=project, status=UpdateStatus.FAILED, reason=reason
            )
        results.append(result)

    print_summary(results)
    return results


def print_summary(results: Sequence[UpdateResult]) -> None:
    """Print one line per repository with its outcome."""
    step("Summary")
    for r in results:
        detail = r.pr_url or r.reason or ""
        print(f"  {r.status.value:<8} {r.project}  {detail}".rstrip())
