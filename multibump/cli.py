"""CLI entry point for multibump."""

from __future__ import annotations

from pathlib import Path

import click

from multibump.config import ConfigError, config_path, load_settings
from multibump.models import UpdateStatus, UpgradeRequest
from multibump.updater import run_batch
from multibump.versions import parse_target_version


def _validate_package(ctx: click.Context, param: click.Parameter, value: str) -> str:
    if not value.strip():
        raise click.BadParameter("package name must not be empty")
    return value


def _validate_version(ctx: click.Context, param: click.Parameter, value: str) -> str:
    try:
        parse_target_version(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    return value


@click.command()
@click.argument("package", callback=_validate_package)
@click.argument("version", callback=_validate_version)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="TOML file listing the projects. (default: ./multibump.toml)",
)
@click.option(
    "-p",
    "--project",
    "projects",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Repository to update; repeatable. Overrides the config file list.",
)
@click.option(
    "--base-branch", default=None, help="Primary branch to bump from and target."
)
@click.option("--remote", default=None, help="Remote to push the bump branch to.")
@click.version_option(None, "--version", "show_version", package_name="multibump")
def cli(
    package: str,
    version: str,
    config_file: str | None,
    projects: tuple[Path, ...],
    base_branch: str | None,
    remote: str | None,
) -> None:
    """Bump PACKAGE to VERSION in every project and open a PR for each."""
    path, required = config_path(config_file)
    try:
        settings = load_settings(path, required=required)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    overrides: dict[str, object] = {}
    if projects:
        overrides["projects"] = [p.expanduser() for p in projects]
    if base_branch:
        overrides["base_branch"] = base_branch
    if remote:
        overrides["remote"] = remote
    settings = settings.model_copy(update=overrides)

    if not settings.projects:
        raise click.UsageError(
            f"No projects to update. Pass --project or list them in {path.name}:\n\n"
            '  projects = ["~/src/site", "~/src/docs"]'
        )

    request = UpgradeRequest(package=package, version=version)
    results = run_batch(request, settings)

    if any(r.status is UpdateStatus.FAILED for r in results):
        raise SystemExit(1)
