"""Version parsing and comparison utilities.

Handles conversion between version strings and semver objects, and the
split of a package.json constraint into qualifier and bare version.
"""

from __future__ import annotations

import semver

from .models import VersionConstraint


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string found in a manifest.

    Handles incomplete versions by padding with zeros:
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"
    - "1.2.3-beta.1" → "1.2.3-beta.1"

    Raises:
        ValueError: If the string is not a version at all.
    """
    return semver.Version.parse(version_str, optional_minor_and_patch=True)


def parse_target_version(version_str: str) -> semver.Version:
    """Parse the user's target version, which must be full semver."""
    return semver.Version.parse(version_str)


def parse_constraint(raw: str) -> VersionConstraint:
    """Split a constraint into its qualifier and bare version.

    Only a single leading non-digit character is treated as the qualifier;
    anything more elaborate ends up in the version and fails to parse later.

    Examples:
        "^1.2.3" → qualifier "^", version "1.2.3"
        "~0.4" → qualifier "~", version "0.4"
        "1.0.0" → qualifier "", version "1.0.0"
    """
    if not raw:
        raise ValueError("empty version constraint")
    if raw[0].isascii() and raw[0].isdigit():
        return VersionConstraint(version=raw)
    return VersionConstraint(qualifier=raw[0], version=raw[1:])


def format_constraint(constraint: VersionConstraint, target: str) -> str:
    """Render ``target`` with the qualifier of an existing constraint."""
    return f"{constraint.qualifier}{target}"


def is_upgrade(current: str, target: str) -> bool:
    """Return True if ``target`` is strictly newer than ``current``."""
    return parse_version(current) < parse_target_version(target)
