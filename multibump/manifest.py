"""package.json reading and writing utilities.

The manifest is rewritten with stable formatting (original key order,
two-space indentation, trailing newline) so the bump shows up as a
one-line diff.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .models import NPM, YARN, PackageManager

MANIFEST_FILE = "package.json"

# Searched in order; the first section listing the package wins.
DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")

PACKAGE_MANAGERS = (NPM, YARN)


def load_manifest(path: Path) -> dict[str, Any]:
    """Load and parse a package.json file, preserving key order."""
    return json.loads(path.read_text(encoding="utf-8"))


def save_manifest(path: Path, data: dict[str, Any]) -> None:
    """Write a package.json back to disk in npm's own layout."""
    path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )


def find_dependency(data: dict[str, Any], package: str) -> str | None:
    """Return the name of the first section that declares ``package``.

    Sections that are missing or not objects are ignored, as are entries
    with an empty constraint.
    """
    for section in DEPENDENCY_SECTIONS:
        deps = data.get(section)
        if isinstance(deps, dict) and deps.get(package):
            return section
    return None


def set_dependency(
    data: dict[str, Any], section: str, package: str, value: str
) -> None:
    """Replace the constraint for ``package`` in ``section``, modifying in place."""
    data[section][package] = value


def detect_package_manager(project_dir: Path) -> PackageManager | None:
    """Identify the package manager from its lockfile marker.

    Exactly one marker must be present. Both or neither means the project
    is ambiguous and None is returned rather than guessing.
    """
    found = [pm for pm in PACKAGE_MANAGERS if (project_dir / pm.lockfile).exists()]
    if len(found) != 1:
        return None
    return found[0]
