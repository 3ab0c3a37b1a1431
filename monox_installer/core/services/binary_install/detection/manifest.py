"""
L3 Detection — The wrapper package's own manifest.

During ``npm install`` lifecycle scripts run with the wrapper package
(``node_modules/monox``) as the working directory, so its
``package.json`` is found by walking up from there.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"


def find_package_root(start_dir: Path | None = None) -> Path | None:
    """Return the nearest directory at or above ``start_dir`` with a package.json."""
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(50):  # safety limit
        if (current / MANIFEST_FILE).is_file():
            return current
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def read_manifest(package_root: Path) -> dict[str, Any] | None:
    """Parse ``<package_root>/package.json``; None if missing or unreadable."""
    path = package_root / MANIFEST_FILE
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Expected a JSON object in %s", path)
        return None
    return data


def declared_version(manifest: dict[str, Any] | None, package: str) -> str | None:
    """The version pinned for ``package`` in ``optionalDependencies``."""
    if not manifest:
        return None
    optional = manifest.get("optionalDependencies")
    if not isinstance(optional, dict):
        return None
    version = optional.get(package)
    if isinstance(version, str) and version.strip():
        return version.strip()
    return None
