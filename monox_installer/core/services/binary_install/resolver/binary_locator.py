"""
L2 Resolver — Locate the platform binary inside node_modules.

Follows Node's lookup for a bare specifier such as
``@monox/linux-x64/monox``: try ``node_modules/<specifier>`` in the
starting directory and every ancestor, then each ``NODE_PATH`` entry.
A read-only probe that never raises: a missing package is the common
case when optional dependencies were skipped.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from monox_installer.core.models.platform import PlatformPackageEntry
from monox_installer.core.models.resolution import Found, NotFound, ResolutionResult

logger = logging.getLogger(__name__)

NODE_MODULES = "node_modules"


def node_modules_paths(base_dir: Path) -> Iterator[Path]:
    """Yield candidate ``node_modules`` directories, nearest first.

    Mirrors Node's ``Module._nodeModulePaths``: a directory that is
    itself called ``node_modules`` does not get another one appended.
    """
    current = base_dir.resolve()
    while True:
        if current.name != NODE_MODULES:
            yield current / NODE_MODULES
        parent = current.parent
        if parent == current:
            break
        current = parent

    for entry in os.environ.get("NODE_PATH", "").split(os.pathsep):
        if entry:
            yield Path(entry)


def locate(entry: PlatformPackageEntry, base_dir: Path | None = None) -> ResolutionResult:
    """Resolve ``entry.package``/``entry.subpath`` to an existing file.

    Args:
        entry: The platform package and the binary's path inside it.
        base_dir: Directory resolution starts from (default: cwd).

    Returns:
        ``Found`` with the absolute binary path, or ``NotFound``.
    """
    start = base_dir or Path.cwd()

    for modules_dir in node_modules_paths(start):
        candidate = modules_dir / entry.package / entry.subpath
        try:
            if candidate.is_file():
                logger.debug("Resolved %s → %s", entry.specifier, candidate)
                return Found(package=entry.package, path=str(candidate))
        except OSError as e:
            logger.debug("Skipping %s: %s", candidate, e)

    logger.debug("Cannot resolve %s from %s", entry.specifier, start)
    return NotFound(package=entry.package)
