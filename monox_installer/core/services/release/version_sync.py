"""
Version sync — stamp one version across the generated npm manifests.

At release time every ``package.json`` under the distribution tree
(the wrapper plus one package per platform) must carry the new
version, and the wrapper's pins on its platform siblings must match.

Best effort, not a transaction: each file is rewritten atomically, a
file that fails is reported, and the remaining files still get
processed.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
import tomllib
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from monox_installer.core.errors import InstallerError, ManifestRewriteError
from monox_installer.core.services.binary_install.data.platforms import DEPENDENCY_SECTIONS

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"
_SKIP_DIRS = frozenset({"node_modules", ".git"})

# First indented line: whatever whitespace follows a newline.
_INDENT_RE = re.compile(r"\n([ \t]+)")


@dataclass
class SyncReport:
    """Per-file results of a version sync run."""

    version: str
    root: str
    dry_run: bool = False
    updated: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    failed: list[ManifestRewriteError] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.updated) + len(self.unchanged) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "root": self.root,
            "dry_run": self.dry_run,
            "total": self.total,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "failed": [{"path": e.path, "error": e.reason} for e in self.failed],
        }


def find_manifests(root: Path) -> list[Path]:
    """All package.json files beneath ``root``, skipping node_modules."""
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS)
        if MANIFEST_NAME in filenames:
            found.append(Path(dirpath) / MANIFEST_NAME)
    return found


def detect_indent(text: str) -> str | int:
    """Indentation of the original file: ``"\\t"`` or a number of spaces."""
    match = _INDENT_RE.search(text)
    if not match:
        return 2
    indent = match.group(1)
    if "\t" in indent:
        return "\t"
    return len(indent)


def is_family_package(name: str, scope: str, names: Iterable[str]) -> bool:
    """Whether ``name`` is one of the sibling monox packages."""
    return name.startswith(f"{scope.rstrip('/')}/") or name in set(names)


def _family_pins(
    manifest: dict[str, Any], scope: str, names: Iterable[str],
) -> Iterator[tuple[dict[str, Any], str]]:
    for section in DEPENDENCY_SECTIONS:
        deps = manifest.get(section)
        if not isinstance(deps, dict):
            continue
        for dep in deps:
            if is_family_package(dep, scope, names):
                yield deps, dep


def apply_version(
    manifest: dict[str, Any],
    version: str,
    *,
    scope: str = "@monox",
    names: Iterable[str] = ("monox",),
) -> dict[str, Any]:
    """Set ``version`` and every family pin in ``manifest`` (in place)."""
    names = tuple(names)
    manifest["version"] = version
    for deps, dep in _family_pins(manifest, scope, names):
        deps[dep] = version
    return manifest


def render_manifest(manifest: dict[str, Any], indent: str | int) -> str:
    """Serialize like ``JSON.stringify(pkg, null, indent)`` plus a newline."""
    text = json.dumps(manifest, indent=indent, ensure_ascii=False)
    if not text.endswith("\n"):
        text += "\n"
    return text


def _atomic_write(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` via a temp file in the same directory."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(tmp_name, path.stat().st_mode & 0o777)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def update_manifest(
    path: Path,
    version: str,
    *,
    scope: str = "@monox",
    names: Iterable[str] = ("monox",),
    dry_run: bool = False,
) -> bool:
    """Rewrite one manifest. Returns True if its content changed.

    Raises:
        ManifestRewriteError: the file cannot be read, parsed or written.
    """
    try:
        original = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestRewriteError(str(path), f"cannot read: {e}") from e

    try:
        manifest = json.loads(original)
    except ValueError as e:
        raise ManifestRewriteError(str(path), f"invalid JSON: {e}") from e
    if not isinstance(manifest, dict):
        raise ManifestRewriteError(str(path), "expected a JSON object")

    updated = render_manifest(
        apply_version(manifest, version, scope=scope, names=names),
        detect_indent(original),
    )
    if updated == original:
        return False
    if dry_run:
        return True

    try:
        _atomic_write(path, updated)
    except OSError as e:
        raise ManifestRewriteError(str(path), f"cannot write: {e}") from e
    return True


def sync_versions(
    version: str,
    root: Path,
    *,
    scope: str = "@monox",
    names: Iterable[str] = ("monox",),
    dry_run: bool = False,
) -> SyncReport:
    """Apply ``version`` to every manifest beneath ``root``."""
    names = tuple(names)
    report = SyncReport(version=version, root=str(root), dry_run=dry_run)

    manifests = find_manifests(root)
    logger.info("Found %d %s files under %s", len(manifests), MANIFEST_NAME, root)

    for path in manifests:
        try:
            changed = update_manifest(path, version, scope=scope, names=names, dry_run=dry_run)
        except ManifestRewriteError as e:
            logger.error("%s", e.message)
            report.failed.append(e)
            continue
        if changed:
            logger.info("Updated %s", path)
            report.updated.append(str(path))
        else:
            report.unchanged.append(str(path))

    return report


def read_build_version(cargo_toml: Path) -> str:
    """Read ``[package].version`` from the primary build manifest.

    Raises:
        InstallerError: the file is missing, invalid, or has no version.
    """
    try:
        data = tomllib.loads(cargo_toml.read_text(encoding="utf-8"))
    except OSError as e:
        raise InstallerError(f"Cannot read {cargo_toml}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise InstallerError(f"Invalid TOML in {cargo_toml}: {e}") from e

    version = data.get("package", {}).get("version")
    if not isinstance(version, str) or not version:
        raise InstallerError(
            f"No [package] version in {cargo_toml}",
            "Workspace-inherited versions are not supported; pass the version explicitly.",
        )
    return version
