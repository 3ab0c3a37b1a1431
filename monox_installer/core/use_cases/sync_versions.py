"""
Sync-versions use case — release-time version stamping of the npm tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from monox_installer.core.errors import InstallerError
from monox_installer.core.models.config import InstallerConfig
from monox_installer.core.services.release.version_sync import (
    SyncReport,
    read_build_version,
    sync_versions,
)


@dataclass
class SyncVersionsResult:
    """Result of a version sync run."""

    report: SyncReport | None = None
    version_source: str = "argument"   # argument, Cargo.toml path
    error: str | None = None
    hint: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None and self.report.ok

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "version_source": self.version_source,
            "report": self.report.to_dict() if self.report else None,
            "error": self.error,
            "hint": self.hint,
        }


def run_sync_versions(
    version: str | None,
    *,
    config: InstallerConfig | None = None,
    root: Path | None = None,
    cargo_toml: Path | None = None,
    base_dir: Path | None = None,
    dry_run: bool = False,
) -> SyncVersionsResult:
    """Stamp ``version`` (or the Cargo.toml version) on every manifest.

    Args:
        version: New version; may be None when ``cargo_toml`` is given.
        config: Installer configuration (manifests dir, package family).
        root: Manifests root (default: ``config.manifests_dir`` under ``base_dir``).
        cargo_toml: Read the version from this build manifest instead.
        base_dir: Directory relative paths are resolved from (default: cwd).
        dry_run: Report changes without writing.
    """
    config = config or InstallerConfig()
    base = base_dir or Path.cwd()
    result = SyncVersionsResult()

    if version is None:
        if cargo_toml is None:
            result.error = "No version given"
            result.hint = "Pass the new version, or --from-cargo to read it from Cargo.toml."
            return result
        try:
            version = read_build_version(cargo_toml)
        except InstallerError as e:
            result.error = e.message
            result.hint = e.hint
            return result
        result.version_source = str(cargo_toml)

    manifests_root = root or base / config.manifests_dir
    if not manifests_root.is_dir():
        result.error = f"Manifests directory not found: {manifests_root}"
        result.hint = "Use --root to point at the generated npm packages."
        return result

    result.report = sync_versions(
        version,
        manifests_root,
        scope=config.family_scope,
        names=config.family_names(),
        dry_run=dry_run,
    )
    return result
