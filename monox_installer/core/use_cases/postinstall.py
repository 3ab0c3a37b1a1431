"""
Postinstall use case — make sure the platform binary is present.

Runs from the wrapper package's ``postinstall`` hook:

    locate the platform package  →  (if missing) one fallback install

Only an unsupported platform is fatal. Everything else ends in a
result the CLI reports before exiting 0, so the wrapping ``npm install``
still succeeds and the binary can be resolved lazily at runtime.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from monox_installer.adapters.base import ProcessRunner
from monox_installer.adapters.shell.command import SubprocessRunner
from monox_installer.core.errors import UnsupportedPlatformError
from monox_installer.core.models.config import InstallerConfig
from monox_installer.core.models.platform import PlatformKey
from monox_installer.core.models.resolution import Found, InstallOutcome, ResolutionResult
from monox_installer.core.services.binary_install.detection.manifest import find_package_root
from monox_installer.core.services.binary_install.detection.package_manager import (
    PackageManagerInfo,
    detect_package_manager,
)
from monox_installer.core.services.binary_install.detection.platform import (
    lookup_package,
    resolve_platform,
)
from monox_installer.core.services.binary_install.execution.fallback import (
    ensure_installed,
    remediation_steps,
)
from monox_installer.core.services.binary_install.resolver.binary_locator import locate

logger = logging.getLogger(__name__)


@dataclass
class PostinstallResult:
    """Result of the postinstall resolution."""

    platform: PlatformKey | None = None
    package: str | None = None
    package_manager: PackageManagerInfo = field(default_factory=PackageManagerInfo)
    resolution: ResolutionResult | None = None
    outcome: InstallOutcome | None = None
    remediation: list[str] = field(default_factory=list)
    error: str | None = None
    hint: str | None = None

    @property
    def binary_path(self) -> str | None:
        if isinstance(self.resolution, Found):
            return self.resolution.path
        if self.outcome and self.outcome.ok:
            return self.outcome.path
        return None

    @property
    def installed(self) -> bool:
        return self.binary_path is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": str(self.platform) if self.platform else None,
            "package": self.package,
            "package_manager": self.package_manager.to_dict(),
            "installed": self.installed,
            "binary_path": self.binary_path,
            "resolution": self.resolution.to_dict() if self.resolution else None,
            "fallback": self.outcome.model_dump() if self.outcome else None,
            "remediation": self.remediation,
            "error": self.error,
            "hint": self.hint,
        }


def run_postinstall(
    config: InstallerConfig | None = None,
    *,
    runner: ProcessRunner | None = None,
    cwd: Path | None = None,
    package_root: Path | None = None,
    platform_key: PlatformKey | None = None,
) -> PostinstallResult:
    """Locate the platform binary, installing its package on demand.

    Args:
        config: Installer configuration (default: built-in defaults).
        runner: Process runner for the registry client (default: subprocess).
        cwd: Working directory of the hook (default: cwd).
        package_root: Wrapper package directory (default: nearest package.json).
        platform_key: Override host detection (tests, cross-checks).

    Returns:
        PostinstallResult. ``error`` is set only for unsupported platforms.
    """
    config = config or InstallerConfig()
    work_dir = cwd or Path.cwd()
    root = package_root or find_package_root(work_dir) or work_dir

    result = PostinstallResult(package_manager=detect_package_manager())
    result.platform = platform_key or resolve_platform()
    logger.debug("Invoked by %s", result.package_manager.label())

    try:
        entry = lookup_package(result.platform)
    except UnsupportedPlatformError as e:
        result.error = e.message
        result.hint = e.hint
        return result

    result.package = entry.package
    result.resolution = locate(entry, root)
    if isinstance(result.resolution, Found):
        logger.info("Found %s at %s", entry.package, result.resolution.path)
        return result

    logger.warning("Platform package %s not found, installing it now", entry.package)
    result.outcome = ensure_installed(
        entry,
        runner=runner or SubprocessRunner(),
        package_root=root,
        cwd=work_dir,
        registry_client=config.registry_client,
    )
    if result.outcome.failed:
        result.remediation = remediation_steps(entry, config.registry_client)

    return result
