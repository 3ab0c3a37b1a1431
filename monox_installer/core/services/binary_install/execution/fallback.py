"""
L4 Execution — On-demand install of a missing platform package.

Runs only after the locator came back ``NotFound``. One attempt, no
backoff: ``<client> install <package>@<version>`` in the working
directory, then resolve again. The outcome is returned, never raised;
a failed fallback must not fail the wrapping package's install.
"""

from __future__ import annotations

import logging
from pathlib import Path

from monox_installer.adapters.base import ProcessRunner
from monox_installer.core.models.platform import PlatformPackageEntry
from monox_installer.core.models.resolution import Found, InstallOutcome
from monox_installer.core.services.binary_install.data.platforms import (
    DEFAULT_INSTALL_VERSION,
)
from monox_installer.core.services.binary_install.detection.manifest import (
    declared_version,
    read_manifest,
)
from monox_installer.core.services.binary_install.detection.package_manager import (
    detect_package_manager,
)
from monox_installer.core.services.binary_install.resolver.binary_locator import locate

logger = logging.getLogger(__name__)


def target_version(package: str, package_root: Path | None) -> str:
    """Version to install: the wrapper's optionalDependencies pin, or ``latest``."""
    manifest = read_manifest(package_root) if package_root else None
    return declared_version(manifest, package) or DEFAULT_INSTALL_VERSION


def install_command(registry_client: str, package: str, version: str) -> tuple[str, list[str]]:
    """The registry client invocation for one package."""
    return registry_client, ["install", f"{package}@{version}"]


def ensure_installed(
    entry: PlatformPackageEntry,
    *,
    runner: ProcessRunner,
    package_root: Path | None = None,
    cwd: Path | None = None,
    registry_client: str = "npm",
) -> InstallOutcome:
    """Make ``entry`` resolvable, installing it through the registry if needed.

    Args:
        entry: The platform package that failed to resolve.
        runner: Process runner used to spawn the registry client.
        package_root: Directory holding the wrapper's package.json
            (where the version pin is read and resolution starts).
        cwd: Working directory for the install (default: cwd).
        registry_client: Command used for the install (default: npm).

    Returns:
        ``InstallOutcome`` — ``ok`` with the binary path, or ``failed``
        with the reason. Never raises.
    """
    work_dir = cwd or Path.cwd()
    base_dir = package_root or work_dir

    existing = locate(entry, base_dir)
    if isinstance(existing, Found):
        logger.debug("%s already installed at %s", entry.package, existing.path)
        return InstallOutcome.success(entry.package, existing.path, version="installed")

    version = target_version(entry.package, package_root)
    manager = detect_package_manager()
    command, args = install_command(registry_client, entry.package, version)
    logger.info(
        "Installing %s@%s with %s (invoked by %s)",
        entry.package, version, registry_client, manager.label(),
    )

    result = runner.run(command, args, cwd=work_dir)

    resolved = locate(entry, base_dir)
    if isinstance(resolved, Found):
        if not result.ok:
            logger.warning(
                "%s reported a failure but %s resolved anyway",
                command, entry.package,
            )
        return InstallOutcome.success(
            entry.package,
            resolved.path,
            version=version,
            return_code=result.return_code,
            spawned=True,
        )

    if result.ok:
        reason = f"{result.command_line} succeeded but {entry.specifier} is still missing"
    else:
        reason = result.describe_failure()

    logger.info("Fallback install of %s failed: %s", entry.package, reason)
    return InstallOutcome.failure(
        entry.package,
        reason,
        version=version,
        return_code=result.return_code,
        spawned=True,
    )


def remediation_steps(entry: PlatformPackageEntry, registry_client: str = "npm") -> list[str]:
    """Manual fixes to print after a failed fallback install."""
    return [
        f"Install the platform package directly: {registry_client} install {entry.package}",
        "Check that your platform is supported by monox",
        "Do not skip optional dependencies (--no-optional / --omit=optional)",
    ]
