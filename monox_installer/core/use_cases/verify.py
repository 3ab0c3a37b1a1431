"""
Verify use case — report whether the platform binary is resolvable.

Read-only and idempotent: safe to run from a separate lifecycle hook
or by hand. It never installs anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from monox_installer.core.errors import UnsupportedPlatformError
from monox_installer.core.models.platform import PlatformKey
from monox_installer.core.models.resolution import Found, ResolutionResult
from monox_installer.core.services.binary_install.detection.manifest import find_package_root
from monox_installer.core.services.binary_install.detection.platform import (
    lookup_package,
    resolve_platform,
)
from monox_installer.core.services.binary_install.resolver.binary_locator import locate


@dataclass
class VerifyResult:
    """Result of an installation check."""

    platform: PlatformKey | None = None
    package: str | None = None
    resolution: ResolutionResult | None = None
    warnings: list[str] = field(default_factory=list)
    error: str | None = None
    hint: str | None = None

    @property
    def verified(self) -> bool:
        return isinstance(self.resolution, Found)

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": str(self.platform) if self.platform else None,
            "package": self.package,
            "verified": self.verified,
            "path": self.resolution.path if isinstance(self.resolution, Found) else None,
            "warnings": self.warnings,
            "error": self.error,
            "hint": self.hint,
        }


def not_found_warnings(package: str) -> list[str]:
    """Likely causes of a missing platform package."""
    return [
        f'Platform package "{package}" not found.',
        "Optional dependencies may have been skipped (--no-optional / --omit=optional).",
        f'Package "{package}" may not be available for this platform.',
        "monox will attempt to find the binary at runtime.",
    ]


def verify_installation(
    *,
    cwd: Path | None = None,
    package_root: Path | None = None,
    platform_key: PlatformKey | None = None,
) -> VerifyResult:
    """Check that the platform binary resolves, without fixing anything."""
    work_dir = cwd or Path.cwd()
    root = package_root or find_package_root(work_dir) or work_dir

    result = VerifyResult(platform=platform_key or resolve_platform())
    try:
        entry = lookup_package(result.platform)
    except UnsupportedPlatformError as e:
        result.error = e.message
        result.hint = e.hint
        return result

    result.package = entry.package
    result.resolution = locate(entry, root)
    if not result.verified:
        result.warnings = not_found_warnings(entry.package)
    return result
