"""
Platform info use case — what this host maps to, for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from monox_installer.core.errors import UnsupportedPlatformError
from monox_installer.core.models.config import InstallerConfig
from monox_installer.core.models.platform import PlatformKey
from monox_installer.core.services.binary_install.data.platforms import ASSET_FILENAME_TEMPLATE
from monox_installer.core.services.binary_install.detection.package_manager import (
    PackageManagerInfo,
    detect_package_manager,
)
from monox_installer.core.services.binary_install.detection.platform import (
    lookup_package,
    lookup_release_triplet,
    resolve_platform,
    supported_platforms,
)


@dataclass
class PlatformInfo:
    """Host platform and its mappings."""

    platform: PlatformKey
    package: str | None = None
    release_asset: str | None = None
    package_manager: PackageManagerInfo = field(default_factory=PackageManagerInfo)
    supported: list[str] = field(default_factory=list)

    @property
    def is_supported(self) -> bool:
        return self.package is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform.to_dict(),
            "key": str(self.platform),
            "supported": self.is_supported,
            "package": self.package,
            "release_asset": self.release_asset,
            "package_manager": self.package_manager.to_dict(),
            "supported_platforms": self.supported,
        }


def get_platform_info(
    config: InstallerConfig | None = None,
    *,
    platform_key: PlatformKey | None = None,
) -> PlatformInfo:
    config = config or InstallerConfig()
    info = PlatformInfo(
        platform=platform_key or resolve_platform(),
        package_manager=detect_package_manager(),
        supported=supported_platforms(),
    )

    try:
        info.package = lookup_package(info.platform).package
    except UnsupportedPlatformError:
        info.package = None

    try:
        triplet = lookup_release_triplet(info.platform)
    except UnsupportedPlatformError:
        triplet = None
    if triplet:
        info.release_asset = ASSET_FILENAME_TEMPLATE.format(
            binary=config.binary_name, triplet=triplet,
        )

    return info
