"""
Domain models for the installer.

    from monox_installer.core.models import PlatformKey, Found, NotFound, InstallOutcome
"""

from monox_installer.core.models.config import InstallerConfig, ReleaseSource
from monox_installer.core.models.platform import (
    PlatformKey,
    PlatformPackageEntry,
    ReleaseAsset,
)
from monox_installer.core.models.resolution import (
    Found,
    InstallOutcome,
    NotFound,
    ResolutionResult,
)

__all__ = [
    "Found",
    "InstallOutcome",
    # config.py
    "InstallerConfig",
    "NotFound",
    # platform.py
    "PlatformKey",
    "PlatformPackageEntry",
    "ReleaseAsset",
    "ReleaseSource",
    # resolution.py
    "ResolutionResult",
]
